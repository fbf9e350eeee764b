"""
Configuration management for the table inspector
"""
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_NUMERIC_TYPE_TOKENS = ["int", "float", "double", "decimal", "year"]


class VersionConfig(BaseModel):
    """Accepted server version grammar"""
    allowed_majors: List[int] = Field(default_factory=lambda: [5, 8])
    max_minor_digits: int = 1
    max_patch_digits: int = 2

    @field_validator('allowed_majors')
    @classmethod
    def _check_majors(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("allowed_majors must not be empty")
        if any(major < 0 for major in value):
            raise ValueError("allowed_majors must be non-negative")
        return value

    @field_validator('max_minor_digits', 'max_patch_digits')
    @classmethod
    def _check_width(cls, value: int) -> int:
        if value < 1:
            raise ValueError("digit width must be at least 1")
        return value


class ParserConfig(BaseModel):
    """Table definition parser configuration"""
    numeric_type_tokens: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NUMERIC_TYPE_TOKENS)
    )


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    format: str = "text"
    file: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class Config(BaseSettings):
    """Main configuration class"""
    model_config = SettingsConfigDict(
        env_prefix="TABLE_INSPECTOR_",
        env_nested_delimiter="__",
    )

    version: VersionConfig = Field(default_factory=VersionConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "Config":
        """Load configuration from YAML file"""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)

    def create_builder(self, **kwargs):
        """Table builder using the configured numeric type tokens"""
        from table_inspector.handlers.table_builder import TableBuilder
        return TableBuilder(numeric_tokens=self.parser.numeric_type_tokens, **kwargs)

    def create_selector(self, **kwargs):
        from table_inspector.handlers.index_selector import IndexSelector
        return IndexSelector(**kwargs)

    def create_comparator(self):
        """Version comparator using the configured grammar"""
        from table_inspector.utils.version import VersionComparator
        return VersionComparator(self.version)
