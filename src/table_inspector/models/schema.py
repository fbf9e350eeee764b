"""
Data models for parsed table definitions
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

PRIMARY_KEY_NAME = "PRIMARY"


def _freeze(obj, name: str) -> None:
    """Replace a mapping attribute of a frozen dataclass with a read-only view"""
    object.__setattr__(obj, name, MappingProxyType(dict(getattr(obj, name))))


class KeyKind(Enum):
    """Index storage/lookup strategy"""
    BTREE = "BTREE"
    RTREE = "RTREE"  # SPATIAL
    TEXT = "TEXT"    # FULLTEXT


@dataclass(frozen=True)
class Column:
    """Column definition in a table"""
    name: str
    position: int
    data_type: str
    definition: str
    nullable: bool = True
    generated: bool = False
    numeric: bool = False
    autoinc: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'position': self.position,
            'data_type': self.data_type,
            'definition': self.definition,
            'nullable': self.nullable,
            'generated': self.generated,
            'numeric': self.numeric,
            'autoinc': self.autoinc
        }


@dataclass(frozen=True)
class KeyColumn:
    """Column reference inside a key, with an optional prefix length"""
    name: str
    prefix: Optional[int] = None
    definition: str = ""

    def to_dict(self) -> dict:
        return {'name': self.name, 'prefix': self.prefix, 'definition': self.definition}


@dataclass(frozen=True)
class Key:
    """Primary or secondary key of a table"""
    name: str
    kind: KeyKind = KeyKind.BTREE
    primary: bool = False
    unique: bool = False
    columns: Mapping[str, KeyColumn] = field(default_factory=dict)
    definition: str = ""

    def __post_init__(self):
        if self.primary and not self.unique:
            raise ValueError(f"Primary key '{self.name}' must be unique")
        if self.primary and self.kind != KeyKind.BTREE:
            raise ValueError(f"Primary key '{self.name}' must be a BTREE key")
        _freeze(self, 'columns')

    def __hash__(self):
        return hash((self.name, self.kind, self.definition))

    @property
    def column_names(self) -> List[str]:
        return list(self.columns)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'kind': self.kind.value,
            'primary': self.primary,
            'unique': self.unique,
            'columns': [col.to_dict() for col in self.columns.values()],
            'definition': self.definition
        }


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key constraint"""
    name: str
    columns: Tuple[str, ...]
    referenced_table: str
    referenced_columns: Tuple[str, ...]
    referenced_schema: Optional[str] = None
    definition: str = ""

    def __post_init__(self):
        if len(self.columns) != len(self.referenced_columns):
            raise ValueError(
                f"Foreign key '{self.name}' has {len(self.columns)} columns "
                f"but references {len(self.referenced_columns)}"
            )
        object.__setattr__(self, 'columns', tuple(self.columns))
        object.__setattr__(self, 'referenced_columns', tuple(self.referenced_columns))

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'columns': list(self.columns),
            'referenced_schema': self.referenced_schema,
            'referenced_table': self.referenced_table,
            'referenced_columns': list(self.referenced_columns),
            'definition': self.definition
        }


@dataclass(frozen=True)
class Table:
    """Table model built from a CREATE TABLE statement"""
    name: str
    engine: str
    charset: str
    columns: Mapping[str, Column] = field(default_factory=dict)
    keys: Mapping[str, Key] = field(default_factory=dict)
    foreign_keys: Mapping[str, ForeignKey] = field(default_factory=dict)
    definition: str = ""
    schema: Optional[str] = None
    collation: Optional[str] = None
    auto_increment: Optional[int] = None
    temporary: bool = False

    def __post_init__(self):
        _freeze(self, 'columns')
        _freeze(self, 'keys')
        _freeze(self, 'foreign_keys')

    def __hash__(self):
        return hash((self.schema, self.name, self.definition))

    @property
    def is_empty(self) -> bool:
        return not self.columns

    @property
    def primary_key(self) -> Optional[Key]:
        return self.keys.get(PRIMARY_KEY_NAME)

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name"""
        return self.columns.get(name)

    def get_key(self, name: str) -> Optional[Key]:
        """Get key by name"""
        return self.keys.get(name)

    def key_is_nullable(self, key: Key) -> bool:
        """
        Check whether any member column of a key accepts NULL

        Columns that are not defined in the table count as nullable.
        """
        for col_name in key.columns:
            column = self.columns.get(col_name)
            if column is None or column.nullable:
                return True
        return False

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'schema': self.schema,
            'engine': self.engine,
            'charset': self.charset,
            'collation': self.collation,
            'auto_increment': self.auto_increment,
            'temporary': self.temporary,
            'columns': [col.to_dict() for col in self.columns.values()],
            'keys': [key.to_dict() for key in self.keys.values()],
            'foreign_keys': [fk.to_dict() for fk in self.foreign_keys.values()]
        }
