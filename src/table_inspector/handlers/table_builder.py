"""
Builds Table models from CREATE TABLE statements
"""
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from table_inspector.core.config import DEFAULT_NUMERIC_TYPE_TOKENS
from table_inspector.core.errors import MalformedDefinition
from table_inspector.models.schema import (
    PRIMARY_KEY_NAME, Column, ForeignKey, Key, KeyColumn, KeyKind, Table,
)
from table_inspector.utils.ddl_extractor import (
    ColumnLine, DDLExtractor, ForeignKeyLine, KeyLine,
)
from table_inspector.utils.quoter import split_unquoted, unquote

Observer = Callable[[str, Any], None]

# `name`(prefix), possibly followed by ASC/DESC
_KEY_COLUMN_PATTERN = re.compile(r"^\s*(?P<name>`(?:[^`]|``)*`)(?:\((?P<prefix>[0-9]+)\))?")


class TableBuilder:
    """Assembles extracted DDL fragments into an immutable Table"""

    def __init__(self, extractor: Optional[DDLExtractor] = None,
                 numeric_tokens: Optional[Iterable[str]] = None,
                 logger: Optional[logging.Logger] = None,
                 observer: Optional[Observer] = None):
        self.extractor = extractor or DDLExtractor()
        self.numeric_tokens = tuple(
            DEFAULT_NUMERIC_TYPE_TOKENS if numeric_tokens is None else numeric_tokens
        )
        self.logger = logger or logging.getLogger(__name__)
        self.observer = observer

    def _trace(self, message: str, value: Any) -> None:
        self.logger.debug(f"{message}: {value!r}")
        if self.observer is not None:
            self.observer(message, value)

    def build(self, ddl: str) -> Table:
        """
        Parse a whole CREATE TABLE statement

        Args:
            ddl: Output of SHOW CREATE TABLE, with quoted identifiers

        Returns:
            Table model

        Raises:
            MalformedDefinition: If the header is missing or a foreign key is inconsistent
            EngineNotFound: If the ENGINE option is missing
            CharsetNotFound: If the DEFAULT CHARSET option is missing
        """
        text = ddl.replace("\r\n", "\n") if ddl else ddl

        schema, name, temporary = self.extractor.extract_table_name(text)
        self._trace("table name", name)

        engine = self.extractor.extract_engine(text)
        self._trace("table engine", engine)

        charset = self.extractor.extract_charset(text)
        self._trace("table charset", charset)

        columns = self.build_columns(self.extractor.extract_columns(text))
        if not columns:
            self._trace("no column definitions for table", name)

        keys = self.build_keys(
            self.extractor.extract_primary_key(text),
            self.extractor.extract_secondary_keys(text),
        )
        foreign_keys = self.build_foreign_keys(self.extractor.extract_foreign_keys(text))

        return Table(
            name=name,
            schema=schema,
            engine=engine,
            charset=charset,
            collation=self.extractor.extract_collation(text),
            auto_increment=self.extractor.extract_auto_increment(text),
            temporary=temporary,
            columns=columns,
            keys=keys,
            foreign_keys=foreign_keys,
            definition=ddl,
        )

    def build_columns(self, lines: List[ColumnLine]) -> Dict[str, Column]:
        columns = {}
        for position, line in enumerate(lines, start=1):
            column = Column(
                name=line.name,
                position=position,
                data_type=line.data_type,
                definition=line.line,
                nullable="NOT NULL" not in line.line,
                generated="GENERATED ALWAYS AS" in line.line,
                numeric=any(token in line.data_type for token in self.numeric_tokens),
                autoinc="AUTO_INCREMENT" in line.rest,
            )
            if column.name in columns:
                raise MalformedDefinition(f"Duplicate column '{column.name}'", line.line)
            columns[column.name] = column
            self._trace("column", column)
        return columns

    def parse_key_columns(self, text: str) -> Dict[str, KeyColumn]:
        """
        Parse an index column list such as `c`,`b`(10),`a`

        Args:
            text: Column list without the enclosing parentheses

        Returns:
            Ordered mapping of column name to KeyColumn
        """
        key_columns = {}
        for part in split_unquoted(text, ","):
            match = _KEY_COLUMN_PATTERN.match(part)
            if match:
                _, name = unquote(match.group('name'))
                prefix = int(match.group('prefix')) if match.group('prefix') else None
            else:
                # functional key part, e.g. ((lower(`name`)))
                name, prefix = part.strip(), None
            key_columns[name] = KeyColumn(name=name, prefix=prefix or None, definition=part)
        return key_columns

    def build_key(self, line: KeyLine) -> Key:
        kind = KeyKind.BTREE
        if "SPATIAL" in line.modifier:
            kind = KeyKind.RTREE
        if "FULLTEXT" in line.modifier:
            kind = KeyKind.TEXT

        primary = line.modifier == "PRIMARY"
        return Key(
            name=PRIMARY_KEY_NAME if primary else line.name,
            kind=kind,
            primary=primary,
            unique=primary or "UNIQUE" in line.modifier,
            columns=self.parse_key_columns(line.columns),
            definition=line.line,
        )

    def build_keys(self, primary: Optional[KeyLine],
                   secondary: List[KeyLine]) -> Dict[str, Key]:
        keys = {}
        lines = ([primary] if primary else []) + secondary
        for line in lines:
            key = self.build_key(line)
            keys[key.name] = key
            self._trace("key", key)
        return keys

    def build_foreign_keys(self, lines: List[ForeignKeyLine]) -> Dict[str, ForeignKey]:
        foreign_keys = {}
        for line in lines:
            columns = [unquote(col.strip())[1] for col in split_unquoted(line.columns, ",")]
            ref_columns = [
                unquote(col.strip())[1] for col in split_unquoted(line.referenced_columns, ",")
            ]
            if len(columns) != len(ref_columns):
                raise MalformedDefinition(
                    f"Foreign key '{line.name}' has {len(columns)} columns "
                    f"but references {len(ref_columns)}",
                    line.line,
                )
            ref_schema, ref_table = unquote(line.referenced_table, "")
            foreign_keys[line.name] = ForeignKey(
                name=line.name,
                columns=columns,
                referenced_schema=ref_schema or None,
                referenced_table=ref_table,
                referenced_columns=ref_columns,
                definition=line.line,
            )
            self._trace("foreign key", foreign_keys[line.name])
        return foreign_keys


_default = TableBuilder()


def parse_table(ddl: str) -> Table:
    """Build a Table with the default builder"""
    return _default.build(ddl)
