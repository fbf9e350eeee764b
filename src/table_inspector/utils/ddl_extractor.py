"""
Pattern based extraction of fragments from SHOW CREATE TABLE output

Every rule works on single lines of the server's pretty-printed output and
requires quoted identifiers (SQL_QUOTE_SHOW_CREATE=1).
"""
import logging
import re
from typing import List, NamedTuple, Optional, Tuple

from table_inspector.core.errors import CharsetNotFound, EngineNotFound, MalformedDefinition
from table_inspector.utils.quoter import QUOTE_CHAR, unquote

logger = logging.getLogger(__name__)

# `name`, with doubled backticks allowed inside
_QUOTED = r"`(?:[^`]|``)+`"
_QUALIFIED = rf"(?:{_QUOTED}\.)?{_QUOTED}"
_QUOTED_LIST = r"(?:[^()`]|`(?:[^`]|``)*`)+"


class ColumnLine(NamedTuple):
    name: str
    data_type: str
    rest: str
    line: str


class KeyLine(NamedTuple):
    name: str
    modifier: str
    columns: str
    options: str
    line: str


class ForeignKeyLine(NamedTuple):
    name: str
    columns: str
    referenced_table: str
    referenced_columns: str
    options: str
    line: str


class DDLExtractor:
    """Extracts table name, options, columns and keys from a table definition"""

    HEADER_PATTERN = re.compile(
        rf"\bCREATE (?P<temporary>TEMPORARY )?TABLE (?:IF NOT EXISTS )?(?P<name>{_QUALIFIED})",
        re.IGNORECASE,
    )
    VIEW_PATTERN = re.compile(
        rf"\bCREATE (?:[^\n]*? )?VIEW (?P<name>{_QUALIFIED})",
        re.IGNORECASE,
    )
    TRAILER_PATTERN = re.compile(r"^\)[^\n]*$", re.MULTILINE)
    ENGINE_PATTERN = re.compile(r"^\) ENGINE=(?P<engine>[^\s,]+)", re.MULTILINE)
    CHARSET_PATTERN = re.compile(r"DEFAULT CHARSET=(?P<charset>[^\s,]+)")
    COLLATION_PATTERN = re.compile(r"COLLATE=(?P<collation>[^\s,]+)")
    AUTO_INCREMENT_PATTERN = re.compile(r"AUTO_INCREMENT=(?P<value>[0-9]+)")
    COLUMN_PATTERN = re.compile(
        rf"^  (?P<name>{_QUOTED}) (?P<type>\S+)(?: (?P<rest>.*))?$",
        re.MULTILINE,
    )
    PRIMARY_KEY_PATTERN = re.compile(r"^  PRIMARY KEY \((?P<rest>.*)$", re.MULTILINE)
    KEY_PATTERN = re.compile(
        rf"^  (?:(?P<modifier>FULLTEXT|SPATIAL|UNIQUE) )?KEY (?P<name>{_QUOTED}) \((?P<rest>.*)$",
        re.MULTILINE,
    )
    FOREIGN_KEY_PATTERN = re.compile(
        rf"^  CONSTRAINT (?P<name>{_QUOTED}) FOREIGN KEY \((?P<columns>{_QUOTED_LIST})\)"
        rf" REFERENCES (?P<table>{_QUALIFIED}) \((?P<ref_columns>{_QUOTED_LIST})\)"
        r"(?P<options>.*?),?$",
        re.MULTILINE,
    )

    def extract_table_name(self, ddl: str) -> Tuple[Optional[str], str, bool]:
        """
        Extract the table (or view) name from the CREATE header

        Args:
            ddl: Table definition text

        Returns:
            Tuple of (schema or None, name, temporary flag)

        Raises:
            MalformedDefinition: If there is no quoted CREATE TABLE/VIEW header
        """
        if not ddl or not ddl.strip():
            raise MalformedDefinition("Empty table definition provided", ddl)

        match = self.HEADER_PATTERN.search(ddl)
        temporary = False
        if match:
            temporary = match.group('temporary') is not None
        else:
            match = self.VIEW_PATTERN.search(ddl)
        if match is None:
            raise MalformedDefinition(
                "No quoted CREATE TABLE or CREATE VIEW header found; "
                "unquoted definitions are not supported",
                ddl,
            )

        schema, name = unquote(match.group('name'), "")
        return schema or None, name, temporary

    def _trailer(self, ddl: str) -> str:
        trailers = list(self.TRAILER_PATTERN.finditer(ddl))
        if not trailers:
            return ddl
        return ddl[trailers[-1].start():]

    def extract_engine(self, ddl: str) -> str:
        """Storage engine from the ") ENGINE=..." line"""
        match = self.ENGINE_PATTERN.search(ddl)
        if match is None:
            raise EngineNotFound(self._trailer(ddl))
        return match.group('engine')

    def extract_charset(self, ddl: str) -> str:
        """Default character set from the trailer"""
        match = self.CHARSET_PATTERN.search(self._trailer(ddl))
        if match is None:
            raise CharsetNotFound(self._trailer(ddl))
        return match.group('charset')

    def extract_collation(self, ddl: str) -> Optional[str]:
        match = self.COLLATION_PATTERN.search(self._trailer(ddl))
        return match.group('collation') if match else None

    def extract_auto_increment(self, ddl: str) -> Optional[int]:
        match = self.AUTO_INCREMENT_PATTERN.search(self._trailer(ddl))
        return int(match.group('value')) if match else None

    def extract_columns(self, ddl: str) -> List[ColumnLine]:
        """Column lines in source order"""
        columns = []
        for match in self.COLUMN_PATTERN.finditer(ddl):
            _, name = unquote(match.group('name'))
            columns.append(ColumnLine(
                name=name,
                data_type=match.group('type').rstrip(','),
                rest=match.group('rest') or "",
                line=match.group(0).strip().rstrip(','),
            ))
        return columns

    @staticmethod
    def _split_column_list(rest: str) -> Optional[Tuple[str, str]]:
        """
        Split "cols) options," at the parenthesis closing the column list

        Returns None when the list is not closed on the same line.
        """
        depth = 1
        quote = None
        for i, char in enumerate(rest):
            if quote:
                if char == quote:
                    quote = None
            elif char in (QUOTE_CHAR, "'"):
                quote = char
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    options = rest[i + 1:].strip().rstrip(',').strip()
                    return rest[:i], options
        return None

    def extract_primary_key(self, ddl: str) -> Optional[KeyLine]:
        """The PRIMARY KEY line, if any"""
        match = self.PRIMARY_KEY_PATTERN.search(ddl)
        if match is None:
            return None
        split = self._split_column_list(match.group('rest'))
        if split is None:
            logger.debug(f"Unterminated primary key column list: {match.group(0)!r}")
            return None
        columns, options = split
        return KeyLine(
            name="PRIMARY",
            modifier="PRIMARY",
            columns=columns,
            options=options,
            line=match.group(0).strip().rstrip(','),
        )

    def extract_secondary_keys(self, ddl: str) -> List[KeyLine]:
        """[FULLTEXT|SPATIAL|UNIQUE] KEY lines in source order"""
        keys = []
        for match in self.KEY_PATTERN.finditer(ddl):
            split = self._split_column_list(match.group('rest'))
            if split is None:
                logger.debug(f"Unterminated key column list: {match.group(0)!r}")
                continue
            columns, options = split
            _, name = unquote(match.group('name'))
            keys.append(KeyLine(
                name=name,
                modifier=match.group('modifier') or "",
                columns=columns,
                options=options,
                line=match.group(0).strip().rstrip(','),
            ))
        return keys

    def extract_foreign_keys(self, ddl: str) -> List[ForeignKeyLine]:
        """CONSTRAINT ... FOREIGN KEY lines in source order"""
        foreign_keys = []
        for match in self.FOREIGN_KEY_PATTERN.finditer(ddl):
            _, name = unquote(match.group('name'))
            foreign_keys.append(ForeignKeyLine(
                name=name,
                columns=match.group('columns'),
                referenced_table=match.group('table'),
                referenced_columns=match.group('ref_columns'),
                options=match.group('options').strip(),
                line=match.group(0).strip().rstrip(','),
            ))
        return foreign_keys
