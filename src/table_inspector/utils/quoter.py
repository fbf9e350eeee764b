"""
Quoting utilities for identifiers and values

Identifiers use the MySQL backtick; a backtick inside an identifier is
written as two backticks.
"""
from typing import Iterable, List, Optional, Tuple

QUOTE_CHAR = "`"


def quote(parts: Iterable[str]) -> str:
    """
    Quote identifier parts and join them with "."

    Args:
        parts: Identifier parts, e.g. ["db", "table"]

    Returns:
        Qualified name such as `db`.`table`, or "" for no parts
    """
    doubled = QUOTE_CHAR * 2
    return ".".join(
        f"{QUOTE_CHAR}{part.replace(QUOTE_CHAR, doubled)}{QUOTE_CHAR}" for part in parts
    )


def split_unquoted(text: str, separator: str, maxsplit: int = -1) -> List[str]:
    """
    Split text on a separator at the top level

    A separator inside a quoted identifier, a string literal or parentheses
    does not split, so `a`,(concat(`b`,`c`)) yields two parts.
    """
    parts = []
    current = []
    quote_char = None
    depth = 0

    for char in text:
        if quote_char is not None:
            if char == quote_char:
                # a doubled quote closes and reopens, leaving the state unchanged
                quote_char = None
        elif char in (QUOTE_CHAR, "'"):
            quote_char = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0 and maxsplit != 0:
            parts.append("".join(current))
            current = []
            maxsplit -= 1
            continue
        current.append(char)

    parts.append("".join(current))
    return parts



def _unquote_part(part: str) -> str:
    if part.startswith(QUOTE_CHAR):
        part = part[1:]
    if part.endswith(QUOTE_CHAR):
        part = part[:-1]
    return part.replace(QUOTE_CHAR * 2, QUOTE_CHAR)


def unquote(qualified: str, default_namespace: str = "") -> Tuple[str, str]:
    """
    Split a possibly quoted, possibly qualified name into (namespace, identifier)

    Args:
        qualified: Name such as `db`.`tbl`, db.tbl or `tbl`
        default_namespace: Namespace used when the name is not qualified

    Returns:
        Tuple of unquoted namespace and identifier
    """
    parts = split_unquoted(qualified, ".", maxsplit=1)
    if len(parts) == 2:
        namespace, identifier = parts
        return _unquote_part(namespace), _unquote_part(identifier)
    return default_namespace, _unquote_part(parts[0])


def quote_value(value: Optional[str], data_type: str = "char") -> str:
    """
    Quote a value for use in a SQL statement

    None becomes NULL; only "char" values are quoted, anything else is
    returned as-is.
    """
    if value is None:
        return "NULL"
    if data_type != "char":
        return value
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def escape_like(pattern: str) -> str:
    """Quote a LIKE pattern, escaping the % and _ wildcards"""
    return "'" + pattern.replace("%", "\\%").replace("_", "\\_") + "'"


def serialize_list(values: Iterable[str]) -> str:
    """Join values with commas, escaping embedded commas and \\N markers"""
    return ",".join(
        value.replace(",", "\\,").replace("\\N", "\\\\N") for value in values
    )


def deserialize_list(text: str) -> List[str]:
    """Inverse of serialize_list"""
    if not text:
        return []

    values = []
    current = []
    i = 0
    while i < len(text):
        if text.startswith("\\,", i):
            current.append(",")
            i += 2
        elif text.startswith("\\\\N", i):
            current.append("\\N")
            i += 3
        elif text[i] == ",":
            values.append("".join(current))
            current = []
            i += 1
        else:
            current.append(text[i])
            i += 1

    values.append("".join(current))
    return values


def split_set_vars(text: str) -> List[str]:
    """
    Split a comma delimited variable list, keeping commas inside double quotes

    Example: 'innodb_lock_wait_timeout=1,sql_mode="A,B"' gives
    ['innodb_lock_wait_timeout=1', 'sql_mode="A,B"']. Empty items are dropped.
    """
    items = []
    current = []
    in_quote = False

    for char in text:
        if char == '"':
            in_quote = not in_quote
        elif char == "," and not in_quote:
            items.append("".join(current))
            current = []
            continue
        current.append(char)

    items.append("".join(current))
    return [item for item in items if item]
