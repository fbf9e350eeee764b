"""
Error types raised by the table inspector
"""
from typing import Any, Dict, Optional

EXCERPT_LENGTH = 200


def _excerpt(text: Any) -> Optional[str]:
    if text is None:
        return None
    return str(text)[:EXCERPT_LENGTH]


class TableInspectorError(Exception):
    """Base error for table inspection failures"""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class MalformedDefinition(TableInspectorError):
    """Definition text has no quoted CREATE TABLE/VIEW header or is inconsistent"""

    def __init__(self, message: str, definition: Optional[str] = None):
        super().__init__(
            message=message,
            code="MALFORMED_DEFINITION",
            details={"definition": _excerpt(definition)},
        )


class EngineNotFound(TableInspectorError):
    """No ENGINE= option in the table trailer"""

    def __init__(self, definition: Optional[str] = None):
        super().__init__(
            message="Could not determine the table engine",
            code="ENGINE_NOT_FOUND",
            details={"definition": _excerpt(definition)},
        )


class CharsetNotFound(TableInspectorError):
    """No DEFAULT CHARSET= option in the table trailer"""

    def __init__(self, definition: Optional[str] = None):
        super().__init__(
            message="Could not determine the table default charset",
            code="CHARSET_NOT_FOUND",
            details={"definition": _excerpt(definition)},
        )


class IndexNotFound(TableInspectorError):
    """Requested index does not exist in the table"""

    def __init__(self, index_name: str, table_name: Optional[str] = None):
        super().__init__(
            message=f"Index '{index_name}' does not exist in table",
            code="INDEX_NOT_FOUND",
            details={"index": index_name, "table": table_name},
        )


class NoUsableIndex(TableInspectorError):
    """Table has no BTREE index to pick a default from"""

    def __init__(self, table_name: Optional[str] = None):
        super().__init__(
            message=f"Table '{table_name}' has no usable BTREE index",
            code="NO_USABLE_INDEX",
            details={"table": table_name},
        )


class InvalidVersion(TableInspectorError):
    """Version string does not match the accepted grammar"""

    def __init__(self, version: Optional[str]):
        super().__init__(
            message=f"Invalid version format: {version!r}",
            code="INVALID_VERSION",
            details={"version": _excerpt(version)},
        )
