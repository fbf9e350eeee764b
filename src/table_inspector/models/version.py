"""
Server version model
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Version:
    """
    Parsed server version, e.g. 8.0.29-21.3

    The release suffix takes part in equality but ordering only looks at
    (major, minor, patch).
    """
    major: int
    minor: int
    patch: int
    release: Optional[str] = None

    @classmethod
    def parse(cls, version: str) -> "Version":
        """Validate and split a version string with the default comparator"""
        from table_inspector.utils.version import parse
        return parse(version)

    @property
    def triple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple < other.triple

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple <= other.triple

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple > other.triple

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.triple >= other.triple

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.release is None:
            return base
        return f"{base}-{self.release}"
