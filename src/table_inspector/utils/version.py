"""
Server version parsing and comparison

Version numbers follow the Percona Server nomenclature
(https://docs.percona.com/percona-server/8.0/server-version-numbers.html):
in 8.0.29-21.3, 8.0.29 is the base version and 21.3 the release/build info.
"""
import logging
import re
from typing import Optional, Tuple

from table_inspector.core.config import VersionConfig
from table_inspector.core.errors import InvalidVersion
from table_inspector.models.version import Version

logger = logging.getLogger(__name__)


class VersionComparator:
    """Validates, normalizes and compares version strings"""

    def __init__(self, config: Optional[VersionConfig] = None):
        self.config = config or VersionConfig()
        self.pattern = self._build_pattern(self.config)
        self.major_width = max(len(str(major)) for major in self.config.allowed_majors)
        self.minor_width = max(2, self.config.max_minor_digits)
        self.patch_width = max(2, self.config.max_patch_digits)

    @staticmethod
    def _build_pattern(config: VersionConfig) -> re.Pattern:
        majors = sorted({str(major) for major in config.allowed_majors}, key=len, reverse=True)
        return re.compile(
            rf"(?P<major>{'|'.join(majors)})"
            rf"\.(?P<minor>[0-9]{{1,{config.max_minor_digits}}})"
            rf"\.(?P<patch>[0-9]{{1,{config.max_patch_digits}}})"
            r"(?:-(?P<release>[^\n]*))?"
        )

    def validate(self, version: str) -> bool:
        """Check that a version string conforms to the accepted grammar"""
        if not isinstance(version, str):
            return False
        return self.pattern.fullmatch(version) is not None

    def _split(self, version: str) -> Tuple[str, str, str, Optional[str]]:
        if not isinstance(version, str):
            raise InvalidVersion(version)
        match = self.pattern.fullmatch(version)
        if match is None:
            logger.debug(f"Rejected version string: {version!r}")
            raise InvalidVersion(version)
        return match.group('major'), match.group('minor'), match.group('patch'), match.group('release')

    def parse(self, version: str) -> Version:
        major, minor, patch, release = self._split(version)
        return Version(int(major), int(minor), int(patch), release)

    def major(self, version: str) -> str:
        return self._split(version)[0]

    def minor(self, version: str) -> str:
        """Minor part as "minor.patch", e.g. "0.30" for 8.0.30"""
        _, minor, patch, _ = self._split(version)
        return f"{minor}.{patch}"

    def release(self, version: str) -> str:
        """Release suffix prefixed by "-", or "" when there is none"""
        release = self._split(version)[3]
        if release is None:
            return ""
        return f"-{release}"

    def normalize(self, version: str) -> str:
        """
        Fixed-width form of the base version, e.g. 8.0.30 becomes 80030

        Args:
            version: Version string

        Returns:
            Zero-padded concatenation of major, minor and patch
        """
        parsed = self.parse(version)
        return (
            f"{parsed.major:0{self.major_width}d}"
            f"{parsed.minor:0{self.minor_width}d}"
            f"{parsed.patch:0{self.patch_width}d}"
        )

    def compare(self, version1: str, version2: str) -> int:
        """
        Compare two version strings, ignoring release suffixes

        Returns:
            -1 if version1 is older than version2, 0 if equal, 1 if newer
        """
        norm1 = self.normalize(version1)
        norm2 = self.normalize(version2)

        if norm1 < norm2:
            return -1
        if norm1 > norm2:
            return 1
        return 0


_default = VersionComparator()

validate = _default.validate
parse = _default.parse
major = _default.major
minor = _default.minor
release = _default.release
normalize = _default.normalize
compare = _default.compare
