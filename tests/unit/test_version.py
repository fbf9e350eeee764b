"""
Unit tests for server version handling
"""
import pytest

from table_inspector.core.config import VersionConfig
from table_inspector.core.errors import InvalidVersion
from table_inspector.models.version import Version
from table_inspector.utils import version
from table_inspector.utils.version import VersionComparator


class TestValidate:
    """Test version validation"""

    @pytest.mark.parametrize("value", [
        "8a.0.30",  # alpha in major
        "8.0c.30",  # alpha in minor
        "8.0.30d",  # alpha in patch
        "4.0.30",   # too old
        "9.0.30",   # too new
        "8.0.300",
        "8.10.1",
        "8.0",
        "8.0.30\n",
        "",
    ])
    def test_rejects(self, value):
        """Test strings outside the grammar"""
        assert version.validate(value) is False

    @pytest.mark.parametrize("value", [
        "8.0.30", "5.7.9", "8.0.29-21.3", "8.0.30-rel", "5.7.44-log",
    ])
    def test_accepts(self, value):
        """Test well-formed versions"""
        assert version.validate(value) is True

    def test_non_string(self):
        """Test that non-string input is invalid"""
        assert version.validate(None) is False


class TestParts:
    """Test major, minor and release extraction"""

    def test_major(self):
        """Test major part"""
        assert version.major("8.0.30-rel") == "8"

    def test_minor(self):
        """Test minor part joined with the patch level"""
        assert version.minor("8.0.30-rel") == "0.30"

    def test_release(self):
        """Test release suffix"""
        assert version.release("8.0.30-rel") == "-rel"
        assert version.release("8.0.29-21.3") == "-21.3"
        assert version.release("8.0.30") == ""

    @pytest.mark.parametrize("func", [version.major, version.minor, version.release,
                                      version.normalize, version.parse])
    def test_invalid_version_raises(self, func):
        """Test that every accessor rejects invalid input"""
        with pytest.raises(InvalidVersion) as exc_info:
            func("9.0.30")

        assert exc_info.value.code == "INVALID_VERSION"
        assert exc_info.value.details['version'] == "9.0.30"

    def test_parse(self):
        """Test parsing into a Version"""
        assert version.parse("8.0.29-21.3") == Version(8, 0, 29, "21.3")


class TestNormalizeAndCompare:
    """Test normalization and comparison"""

    def test_normalize(self):
        """Test fixed width normalization"""
        assert version.normalize("8.0.30-rel") == "80030"
        assert version.normalize("8.0.9-rel") == "80009"
        assert version.normalize("5.7.55") == "50755"

    def test_compare(self):
        """Test ordering of versions"""
        assert version.compare("8.0.30-rel", "5.7.55") == 1
        assert version.compare("5.7.55", "8.0.30-rel") == -1
        assert version.compare("8.0.9", "8.0.10") == -1

    def test_compare_ignores_release(self):
        """Test that a release suffix difference alone compares equal"""
        assert version.compare("8.0.30-rel", "8.0.30-rel1") == 0
        assert version.compare("8.0.30", "8.0.30-rel") == 0

    def test_compare_invalid(self):
        """Test that either invalid input raises"""
        with pytest.raises(InvalidVersion):
            version.compare("8.0.30", "10.0.1")
        with pytest.raises(InvalidVersion):
            version.compare("4.1.1", "8.0.30")


class TestConfiguredComparator:
    """Test comparator with a widened grammar"""

    @pytest.fixture
    def comparator(self):
        return VersionComparator(VersionConfig(
            allowed_majors=[5, 8, 10, 11],
            max_minor_digits=2,
        ))

    def test_validate_wider_grammar(self, comparator):
        """Test multi-digit majors and minors"""
        assert comparator.validate("10.11.2") is True
        assert comparator.validate("5.10.1") is True
        assert comparator.validate("9.0.1") is False
        assert comparator.validate("1.0.1") is False

    def test_normalize_widths(self, comparator):
        """Test that the major is padded to the widest allowed major"""
        assert comparator.normalize("10.11.2") == "101102"
        assert comparator.normalize("8.0.30") == "080030"

    def test_compare(self, comparator):
        """Test ordering across major widths"""
        assert comparator.compare("10.11.2", "8.0.30") == 1
        assert comparator.compare("5.10.1", "5.9.99") == 1

    def test_default_grammar_unchanged(self):
        """Test that the default comparator keeps the strict grammar"""
        assert VersionComparator().validate("10.11.2") is False
