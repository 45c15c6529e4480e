"""Tests for three part version parsing and incrementing."""

from __future__ import annotations

import pytest

from autover.core.version import IncrementType, ThreePartVersion, get_next_version
from autover.exceptions import InvalidVersionError


class TestThreePartVersionParse:
    """Tests for ThreePartVersion.parse()."""

    def test_parse_simple(self):
        """Parse a plain three part version."""
        version = ThreePartVersion.parse("1.2.3")

        assert version.major == 1
        assert version.minor == 2
        assert version.patch == 3
        assert version.prerelease_label is None

    def test_parse_with_label(self):
        """Parse a version with a pre-release label."""
        version = ThreePartVersion.parse("2.0.0-beta")

        assert version == ThreePartVersion(2, 0, 0, "beta")

    def test_leading_zeros(self):
        """Leading zeros parse as normal integers."""
        assert ThreePartVersion.parse("01.002.0") == ThreePartVersion(1, 2, 0)

    @pytest.mark.parametrize("text", ["1.2.3", "0.0.0", "10.20.30", "1.2.3-rc1", "4.5.6-alpha.1"])
    def test_round_trip(self, text: str):
        """Formatting a parsed version gives back the original text."""
        assert str(ThreePartVersion.parse(text)) == text

    @pytest.mark.parametrize(
        "text",
        [
            "1.2",
            "1.2.3.4",
            "1.2.x",
            "a.b.c",
            "1.2.3-beta-2",
            "",
            "1..3",
            " 1.2.3",
            "+1.2.3",
            "-1.2.3",
            "1.2.3\n",
        ],
    )
    def test_invalid_versions_raise(self, text: str):
        """Malformed versions raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="not a valid 3 part version"):
            ThreePartVersion.parse(text)

    def test_none_raises(self):
        """None is not a version."""
        with pytest.raises(InvalidVersionError):
            ThreePartVersion.parse(None)

    def test_empty_label_is_dropped(self):
        """A trailing dash without a label yields no label."""
        version = ThreePartVersion.parse("1.2.3-")

        assert version.prerelease_label is None
        assert str(version) == "1.2.3"


class TestThreePartVersionTryParse:
    """Tests for ThreePartVersion.try_parse()."""

    def test_valid(self):
        """A valid version is returned with True."""
        assert ThreePartVersion.try_parse("1.2.3") == (ThreePartVersion(1, 2, 3), True)

    def test_invalid_returns_sentinel(self):
        """An invalid version returns 0.0.1 with False."""
        version, valid = ThreePartVersion.try_parse("bad")

        assert not valid
        assert version == ThreePartVersion(0, 0, 1)

    def test_none_returns_sentinel(self):
        """None is handled without raising."""
        assert ThreePartVersion.try_parse(None) == (ThreePartVersion(0, 0, 1), False)


class TestThreePartVersionFormat:
    """Tests for str(ThreePartVersion)."""

    def test_without_label(self):
        assert str(ThreePartVersion(1, 0, 0)) == "1.0.0"

    def test_with_label(self):
        assert str(ThreePartVersion(1, 0, 0, "preview")) == "1.0.0-preview"

    def test_empty_label_omitted(self):
        """An empty label is not rendered."""
        assert str(ThreePartVersion(1, 0, 0, "")) == "1.0.0"

    def test_negative_component_rejected(self):
        """Version components cannot be negative."""
        with pytest.raises(InvalidVersionError):
            ThreePartVersion(1, -1, 0)

    def test_immutable(self):
        """Versions cannot be modified after creation."""
        version = ThreePartVersion(1, 2, 3)

        with pytest.raises(AttributeError):
            version.major = 2  # type: ignore[misc]


class TestGetNextVersion:
    """Tests for get_next_version()."""

    def test_patch(self):
        assert str(get_next_version("1.2.3", IncrementType.PATCH)) == "1.2.4"

    def test_minor_resets_patch(self):
        assert str(get_next_version("1.2.3", IncrementType.MINOR)) == "1.3.0"

    def test_major_resets_lower(self):
        assert str(get_next_version("1.2.3", IncrementType.MAJOR)) == "2.0.0"

    def test_patch_with_label(self):
        """The pre-release label is applied to the new version."""
        assert str(get_next_version("1.2.3", IncrementType.PATCH, "beta")) == "1.2.4-beta"

    def test_label_replaced(self):
        """An existing label is replaced, not kept."""
        assert str(get_next_version("1.2.3-alpha", IncrementType.MINOR, "beta")) == "1.3.0-beta"

    def test_label_removed(self):
        """Incrementing without a label drops the old one."""
        assert str(get_next_version("1.2.3-alpha", IncrementType.PATCH)) == "1.2.4"

    def test_none_only_changes_label(self):
        """NONE keeps the numbers and applies the label."""
        assert str(get_next_version("1.2.3", IncrementType.NONE, "rc")) == "1.2.3-rc"

    def test_label_alone_does_not_increment(self):
        """A label on the current version does not trigger an increment."""
        assert str(get_next_version("1.2.3-rc", IncrementType.NONE, "rc")) == "1.2.3-rc"

    def test_invalid_current_version_raises(self):
        """Malformed current versions raise the parse error."""
        with pytest.raises(InvalidVersionError):
            get_next_version("1.2", IncrementType.PATCH)


class TestIncrementType:
    """Tests for IncrementType ordering."""

    def test_values_match_configuration_names(self):
        """Enum values are the names stored in configuration files."""
        assert IncrementType("Major") is IncrementType.MAJOR
        assert IncrementType("None") is IncrementType.NONE

    def test_highest(self):
        """highest() picks the largest increment."""
        assert (
            IncrementType.highest(IncrementType.PATCH, IncrementType.MAJOR, IncrementType.MINOR)
            == IncrementType.MAJOR
        )

    def test_highest_empty(self):
        """highest() of nothing is NONE."""
        assert IncrementType.highest() == IncrementType.NONE
