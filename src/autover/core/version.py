"""Three part version parsing and manipulation.

Versions have the shape ``MAJOR.MINOR.PATCH`` with an optional
``-LABEL`` pre-release suffix, e.g. ``1.4.0`` or ``2.0.0-beta``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum

from autover.exceptions import InvalidVersionError

_NUMBER_PATTERN = re.compile(r"[0-9]+")
_INVALID_VERSION_MESSAGE = "The provided version number is not a valid 3 part version."


class IncrementType(str, Enum):
    """Which component of a version to increment.

    ``NONE`` leaves the numbers untouched and only applies a pre-release label.
    The values match the names stored in configuration files.
    """

    MAJOR = "Major"
    MINOR = "Minor"
    PATCH = "Patch"
    NONE = "None"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Ordering used when several sources disagree on an increment."""
        return _INCREMENT_RANKS[self]

    @classmethod
    def highest(cls, *types: IncrementType) -> IncrementType:
        """Return the largest increment of ``types`` (``NONE`` when empty)."""
        return max(types, key=lambda t: t.rank, default=cls.NONE)


_INCREMENT_RANKS = {
    IncrementType.NONE: 0,
    IncrementType.PATCH: 1,
    IncrementType.MINOR: 2,
    IncrementType.MAJOR: 3,
}


@dataclass(frozen=True, slots=True)
class ThreePartVersion:
    """An immutable ``major.minor.patch[-label]`` version."""

    major: int
    minor: int
    patch: int
    prerelease_label: str | None = None

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise InvalidVersionError(_INVALID_VERSION_MESSAGE)

    def __str__(self) -> str:
        if self.prerelease_label:
            return f"{self.major}.{self.minor}.{self.patch}-{self.prerelease_label}"
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, version: str | None) -> ThreePartVersion:
        """Parse a version string.

        Args:
            version: Text such as ``"1.2.3"`` or ``"1.2.3-rc"``

        Returns:
            The parsed version

        Raises:
            InvalidVersionError: If the text is not a valid three part version
        """
        if version is None:
            raise InvalidVersionError(_INVALID_VERSION_MESSAGE)

        full_parts = version.split("-")
        if len(full_parts) > 2:
            raise InvalidVersionError(_INVALID_VERSION_MESSAGE)
        prerelease_label = full_parts[1] if len(full_parts) == 2 else None

        parts = full_parts[0].split(".")
        if len(parts) != 3 or not all(_NUMBER_PATTERN.fullmatch(part) for part in parts):
            raise InvalidVersionError(_INVALID_VERSION_MESSAGE)

        major, minor, patch = (int(part) for part in parts)
        return cls(major, minor, patch, prerelease_label or None)

    @classmethod
    def try_parse(cls, version: str | None) -> tuple[ThreePartVersion, bool]:
        """Parse without raising.

        On failure the sentinel ``0.0.1`` is returned together with ``False``;
        callers must check the flag rather than the sentinel.
        """
        try:
            return cls.parse(version), True
        except InvalidVersionError:
            return cls(0, 0, 1), False

    def bump(
        self,
        increment_type: IncrementType,
        prerelease_label: str | None = None,
    ) -> ThreePartVersion:
        """Return the next version.

        Lower components are reset when a higher one is incremented. The
        pre-release label replaces any existing label.
        """
        if increment_type == IncrementType.MAJOR:
            return ThreePartVersion(self.major + 1, 0, 0, prerelease_label)
        if increment_type == IncrementType.MINOR:
            return ThreePartVersion(self.major, self.minor + 1, 0, prerelease_label)
        if increment_type == IncrementType.PATCH:
            return ThreePartVersion(self.major, self.minor, self.patch + 1, prerelease_label)
        return self.with_prerelease(prerelease_label)

    def with_prerelease(self, prerelease_label: str | None) -> ThreePartVersion:
        return replace(self, prerelease_label=prerelease_label or None)


def get_next_version(
    current_version: str | None,
    increment_type: IncrementType,
    prerelease_label: str | None = None,
) -> ThreePartVersion:
    """Parse ``current_version`` and increment it.

    Raises:
        InvalidVersionError: If ``current_version`` is malformed
    """
    return ThreePartVersion.parse(current_version).bump(increment_type, prerelease_label)
