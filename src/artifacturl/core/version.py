"""Four-part dotted version value type.

Artifact names start with a version such as ``24.1.18989.0``. Versions are
compared numerically per component, most-significant first, never as strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from artifacturl.core.exceptions import InvalidVersionError


_PARTS = 4


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """A (major, minor, build, revision) version.

    Example:
        >>> Version.parse("24.1") < Version.parse("24.10.0.0")
        True
        >>> str(Version.parse("024.01.3.4"))
        '24.1.3.4'
    """

    major: int
    minor: int = 0
    build: int = 0
    revision: int = 0

    def __post_init__(self) -> None:
        """Reject negative components."""
        if min(self.major, self.minor, self.build, self.revision) < 0:
            raise InvalidVersionError(str(self), "components must be non-negative")

    @classmethod
    def parse(cls, value: str, *, full: bool = False) -> Self:
        """Parse a dotted version string.

        Args:
            value: Version text with 1 to 4 numeric components.
            full: If True, exactly 4 components are required.

        Returns:
            The parsed Version. Missing trailing components are 0.

        Raises:
            InvalidVersionError: If the text is not a valid version.
        """
        parts = value.strip().split(".")
        if len(parts) > _PARTS:
            raise InvalidVersionError(value, "at most 4 components are allowed")
        if full and len(parts) != _PARTS:
            raise InvalidVersionError(value, "expected the format 1.2.3.4")

        numbers: list[int] = []
        for part in parts:
            if not (part.isascii() and part.isdigit()):
                raise InvalidVersionError(value, f"component '{part}' is not numeric")
            numbers.append(int(part))
        numbers.extend([0] * (_PARTS - len(numbers)))
        return cls(*numbers)

    @classmethod
    def from_artifact_name(cls, name: str) -> Self:
        """Parse the version segment of a ``<version>/<suffix>`` name."""
        return cls.parse(name.split("/", 1)[0])

    def prefix(self, parts: int) -> str:
        """Render the first ``parts`` components followed by a dot.

        >>> Version(24, 1, 5, 0).prefix(2)
        '24.1.'
        """
        return ".".join(str(n) for n in self.as_tuple()[:parts]) + "."

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the components as a tuple."""
        return (self.major, self.minor, self.build, self.revision)

    def __str__(self) -> str:
        return ".".join(str(n) for n in self.as_tuple())
