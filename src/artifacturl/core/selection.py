"""Selection strategies reducing filtered artifact names.

Each strategy takes artifact names (``<version>/<suffix>``) and returns a new
list: the full ordered set for All, otherwise zero or one name. An empty
input always yields an empty output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacturl.core.models import ArtifactSelect
from artifacturl.core.version import Version


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def sort_by_version(names: Sequence[str], *, descending: bool = False) -> list[str]:
    """Sort names numerically by their version segment (stable)."""
    return sorted(names, key=Version.from_artifact_name, reverse=descending)


def select_all(names: Sequence[str]) -> list[str]:
    """Every name, ascending by version."""
    return sort_by_version(names)


def select_latest(names: Sequence[str]) -> list[str]:
    """The highest version."""
    return sort_by_version(names)[-1:]


def select_first(names: Sequence[str]) -> list[str]:
    """The lowest version."""
    return sort_by_version(names)[:1]


def select_closest(names: Sequence[str], target: Version) -> list[str]:
    """The lowest version >= target, else the highest version overall."""
    ordered = sort_by_version(names)
    for name in ordered:
        if Version.from_artifact_name(name) >= target:
            return [name]
    return ordered[-1:]


def select_second_to_last_major(names: Sequence[str]) -> list[str]:
    """The newest release of the second-newest major version line."""
    ordered = sort_by_version(names, descending=True)
    if not ordered:
        return []
    latest_major = Version.from_artifact_name(ordered[0]).major
    for name in ordered[1:]:
        if Version.from_artifact_name(name).major != latest_major:
            return [name]
    return []


_SIMPLE: dict[ArtifactSelect, Callable[[Sequence[str]], list[str]]] = {
    ArtifactSelect.ALL: select_all,
    ArtifactSelect.LATEST: select_latest,
    ArtifactSelect.FIRST: select_first,
    ArtifactSelect.SECOND_TO_LAST_MAJOR: select_second_to_last_major,
}


def select(
    names: Sequence[str],
    strategy: ArtifactSelect,
    closest_to: Version | None = None,
) -> list[str]:
    """Apply a non-composite selection strategy.

    Args:
        names: Filtered artifact names.
        strategy: The selection to apply.
        closest_to: Target version, required for Closest.

    Returns:
        The selected names.

    Raises:
        ValueError: If the strategy is composite or Closest lacks a target.
    """
    if strategy is ArtifactSelect.CLOSEST:
        if closest_to is None:
            raise ValueError("Closest selection requires a target version")
        return select_closest(names, closest_to)
    try:
        return _SIMPLE[strategy](names)
    except KeyError:
        raise ValueError(
            f"{strategy.value} is a composite selection and cannot be applied "
            "to a listing"
        ) from None
