"""Candidate filtering for enumerated artifact names.

Narrows a container listing by country suffix, platform sibling presence
and last-modified window. Every function returns a new list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacturl.core.exceptions import InvalidVersionError
from artifacturl.core.models import ArtifactType
from artifacturl.core.version import Version


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from artifacturl.core.models import BlobEntry, ResolutionRequest


PLATFORM = "platform"


def _has_suffix(name: str, suffix: str) -> bool:
    return name.lower().endswith(f"/{suffix.lower()}")


def _version_segment(name: str) -> str:
    return name.split("/", 1)[0]


def _is_versioned(name: str) -> bool:
    if "/" not in name:
        return False
    try:
        Version.from_artifact_name(name)
    except InvalidVersionError:
        return False
    return True


def filter_by_country(
    entries: Sequence[BlobEntry],
    country: str,
    *,
    check_platform: bool = True,
) -> list[BlobEntry]:
    """Keep entries for one country, optionally requiring a platform sibling.

    Args:
        entries: The unfiltered listing.
        country: Locale code matched case-insensitively against the suffix.
        check_platform: Require ``<version>/platform`` in ``entries``.

    Returns:
        Matching entries in listing order.
    """
    platform_versions: set[str] = set()
    if check_platform:
        platform_versions = {
            _version_segment(e.name) for e in entries if _has_suffix(e.name, PLATFORM)
        }

    return [
        e
        for e in entries
        if _has_suffix(e.name, country)
        and (not check_platform or _version_segment(e.name) in platform_versions)
    ]


def drop_platform(entries: Sequence[BlobEntry]) -> list[BlobEntry]:
    """Remove ``<version>/platform`` entries."""
    return [e for e in entries if not _has_suffix(e.name, PLATFORM)]


def filter_by_date(
    entries: Sequence[BlobEntry],
    after: datetime | None = None,
    before: datetime | None = None,
) -> list[BlobEntry]:
    """Keep entries modified strictly inside the (after, before) window.

    Entries without a last-modified time are dropped when a bound is set.
    """
    if after is None and before is None:
        return list(entries)

    kept: list[BlobEntry] = []
    for e in entries:
        if e.last_modified is None:
            continue
        if after is not None and not e.last_modified > after:
            continue
        if before is not None and not e.last_modified < before:
            continue
        kept.append(e)
    return kept


def filter_candidates(
    entries: Sequence[BlobEntry],
    request: ResolutionRequest,
    country_aliases: Mapping[str, str] | None = None,
) -> list[str]:
    """Apply country, platform and date filters for a request.

    When a Sandbox country has no builds, the country is remapped once
    through ``country_aliases`` (e.g. ``"za" -> "w1"``).

    Args:
        entries: The unfiltered listing.
        request: Request supplying country, type, window and platform flag.
        country_aliases: Sandbox country remap table.

    Returns:
        Surviving artifact names, in listing order.
    """
    check_platform = not request.do_not_check_platform

    if request.country:
        selected = filter_by_country(
            entries, request.country, check_platform=check_platform
        )
        alias = (country_aliases or {}).get(request.country.lower())
        if (
            not selected
            and request.artifact_type is ArtifactType.SANDBOX
            and alias is not None
        ):
            selected = filter_by_country(entries, alias, check_platform=check_platform)
    else:
        selected = drop_platform(entries)

    # Non-version blobs (e.g. index files) cannot be ordered
    return [
        e.name
        for e in filter_by_date(selected, request.after, request.before)
        if _is_versioned(e.name)
    ]
