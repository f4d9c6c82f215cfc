"""Request validation rules.

Each rule raises its own RequestValidationError subclass so callers can
tell which constraint was violated. Nothing is silently overridden.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacturl.core.exceptions import (
    ConflictingParameterError,
    ExpirationTooShortError,
    InsiderEulaNotAcceptedError,
    MissingVersionError,
)
from artifacturl.core.models import ArtifactSelect, ArtifactType
from artifacturl.core.version import Version


if TYPE_CHECKING:
    from artifacturl.core.models import ResolutionRequest


# Parameters each strategy refuses; checked in this order
_FORBIDDEN: dict[ArtifactSelect, tuple[str, ...]] = {
    ArtifactSelect.DAILY: ("type=OnPrem", "version", "after", "before"),
    ArtifactSelect.WEEKLY: ("type=OnPrem", "version", "after", "before"),
    ArtifactSelect.CURRENT: ("storage_account", "type=OnPrem", "version"),
    ArtifactSelect.NEXT_MINOR: ("storage_account", "type=OnPrem", "version"),
    ArtifactSelect.NEXT_MAJOR: ("storage_account", "type=OnPrem", "version"),
    ArtifactSelect.SECOND_TO_LAST_MAJOR: ("version",),
}

_INSIDER_SELECTIONS = frozenset({ArtifactSelect.NEXT_MINOR, ArtifactSelect.NEXT_MAJOR})


def _is_set(request: ResolutionRequest, parameter: str) -> bool:
    if parameter == "type=OnPrem":
        return request.artifact_type is ArtifactType.ONPREM
    return bool(getattr(request, parameter))


def validate_request(request: ResolutionRequest) -> Version | None:
    """Check a request against the rules of its selection strategy.

    Args:
        request: The request to validate.

    Returns:
        The parsed target version for Closest, otherwise None.

    Raises:
        ConflictingParameterError: A forbidden parameter is present.
        MissingVersionError: Closest was selected without a version.
        InvalidVersionError: The version filter is malformed.
        InsiderEulaNotAcceptedError: Insider builds needed without EULA acceptance.
    """
    for parameter in _FORBIDDEN.get(request.select, ()):
        if _is_set(request, parameter):
            raise ConflictingParameterError(parameter, request.select.value)

    if request.select in _INSIDER_SELECTIONS and not request.accept_insider_eula:
        raise InsiderEulaNotAcceptedError(request.select.value)

    if request.select is ArtifactSelect.CLOSEST:
        if not request.version:
            raise MissingVersionError(request.select.value)
        return Version.parse(request.version, full=True)

    if request.version:
        # Prefix filters may end with a dot ("24.1.")
        Version.parse(request.version.rstrip("."))
    return None


def validate_expiration(seconds: int | None, minimum: int) -> None:
    """Reject explicit cache expirations below ``minimum`` seconds."""
    if seconds is not None and seconds < minimum:
        raise ExpirationTooShortError(seconds, minimum)
