"""Domain exceptions for artifacturl.

All library errors inherit from ArtifactUrlError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations


class ArtifactUrlError(Exception):
    """Base class for all artifacturl exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class RequestValidationError(ArtifactUrlError):
    """Base class for invalid resolution requests.

    Raised before any remote listing is attempted and never retried.
    """

    pass


class ConflictingParameterError(RequestValidationError):
    """Raised when a parameter is not allowed together with a selection.

    Attributes:
        parameter: The offending request parameter (e.g. "version").
        select: The selection strategy name that forbids it.
    """

    def __init__(self, parameter: str, select: str) -> None:
        self.parameter = parameter
        self.select = select
        super().__init__(f"You cannot specify {parameter} when selecting {select}")

    @property
    def recovery_hint(self) -> str:
        """Suggest dropping the parameter."""
        return f"Remove '{self.parameter}' from the request or choose another selection"


class MissingVersionError(RequestValidationError):
    """Raised when a selection needs a version and none was given.

    Attributes:
        select: The selection strategy name.
    """

    def __init__(self, select: str) -> None:
        self.select = select
        super().__init__(f"A version number is required when selecting {select}")

    @property
    def recovery_hint(self) -> str:
        """Show the expected format."""
        return "Pass a full version in the format 1.2.3.4"


class InvalidVersionError(RequestValidationError):
    """Raised when a version string cannot be parsed.

    Attributes:
        value: The rejected version text.
        reason: Why it was rejected.
    """

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid version '{value}': {reason}")


class ExpirationTooShortError(RequestValidationError):
    """Raised when a cache expiration is below the allowed minimum.

    Attributes:
        seconds: The requested expiration.
        minimum: The smallest accepted expiration.
    """

    def __init__(self, seconds: int, minimum: int) -> None:
        self.seconds = seconds
        self.minimum = minimum
        super().__init__(
            f"Cache expiration of {seconds} seconds is below the minimum of {minimum}"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest the minimum."""
        return f"Use an expiration of at least {self.minimum} seconds"


class InsiderEulaNotAcceptedError(RequestValidationError):
    """Raised when insider builds are requested without accepting the EULA.

    Attributes:
        select: The selection strategy needing insider builds, if any.
        account: The insider storage account being listed, if any.
    """

    def __init__(self, select: str | None = None, *, account: str | None = None) -> None:
        self.select = select
        self.account = account
        if account:
            message = (
                f"Storage account {account} holds insider builds and the insider "
                "EULA has not been accepted"
            )
        else:
            message = (
                f"Insider builds are required for {select} and the insider EULA "
                "has not been accepted"
            )
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Point to the acceptance flag."""
        return "Set accept_insider_eula (--accept-insider-eula) to access insider builds"


class ListingError(ArtifactUrlError):
    """Base class for blob listing errors.

    Raised when enumerating the remote container fails. A listing error
    aborts the whole resolution and nothing is cached.

    Attributes:
        source: The container URL that was being listed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        source: str,
        cause: Exception | None = None,
    ) -> None:
        self.source = source
        self.cause = cause
        super().__init__(message)


class ListingAccessError(ListingError):
    """Raised when the storage account denies the listing request."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the SAS token."""
        return "Check the SAS token configured for this storage account"


class ListingNotFoundError(ListingError):
    """Raised when the container does not exist."""

    @property
    def recovery_hint(self) -> str:
        """Suggest verifying the storage account and type."""
        return f"Verify the storage account and artifact type: {self.source}"


class ListingRetriesExhaustedError(ListingError):
    """Raised when one page keeps failing after every retry attempt.

    Attributes:
        marker: Continuation marker of the failing page ("" for the first page).
        attempts: Number of attempts made on that page.
    """

    def __init__(
        self,
        source: str,
        marker: str,
        attempts: int,
        cause: Exception | None = None,
    ) -> None:
        self.marker = marker
        self.attempts = attempts
        page = f"marker '{marker}'" if marker else "the first page"
        super().__init__(
            f"Listing {source} failed {attempts} times on {page}",
            source=source,
            cause=cause,
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest retrying later."""
        return "The storage service may be unavailable; try again later"


class ConfigurationError(ArtifactUrlError):
    """Raised for configuration problems (invalid environment settings)."""

    pass
