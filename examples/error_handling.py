"""Error handling patterns with recovery hints.

This example demonstrates how to handle request validation and listing
errors and use the recovery_hint property to provide actionable guidance.
"""

from artifacturl import (
    ArtifactResolver,
    ArtifactSelect,
    # Exceptions
    ArtifactUrlError,
    ConflictingParameterError,
    InsiderEulaNotAcceptedError,
    ListingAccessError,
    ListingRetriesExhaustedError,
    RequestValidationError,
    ResolutionRequest,
)


resolver = ArtifactResolver.from_config()


# Pattern 1: Report invalid parameter combinations
def resolve_daily(resolver: ArtifactResolver, version: str) -> str | None:
    """Daily builds cannot be narrowed by version."""
    try:
        return resolver.resolve(
            ResolutionRequest(version=version, select=ArtifactSelect.DAILY)
        )
    except ConflictingParameterError as e:
        print(f"'{e.parameter}' is not allowed with {e.select}")
        print(f"Hint: {e.recovery_hint}")
        raise


# Pattern 2: Ask for EULA acceptance before looking at insider builds
def resolve_next_major(resolver: ArtifactResolver, accepted: bool) -> str | None:
    """Resolve the next major release, if the insider EULA was accepted."""
    try:
        return resolver.resolve(
            ResolutionRequest(
                select=ArtifactSelect.NEXT_MAJOR, accept_insider_eula=accepted
            )
        )
    except InsiderEulaNotAcceptedError as e:
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 3: Handle storage problems
def resolve_from_account(resolver: ArtifactResolver, account: str) -> str | None:
    """Resolve from a storage account, reporting listing failures."""
    try:
        return resolver.resolve(ResolutionRequest(storage_account=account))
    except ListingAccessError as e:
        print(f"Access denied to: {e.source}")
        print(f"Hint: {e.recovery_hint}")
        return None
    except ListingRetriesExhaustedError as e:
        print(f"Gave up on {e.source} after {e.attempts} attempts")
        return None


# Pattern 4: Catch-all for any library error
def resolve_safe(resolver: ArtifactResolver, request: ResolutionRequest) -> str | None:
    """Resolve with comprehensive error handling."""
    try:
        return resolver.resolve(request)
    except RequestValidationError as e:
        print(f"Invalid request: {e}")
        return None
    except ArtifactUrlError as e:
        # Catch any other library errors
        print(f"Unexpected error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Example usage
if __name__ == "__main__":
    # This will print error message and re-raise ConflictingParameterError
    resolve_daily(resolver, "24.1")
