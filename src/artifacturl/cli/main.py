"""CLI commands for artifacturl."""

from __future__ import annotations

import logging
from datetime import datetime  # noqa: TC003

import typer
from rich.console import Console
from rich.logging import RichHandler

from artifacturl.cli.formatting import exit_with_error
from artifacturl.config import ResolverConfig
from artifacturl.core.exceptions import ArtifactUrlError
from artifacturl.core.models import ArtifactSelect, ArtifactType, ResolutionRequest
from artifacturl.core.services import ArtifactResolver


app = typer.Typer(
    name="artifacturl",
    help="Resolve versioned artifact download URLs from blob storage.",
    no_args_is_help=True,
)


def configure_logging(verbose: bool) -> None:
    """Route artifacturl log records to stderr through Rich."""
    logger = logging.getLogger("artifacturl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log listing pages and sub-resolutions.",
    ),
) -> None:
    """Resolve versioned artifact download URLs from blob storage."""
    configure_logging(verbose)


def create_resolver() -> ArtifactResolver:
    """Build a resolver from ARTIFACTURL_* environment settings.

    Raises:
        typer.Exit: If the environment configuration is invalid.
    """
    try:
        config = ResolverConfig.from_env()
    except ArtifactUrlError as e:
        exit_with_error(e)
    return ArtifactResolver.from_config(config)


@app.command()
def resolve(
    artifact_type: ArtifactType = typer.Option(
        ArtifactType.SANDBOX,
        "--type",
        "-t",
        case_sensitive=False,
        help="Artifact type.",
    ),
    country: str = typer.Option(
        "", "--country", "-c", help="Country/locale code, e.g. 'de' or 'w1'."
    ),
    version: str = typer.Option(
        "", "--version", help="Version prefix (full 1.2.3.4 version for Closest)."
    ),
    select: ArtifactSelect = typer.Option(
        ArtifactSelect.LATEST,
        "--select",
        "-s",
        case_sensitive=False,
        help="Selection strategy.",
    ),
    after: datetime | None = typer.Option(
        None, "--after", help="Only builds modified after this time (UTC)."
    ),
    before: datetime | None = typer.Option(
        None, "--before", help="Only builds modified before this time (UTC)."
    ),
    storage_account: str = typer.Option(
        "", "--storage-account", help="Storage account name or host."
    ),
    accept_insider_eula: bool = typer.Option(
        False,
        "--accept-insider-eula",
        help="Accept the insider EULA (required for NextMinor/NextMajor).",
    ),
    do_not_check_platform: bool = typer.Option(
        False,
        "--do-not-check-platform",
        help="Do not require a matching platform artifact.",
    ),
) -> None:
    """Print the download URL(s) selected for a request."""
    request = ResolutionRequest(
        artifact_type=artifact_type,
        country=country,
        version=version,
        select=select,
        after=after,
        before=before,
        storage_account=storage_account,
        accept_insider_eula=accept_insider_eula,
        do_not_check_platform=do_not_check_platform,
    )
    with create_resolver() as resolver:
        try:
            url = resolver.resolve(request)
        except ArtifactUrlError as e:
            exit_with_error(e)

    if url is None:
        typer.echo("No artifact matched the request.", err=True)
        raise typer.Exit(1)
    typer.echo(url)


def main() -> None:
    """Entry point for the CLI."""
    app()
