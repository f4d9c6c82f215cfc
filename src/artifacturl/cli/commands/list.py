"""List command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from artifacturl.cli.formatting import artifact_table, exit_with_error
from artifacturl.cli.main import app, create_resolver
from artifacturl.core.exceptions import ArtifactUrlError
from artifacturl.core.models import ArtifactSelect, ArtifactType, ResolutionRequest


@app.command(name="list")
def list_artifacts(
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
    version: str = typer.Option("", "--version", help="Version prefix, e.g. '24.1'."),
    storage_account: str = typer.Option(
        "", "--storage-account", help="Storage account name or host."
    ),
    accept_insider_eula: bool = typer.Option(
        False, "--accept-insider-eula", help="Accept the insider EULA."
    ),
    do_not_check_platform: bool = typer.Option(
        False,
        "--do-not-check-platform",
        help="Do not require a matching platform artifact.",
    ),
) -> None:
    """List every artifact matching the filters, oldest version first."""
    request = ResolutionRequest(
        artifact_type=artifact_type,
        country=country,
        version=version,
        select=ArtifactSelect.ALL,
        storage_account=storage_account,
        accept_insider_eula=accept_insider_eula,
        do_not_check_platform=do_not_check_platform,
    )
    with create_resolver() as resolver:
        try:
            artifacts = resolver.resolve_artifacts(request)
        except ArtifactUrlError as e:
            exit_with_error(e)

    if not artifacts:
        typer.echo("No artifacts found.")
        return

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True, width=200)
    console.print(artifact_table(artifacts))
