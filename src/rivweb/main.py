"""rivweb command-line interface."""

import logging

import typer

from rivweb.config import Settings
from rivweb.core.builder import SiteBuilder
from rivweb.core.errors import DuplicatePageError, FatalBuildError
from rivweb.server import serve

logger = logging.getLogger("rivweb")

app = typer.Typer(help="Build a static site and RSS feed from riv documents.")


def configure_logging(*, verbose: bool = False) -> None:
    logging.basicConfig(
        level=(logging.DEBUG if verbose else logging.INFO),
        format=".. %(message)s",
        force=True,
    )


@app.command()
def main(
    server: bool = typer.Option(False, "--server", help="Start a simple HTTP server after generation"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port for the HTTP server"),
    host: str | None = typer.Option(None, "--host", help="Address for the HTTP server"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate the site from the source directory."""
    settings = Settings()
    configure_logging(verbose=verbose or settings.debug)

    try:
        result = SiteBuilder(settings).build()
    except FatalBuildError as e:
        logger.error("%s", e)
        raise typer.Exit(e.code) from e
    except DuplicatePageError as e:
        logger.error("%s", e)
        raise typer.Exit(FatalBuildError.SOURCE_DIR) from e

    typer.echo(
        f"Generated {result.generated} of {len(result.graph)} pages "
        f"({len(result.diagnostics)} warnings)"
    )

    if server:
        home = result.graph.lookup(settings.home_page)
        serve(
            settings.output_dir,
            host or settings.server_host,
            port or settings.server_port,
            index=home.out_name if home else None,
        )
