"""
Point d'entree CLI de ReelSort.

Configure le logging, initialise la base et fournit les commandes CLI.
"""

from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import check_key, configure, items, scan, status
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="reelsort",
    help="Scan, identification et rangement d'une mediatheque",
)


def _version() -> str:
    try:
        return package_version("reelsort")
    except PackageNotFoundError:
        return "dev"


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs DEBUG sur la console"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """ReelSort - Rangement automatique de mediatheque."""
    settings = Settings()
    log_level = settings.log_level
    if quiet:
        log_level = "ERROR"
    elif verbose:
        log_level = "DEBUG"
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(configure)
app.command()(scan)
app.command()(status)
app.command()(items)
app.command(name="check-key")(check_key)


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"ReelSort v{_version()}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 8000,
) -> None:
    """Lance le serveur HTTP (declenchement et suivi des scans)."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    # log_config=None garde la redirection des loggers uvicorn vers loguru
    uvicorn.run("reelsort.web.app:app", host=host, port=port, log_config=None)


def main() -> None:
    """Point d'entree de l'application."""
    logger.debug(f"Demarrage de ReelSort {_version()}")
    app()


if __name__ == "__main__":
    main()
