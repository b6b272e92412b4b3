"""
Point d'entree CLI de Media Indexer.

Charge la configuration YAML, configure le logging et fournit les commandes
du pipeline (scan, hash, doublons, vignettes, galerie HTML).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    add_root,
    bootstrap,
    content_hash,
    diagnostic,
    full_scan,
    html,
    optimize,
    quick_scan,
    status,
    thumbnails,
)
from .adapters.cli.helpers import cli_state, console
from .config_file import load_settings
from .core.exceptions import ConfigurationError
from .logging_config import configure_logging

app = typer.Typer(
    name="media-indexer",
    help="Catalogue de photos et videos : scan, doublons, vignettes et galerie HTML",
)


@app.callback()
def main_callback(
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config", "-c", help="Fichier de configuration YAML (defaut: config.yaml)"
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """Media Indexer - Catalogue de photos et videos."""
    cli_state["config_path"] = config
    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        console.print(f"[red]Erreur de configuration: {e}[/red]")
        raise typer.Exit(1) from e
    cli_state["settings"] = settings

    if quiet:
        log_level = "ERROR"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = settings.log_level

    configure_logging(settings, level=log_level)


# Configuration
app.command()(bootstrap)
app.command(name="add-root")(add_root)

# Pipeline
app.command(name="quick-scan")(quick_scan)
app.command(name="content-hash")(content_hash)
app.command(name="full-scan")(full_scan)
app.command()(thumbnails)
app.command()(html)

# Catalogue
app.command()(status)
app.command()(diagnostic)
app.command()(optimize)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    settings = cli_state["settings"]
    logger.info("Configuration Media Indexer")
    typer.echo(f"Base de donnees : {settings.database_url}")
    typer.echo(f"Racines de scan : {', '.join(str(r) for r in settings.scan_roots) or '(aucune)'}")
    typer.echo(f"Vignettes : {settings.thumbnail_output_dir}")
    typer.echo(f"Galerie HTML : {settings.html_output_dir}")
    typer.echo(
        f"Vignette : {settings.thumbnail.max_dimension}px, "
        f"{settings.thumbnail.format.value}, qualite {settings.thumbnail.quality}"
    )
    typer.echo(
        f"Mini vignette : {settings.mini_thumbnail.max_height}px, "
        f"{settings.mini_thumbnail.format.value}, qualite {settings.mini_thumbnail.quality}"
    )
    typer.echo(f"Hash de contenu : {settings.hashing.content_hash_algorithm.value}")
    typer.echo(f"Niveau de log : {settings.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Media Indexer v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
