"""
Commandes CLI de gestion du fichier de configuration (bootstrap, add-root).
"""

from pathlib import Path
from typing import Annotated

import typer

from mediaindexer.adapters.cli.helpers import abort_on_error, cli_state, console
from mediaindexer.config_file import add_scan_root, create_default_config, resolve_config_path


def bootstrap(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Ecrase un fichier de configuration existant"),
    ] = False,
) -> None:
    """
    Cree un fichier de configuration YAML initial.

    La racine ~/Pictures est ajoutee par defaut.

    Exemples:
      media-indexer bootstrap
      media-indexer --config ~/photos.yaml bootstrap
    """
    path = resolve_config_path(cli_state.get("config_path"))
    if path.exists() and not force:
        console.print(
            f"[yellow]Le fichier {path} existe deja.[/yellow] Utilisez --force pour l'ecraser."
        )
        raise typer.Exit(1)

    with abort_on_error("bootstrap"):
        created = create_default_config(path)

    console.print(f"[green]Configuration par defaut creee:[/green] {created.absolute()}")
    console.print(
        "Editez le fichier pour ajouter vos repertoires media, "
        "ou utilisez 'media-indexer add-root <chemin>'."
    )


def add_root(
    root: Annotated[
        Path,
        typer.Argument(help="Repertoire a ajouter aux racines de scan"),
    ],
) -> None:
    """
    Ajoute une racine de scan au fichier de configuration.

    Exemples:
      media-indexer add-root ~/Photos
      media-indexer add-root /mnt/nas/Videos
    """
    with abort_on_error("add-root"):
        added = add_scan_root(cli_state.get("config_path"), root)

    if added:
        console.print(f"[green]Racine de scan ajoutee:[/green] {root.expanduser()}")
    else:
        console.print(f"[yellow]Racine deja configuree:[/yellow] {root.expanduser()}")
