"""
Utilitaires partages pour les commandes CLI de Media Indexer.

Ce module fournit :
- console : instance Rich Console partagee
- cli_state : options globales (fichier de configuration, settings charges)
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- build_container : container initialise avec la configuration de la ligne de commande
- require_scan_roots : arret propre si aucune racine n'est configuree
- abort_on_error : conversion des erreurs du domaine en code de sortie 1
- format_file_size : taille lisible (1.5 MB)
"""

from contextlib import contextmanager
from typing import Any, Optional

import typer
from dependency_injector import providers
from loguru import logger as loguru_logger
from rich.console import Console

from mediaindexer.config import Settings
from mediaindexer.container import Container
from mediaindexer.core.exceptions import MediaIndexerError

console = Console()

# Options globales renseignees par le callback principal
cli_state: dict[str, Any] = {"config_path": None, "settings": None}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("mediaindexer")
    try:
        yield
    finally:
        loguru_logger.enable("mediaindexer")


def build_container(requires_db: bool = True) -> Container:
    """
    Cree un container utilisant la configuration chargee par le callback.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.
    """
    container = Container()
    settings: Optional[Settings] = cli_state.get("settings")
    if settings is not None:
        container.config.override(providers.Object(settings))
    elif cli_state.get("config_path") is not None:
        container.config_file.override(providers.Object(cli_state["config_path"]))

    if requires_db:
        container.database.init()
    return container


def config_path_label() -> str:
    """Chemin du fichier de configuration tel qu'affiche dans les rapports."""
    from mediaindexer.config_file import resolve_config_path

    return str(resolve_config_path(cli_state.get("config_path")))


def require_scan_roots(settings: Settings) -> None:
    """Arrete la commande si aucune racine de scan n'est configuree."""
    if not settings.scan_roots:
        console.print(
            "[red]Erreur: aucune racine de scan configuree.[/red] "
            "Utilisez 'media-indexer add-root <chemin>' ou 'media-indexer bootstrap'."
        )
        raise typer.Exit(1)


@contextmanager
def abort_on_error(action: str):
    """Journalise une erreur du domaine et termine la commande avec le code 1."""
    try:
        yield
    except MediaIndexerError as e:
        loguru_logger.error(f"{action} interrompu: {e}")
        console.print(f"[red]Erreur ({action}): {e}[/red]")
        raise typer.Exit(1) from e


def format_file_size(size_bytes: int) -> str:
    """Formate une taille en octets (512 B, 1.5 KB, 2.0 MB...)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for prefix in "KMGTP":
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f} {prefix}B"
