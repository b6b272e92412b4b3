"""
Commandes CLI du pipeline (quick-scan, content-hash, full-scan, thumbnails, html).

Chaque commande execute une ou plusieurs etapes dans l'ordre du pipeline ;
toutes les etapes sont reprenables et peuvent etre relancees sans risque.
"""

from typing import Annotated

import typer
from rich.table import Table

from mediaindexer.adapters.cli.helpers import (
    abort_on_error,
    build_container,
    console,
    require_scan_roots,
)
from mediaindexer.container import Container
from mediaindexer.core.value_objects import HashKind, ThumbnailErrorType
from mediaindexer.services.thumbnails import RenderStats


def _run_scan(container: Container) -> tuple[int, int]:
    """Scan de toutes les racines puis empreintes rapides."""
    scanner = container.scanner_service()
    scanner.scan_all_roots()
    container.hashing_service().generate_quick_hashes()
    return scanner.scanned_count, scanner.processed_count


def _run_content_hashes(container: Container) -> int:
    """Hashes de contenu puis recherche des doublons."""
    hashing = container.hashing_service()
    hashing.generate_content_hashes()
    groups = container.duplicate_service().find_duplicates(HashKind.CONTENT)
    if groups:
        console.print(f"[yellow]{len(groups)} groupe(s) de doublons detecte(s)[/yellow]")
    return hashing.processed_count


def quick_scan() -> None:
    """
    Scanne les racines configurees et calcule les empreintes rapides.

    Exemple:
      media-indexer quick-scan
    """
    container = build_container()
    require_scan_roots(container.config())

    with abort_on_error("quick-scan"):
        scanned, processed = _run_scan(container)

    console.print(
        f"[green]Scan rapide termine.[/green] {scanned} fichier(s) scanne(s), "
        f"{processed} traite(s)."
    )


def content_hash() -> None:
    """
    Calcule les hashes de contenu des fichiers deja scannes.

    Exemple:
      media-indexer content-hash
    """
    container = build_container()

    with abort_on_error("content-hash"):
        processed = _run_content_hashes(container)

    console.print(f"[green]Hashes de contenu termines.[/green] {processed} fichier(s) traite(s).")


def full_scan() -> None:
    """
    Scanne les racines puis calcule empreintes rapides et hashes de contenu.

    Exemple:
      media-indexer full-scan
    """
    container = build_container()
    require_scan_roots(container.config())

    with abort_on_error("full-scan"):
        scanned, processed = _run_scan(container)
        _run_content_hashes(container)

    console.print(
        f"[green]Scan complet termine.[/green] {scanned} fichier(s) scanne(s), "
        f"{processed} traite(s)."
    )


def _stats_table(stats_list: list[RenderStats]) -> Table:
    table = Table(title="Generation des vignettes")
    table.add_column("Artefact", style="cyan")
    table.add_column("Traites", justify="right")
    table.add_column("Reussis", justify="right", style="green")
    table.add_column("Echecs", justify="right", style="red")
    table.add_column("Ignores", justify="right")
    table.add_column("Placeholders", justify="right", style="yellow")
    table.add_column("Erreurs IO / decodage", justify="right")

    for stats in stats_list:
        table.add_row(
            stats.kind.value,
            str(stats.processed),
            str(stats.succeeded),
            str(stats.failed),
            str(stats.skipped),
            str(stats.placeholders),
            f"{stats.by_error[ThumbnailErrorType.IO_ERROR]} / "
            f"{stats.by_error[ThumbnailErrorType.DECODING_ERROR]}",
        )
    return table


def thumbnails(
    force_mini: Annotated[
        bool,
        typer.Option("--force-mini", help="Regenere les mini vignettes deja presentes"),
    ] = False,
) -> None:
    """
    Genere les vignettes completes et les mini vignettes.

    Exemples:
      media-indexer thumbnails
      media-indexer thumbnails --force-mini
    """
    container = build_container()
    service = container.thumbnail_service()

    with abort_on_error("thumbnails"):
        full_stats = service.generate_thumbnails()
        mini_stats = service.generate_mini_thumbnails(force=force_mini)

    console.print(_stats_table([full_stats, mini_stats]))
    console.print(
        f"[green]Generation des vignettes terminee.[/green] "
        f"{full_stats.processed} fichier(s) traite(s)."
    )


def html() -> None:
    """
    Genere les pages de la galerie HTML.

    Exemple:
      media-indexer html
    """
    container = build_container()

    with abort_on_error("html"):
        result = container.gallery_service().generate_html_index()

    output_dir = container.config().html_output_dir
    if result.pages_written == 0:
        console.print(
            "[yellow]Aucune mini vignette dans le catalogue.[/yellow] "
            "Lancez 'media-indexer thumbnails' d'abord."
        )
        return

    console.print(
        f"[green]Index HTML genere:[/green] {result.pages_written} page(s), "
        f"{result.items_written} vignette(s) dans {output_dir}"
    )
