"""
Commandes CLI de consultation et de maintenance du catalogue (status, diagnostic, optimize).
"""

from typing import Annotated

import typer
from rich.table import Table

from mediaindexer.adapters.cli.helpers import (
    abort_on_error,
    build_container,
    config_path_label,
    console,
    format_file_size,
    suppress_loguru,
)
from mediaindexer.core.entities import FailedRender
from mediaindexer.core.value_objects import ThumbnailErrorType
from mediaindexer.services.deduplicator import DuplicateSummary


def _duplicate_line(summary: DuplicateSummary, hint: str = "") -> str:
    if summary.group_count == 0:
        return f"  {summary.key.label} Duplicates: None found{hint}"
    return (
        f"  {summary.key.label} Duplicates: {summary.group_count} groups "
        f"({summary.duplicate_file_count} files)"
    )


def status() -> None:
    """
    Affiche les statistiques du catalogue.

    Exemple:
      media-indexer status
    """
    container = build_container()
    settings = container.config()

    with abort_on_error("status"):
        stats = container.reporting_service().catalog_stats()

    console.print("\n[bold]=== Media Indexer Status ===[/bold]")
    console.print(f"Configuration file: {config_path_label()}")
    console.print(f"Database: {settings.database_path}")

    console.print("\n[bold]Scan Roots:[/bold]")
    if not settings.scan_roots:
        console.print("  [yellow](aucune)[/yellow]")
    for root in settings.scan_roots:
        console.print(f"  - {root}")

    table = Table(title="Database Statistics", show_header=False)
    table.add_column("Element", style="cyan")
    table.add_column("Total", justify="right")
    table.add_row("Media Files", str(stats.media_files))
    table.add_row("Thumbnails", str(stats.thumbnails))
    table.add_row("Mini Thumbnails", str(stats.mini_thumbnails))
    console.print()
    console.print(table)

    console.print("\n[bold]Duplicate Analysis:[/bold]")
    console.print(_duplicate_line(stats.quick_duplicates))
    console.print(
        _duplicate_line(stats.content_duplicates, " (run content-hash to analyze)")
    )

    console.print("\n[bold]Output Directories:[/bold]")
    console.print(f"  Thumbnails: {settings.thumbnail_output_dir}")
    console.print(f"  HTML: {settings.html_output_dir}")


def _print_failures(title: str, failures: list[FailedRender]) -> None:
    if not failures:
        return
    console.print(f"\n[bold]=== {title} ===[/bold]")
    for failure in failures:
        kind = failure.error_kind
        description = kind.description if kind else "Unknown error"
        console.print(f"File: {failure.file_path}")
        console.print(f"  Error Type: {description} ({failure.error_type})")
        console.print(f"  Error Message: {failure.error_message}")
        console.print(f"  Failed At: {failure.created_at:%Y-%m-%d %H:%M:%S}")
        console.print(f"  File Extension: {failure.extension}")
        console.print(f"  File Size: {format_file_size(failure.file_size)}")


def diagnostic() -> None:
    """
    Liste les rendus de vignettes en echec avec le detail des erreurs.

    Exemple:
      media-indexer diagnostic
    """
    container = build_container()
    settings = container.config()

    with abort_on_error("diagnostic"):
        report = container.reporting_service().failure_report()

    console.print("\n[bold]=== Thumbnail Generation Diagnostic Report ===[/bold]")
    console.print(f"Configuration file: {config_path_label()}")
    console.print(f"Database: {settings.database_path}")

    if report.total == 0:
        console.print("\n[green]Aucun echec de generation de vignette.[/green]")
        return

    with suppress_loguru():
        _print_failures("Failed Thumbnails", report.failed_thumbnails)
        _print_failures("Failed Mini Thumbnails", report.failed_mini_thumbnails)

    summary = report.error_summary
    console.print("\n[bold]=== Error Summary ===[/bold]")
    console.print(
        f"I/O Errors (file access issues): {summary[ThumbnailErrorType.IO_ERROR.code]}"
    )
    console.print(
        "Decoding Errors (format/corruption issues): "
        f"{summary[ThumbnailErrorType.DECODING_ERROR.code]}"
    )
    console.print(f"Total Failed: {report.total}")


def optimize(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Ne pas demander de confirmation"),
    ] = False,
) -> None:
    """
    Compacte et analyse la base du catalogue (VACUUM + ANALYZE).

    Exemple:
      media-indexer optimize --yes
    """
    if not yes:
        typer.confirm("Optimiser la base du catalogue ?", abort=True)

    container = build_container()
    with abort_on_error("optimize"):
        container.catalog_repository().optimize()

    console.print("[green]Base du catalogue optimisee.[/green]")
