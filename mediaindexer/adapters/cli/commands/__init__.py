"""Sous-package CLI commands - re-exporte les commandes publiques."""

from mediaindexer.adapters.cli.commands.catalog_commands import (
    diagnostic,
    optimize,
    status,
)
from mediaindexer.adapters.cli.commands.config_commands import (
    add_root,
    bootstrap,
)
from mediaindexer.adapters.cli.commands.pipeline_commands import (
    content_hash,
    full_scan,
    html,
    quick_scan,
    thumbnails,
)

__all__ = [
    # configuration
    "bootstrap",
    "add_root",
    # pipeline
    "quick_scan",
    "content_hash",
    "full_scan",
    "thumbnails",
    "html",
    # catalogue
    "status",
    "diagnostic",
    "optimize",
]
