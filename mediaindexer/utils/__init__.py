"""
Utilitaires et constantes pour Media Indexer.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from mediaindexer.utils.constants import (
    IMAGE_EXTENSIONS,
    MEDIA_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from mediaindexer.utils.dates import as_utc, utc_from_timestamp, utc_now

__all__ = [
    "IMAGE_EXTENSIONS",
    "MEDIA_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "as_utc",
    "utc_from_timestamp",
    "utc_now",
]
