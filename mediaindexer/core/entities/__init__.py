"""
Entites metier representant les concepts du catalogue.

Les entites sont des objets mutables avec une identite qui persistent dans le temps.

Exports:
- MediaFile: Fichier media catalogue
- Thumbnail: Vignette complete sur disque
- MiniThumbnail: Mini vignette inline (base64)
- GalleryItem: Mini vignette jointe a son fichier pour la galerie
- FailedRender: Ligne de diagnostic d'un rendu en echec
- DuplicateGroup: Groupe de fichiers partageant une empreinte
"""

from mediaindexer.core.entities.media import (
    DuplicateGroup,
    FailedRender,
    GalleryItem,
    MediaFile,
    MiniThumbnail,
    Thumbnail,
)

__all__ = [
    "MediaFile",
    "Thumbnail",
    "MiniThumbnail",
    "GalleryItem",
    "FailedRender",
    "DuplicateGroup",
]
