"""
Entites du catalogue media.

Entites representant les fichiers media catalogues et les artefacts de rendu
(vignettes et mini vignettes) qui leur appartiennent.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from mediaindexer.core.value_objects import ThumbnailErrorType
from mediaindexer.utils.dates import utc_now


@dataclass
class MediaFile:
    """
    Represente un fichier media decouvert lors du scan.

    Le chemin absolu est l'identite metier du fichier (unique dans le catalogue).
    Les champs de hash sont remis a None a chaque changement de taille ou de mtime.

    Attributs :
        id : Identifiant base de donnees (None avant insertion)
        file_path : Chemin absolu du fichier
        extension : Extension en minuscules avec le point (".jpg"), "" si absente
        file_size : Taille en octets
        last_modified : Date de derniere modification du fichier
        last_scanned : Date du dernier passage du scanner
        quick_hash : Empreinte rapide (nom|taille|mtime)
        content_hash : Hash du contenu complet
    """

    file_path: str
    extension: str = ""
    file_size: int = 0
    last_modified: datetime = field(default_factory=utc_now)
    last_scanned: datetime = field(default_factory=utc_now)
    quick_hash: Optional[str] = None
    content_hash: Optional[str] = None
    id: Optional[int] = None

    @property
    def path(self) -> Path:
        return Path(self.file_path)

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class Thumbnail:
    """
    Vignette complete ecrite sur disque.

    Un enregistrement en echec porte des dimensions nulles et l'orientation 1,
    sauf si un placeholder a ete synthetise (dimensions reelles du placeholder).
    """

    media_file_id: int
    thumbnail_path: Optional[str] = None
    width: int = 0
    height: int = 0
    orientation: int = 1
    format: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    failed: bool = False
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    id: Optional[int] = None

    @property
    def error_kind(self) -> Optional[ThumbnailErrorType]:
        return ThumbnailErrorType.from_code(self.error_type)


@dataclass
class MiniThumbnail:
    """
    Mini vignette stockee directement en base (payload base64, pas de fichier).
    """

    media_file_id: int
    base64_data: Optional[str] = None
    width: int = 0
    height: int = 0
    orientation: int = 1
    format: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    failed: bool = False
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    id: Optional[int] = None

    @property
    def error_kind(self) -> Optional[ThumbnailErrorType]:
        return ThumbnailErrorType.from_code(self.error_type)


@dataclass
class GalleryItem:
    """Une mini vignette jointe a son fichier proprietaire, pour la galerie HTML."""

    file_path: str
    base64_data: Optional[str]
    format: Optional[str]
    width: int
    height: int


@dataclass
class FailedRender:
    """
    Ligne du rapport de diagnostic des rendus en echec.

    Attributs :
        file_path : Chemin du fichier source
        extension : Extension du fichier source
        file_size : Taille du fichier source en octets
        error_type : Code d'erreur persiste (DECODING, IO, ...)
        error_message : Message descriptif
        created_at : Date de la tentative
    """

    file_path: str
    extension: str
    file_size: int
    error_type: Optional[str]
    error_message: Optional[str]
    created_at: datetime

    @property
    def error_kind(self) -> Optional[ThumbnailErrorType]:
        return ThumbnailErrorType.from_code(self.error_type)


@dataclass
class DuplicateGroup:
    """Ensemble de fichiers partageant la meme empreinte."""

    hash_value: str
    files: list[MediaFile] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """Nombre de copies redondantes (taille du groupe - 1)."""
        return max(0, len(self.files) - 1)
