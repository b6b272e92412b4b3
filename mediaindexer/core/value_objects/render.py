"""
Objets valeur du rendu des vignettes.

Types fermes representant :
- Le type d'artefact produit (vignette complete ou mini vignette)
- La classification des erreurs de rendu (avec description associee)
- L'issue terminale d'une tentative de rendu
- Les formats d'encodage supportes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ArtifactKind(str, Enum):
    """Type d'artefact produit par le rendu."""

    THUMBNAIL = "thumbnail"  # Fichier sur disque
    MINI_THUMBNAIL = "mini_thumbnail"  # Payload base64 en base


class ThumbnailErrorType(Enum):
    """
    Classification des echecs de rendu.

    Chaque membre porte un code court (persiste en base dans error_type)
    et une description lisible pour les rapports de diagnostic.
    Le renderer ne produit en pratique que DECODING et IO.
    """

    DECODING_ERROR = ("DECODING", "Image decoding failed")
    IO_ERROR = ("IO", "File access/I/O error")
    UNSUPPORTED_FORMAT = ("FORMAT", "Unsupported image format")
    FILE_NOT_FOUND = ("NOT_FOUND", "File not found")
    CORRUPTED_FILE = ("CORRUPTED", "Corrupted or invalid file")

    def __init__(self, code: str, description: str) -> None:
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: Optional[str]) -> Optional["ThumbnailErrorType"]:
        """Retrouve le type d'erreur depuis son code persiste (None si inconnu)."""
        for error_type in cls:
            if error_type.code == code:
                return error_type
        return None


class RenderStatus(str, Enum):
    """Etat terminal d'une tentative de rendu pour un artefact."""

    SKIPPED_NO_SOURCE = "skipped_no_source"
    SKIPPED_ALREADY_RENDERED = "skipped_already_rendered"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderOutcome:
    """
    Issue d'une tentative de rendu.

    Attributs:
        kind: Type d'artefact concerne
        status: Etat terminal
        error_type: Classification de l'erreur (uniquement si FAILED)
        placeholder: True si un placeholder a ete synthetise a la place de l'image
        width: Largeur de l'image produite (0 si rien n'a ete produit)
        height: Hauteur de l'image produite (0 si rien n'a ete produit)
    """

    kind: ArtifactKind
    status: RenderStatus
    error_type: Optional[ThumbnailErrorType] = None
    placeholder: bool = False
    width: int = 0
    height: int = 0

    @property
    def is_skipped(self) -> bool:
        return self.status in (
            RenderStatus.SKIPPED_NO_SOURCE,
            RenderStatus.SKIPPED_ALREADY_RENDERED,
        )


class ImageFormat(str, Enum):
    """
    Ensemble ferme des encodeurs supportes.

    La valeur est le nom de format Pillow. Le controle explicite de la
    qualite n'est applique qu'aux codecs avec perte.
    """

    JPEG = "JPEG"
    PNG = "PNG"
    WEBP = "WEBP"
    BMP = "BMP"
    GIF = "GIF"

    @property
    def extension(self) -> str:
        """Extension du fichier de sortie (sans le point)."""
        return self.value.lower()

    @property
    def mime_subtype(self) -> str:
        """Sous-type MIME utilise dans les data URI."""
        return self.value.lower()

    @property
    def is_lossy(self) -> bool:
        return self in (ImageFormat.JPEG, ImageFormat.WEBP)
