"""
Interfaces ports pour le rendu des images.

Le port isole le service de vignettes de la bibliotheque d'imagerie : le service
pilote la machine a etats (sauts, echecs, persistance), l'adaptateur fait le
travail sur les pixels (decodage, orientation EXIF, redimensionnement, encodage).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mediaindexer.core.value_objects import ImageFormat, ThumbnailErrorType


@dataclass(frozen=True)
class RenderSpec:
    """
    Parametres de rendu d'un artefact.

    Exactement un des deux modes de redimensionnement est renseigne :
    - max_dimension : mise a l'echelle uniforme, aucun cote ne depasse la valeur
    - target_height : hauteur exacte, largeur proportionnelle sans plafond

    Attributs:
        image_format: Encodeur de sortie
        quality: Qualite 0-1 (appliquee seulement aux codecs avec perte)
        respect_orientation: Applique la transformation EXIF si True
    """

    image_format: ImageFormat
    quality: float
    respect_orientation: bool = True
    max_dimension: Optional[int] = None
    target_height: Optional[int] = None


@dataclass(frozen=True)
class RenderedImage:
    """
    Image encodee prete a etre persistee.

    Attributs:
        data: Octets encodes au format demande
        width: Largeur finale
        height: Hauteur finale
        orientation: Valeur EXIF lue sur la source (1 par defaut)
    """

    data: bytes
    width: int
    height: int
    orientation: int = 1


class IImageRenderer(ABC):
    """Interface de rendu des vignettes."""

    @abstractmethod
    def render(self, source: Path, spec: RenderSpec) -> RenderedImage:
        """
        Decode, oriente, redimensionne et encode une image source.

        Raises:
            RenderError: Echec classifie (DECODING ou IO)
        """
        ...

    @abstractmethod
    def render_placeholder(
        self,
        width: int,
        height: int,
        extension: str,
        error_type: ThumbnailErrorType,
        spec: RenderSpec,
    ) -> RenderedImage:
        """Synthetise et encode une image de substitution pour un echec."""
        ...
