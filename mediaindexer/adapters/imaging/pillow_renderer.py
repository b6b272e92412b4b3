"""
Adaptateur de rendu des vignettes base sur Pillow.

Implemente IImageRenderer : decodage de la source, lecture et application
de l'orientation EXIF, redimensionnement puis encodage au format demande.
Les echecs de lecture sont classifies en DECODING (contenu non decodable)
ou IO (acces au fichier impossible, flux tronque).
"""

import io
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from mediaindexer.adapters.imaging.orientation import apply_orientation, read_orientation
from mediaindexer.adapters.imaging.placeholder import create_placeholder
from mediaindexer.core.exceptions import RenderError
from mediaindexer.core.ports.imaging import IImageRenderer, RenderedImage, RenderSpec
from mediaindexer.core.value_objects import ImageFormat, ThumbnailErrorType

# Erreurs Pillow signalant un contenu non decodable (avant OSError generique)
_DECODING_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    SyntaxError,
    ValueError,
)


def fit_within(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """
    Dimensions mises a l'echelle pour tenir dans un carre max_dimension.

    Le ratio est conserve ; chaque cote vaut au moins 1 pixel.
    """
    scale = min(max_dimension / width, max_dimension / height)
    return max(1, int(width * scale)), max(1, int(height * scale))


def scale_to_height(width: int, height: int, target_height: int) -> tuple[int, int]:
    """Dimensions a hauteur exacte, largeur proportionnelle (sans plafond)."""
    return max(1, int(width * target_height / height)), target_height


def pillow_quality(quality: float) -> int:
    """Convertit une qualite 0-1 en parametre Pillow (1-95)."""
    return min(95, max(1, round(quality * 100)))


class PillowImageRenderer(IImageRenderer):
    """Rendu des vignettes et placeholders via Pillow."""

    def render(self, source: Path, spec: RenderSpec) -> RenderedImage:
        """
        Decode, oriente, redimensionne et encode une image source.

        Raises:
            RenderError: DECODING si le contenu n'est pas une image lisible,
                IO si le fichier ne peut pas etre lu completement
        """
        try:
            with Image.open(source) as img:
                img.load()
                orientation = read_orientation(img)
                image = img.convert("RGB")
        except _DECODING_ERRORS as e:
            logger.debug(f"Decodage impossible: {source} ({type(e).__name__}: {e})")
            raise RenderError(
                ThumbnailErrorType.DECODING_ERROR,
                f"Image decoding failed: unsupported format or corrupted file - {source}",
            ) from e
        except OSError as e:
            raise RenderError(
                ThumbnailErrorType.IO_ERROR,
                f"Image reading failed (I/O error): {source} - {e}",
            ) from e

        if spec.respect_orientation and orientation != 1:
            image = apply_orientation(image, orientation)

        image = self._resize(image, spec)
        return RenderedImage(
            data=self.encode(image, spec),
            width=image.width,
            height=image.height,
            orientation=orientation,
        )

    def render_placeholder(
        self,
        width: int,
        height: int,
        extension: str,
        error_type: ThumbnailErrorType,
        spec: RenderSpec,
    ) -> RenderedImage:
        image = create_placeholder(width, height, extension, error_type)
        return RenderedImage(
            data=self.encode(image, spec),
            width=image.width,
            height=image.height,
        )

    def _resize(self, image: Image.Image, spec: RenderSpec) -> Image.Image:
        if spec.target_height is not None:
            size = scale_to_height(image.width, image.height, spec.target_height)
        elif spec.max_dimension is not None:
            size = fit_within(image.width, image.height, spec.max_dimension)
        else:
            return image
        if size == image.size:
            return image
        return image.resize(size, Image.Resampling.LANCZOS)

    def encode(self, image: Image.Image, spec: RenderSpec) -> bytes:
        """Encode l'image au format demande (qualite pour JPEG/WEBP uniquement)."""
        options = {}
        if spec.image_format.is_lossy:
            options["quality"] = pillow_quality(spec.quality)
        if spec.image_format is ImageFormat.GIF:
            image = image.convert("P", palette=Image.Palette.ADAPTIVE)

        buffer = io.BytesIO()
        image.save(buffer, format=spec.image_format.value, **options)
        return buffer.getvalue()
