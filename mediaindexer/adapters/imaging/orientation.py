"""
Lecture et application de l'orientation EXIF.

Le tag Orientation (0x0112) indique comment l'appareil etait tenu :
1 = normal, 2-8 = miroirs et rotations. Les valeurs 5 a 8 echangent
largeur et hauteur.
"""

from loguru import logger
from PIL import Image

EXIF_ORIENTATION_TAG = 0x0112

# Orientation EXIF -> transformation Pillow (les rotations Pillow sont anti-horaires)
_TRANSPOSITIONS = {
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_270,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_90,
}


def read_orientation(image: Image.Image) -> int:
    """
    Lit l'orientation EXIF d'une image ouverte.

    Retourne 1 si le tag est absent, illisible ou hors de l'intervalle 1-8.
    """
    try:
        value = image.getexif().get(EXIF_ORIENTATION_TAG, 1)
    except (OSError, ValueError, SyntaxError) as e:
        logger.debug(f"Metadonnees EXIF illisibles: {e}")
        return 1

    if not isinstance(value, int) or not 1 <= value <= 8:
        return 1
    return value


def apply_orientation(image: Image.Image, orientation: int) -> Image.Image:
    """
    Applique la transformation correspondant a l'orientation EXIF.

    L'orientation 1 (ou inconnue) retourne l'image inchangee.
    """
    method = _TRANSPOSITIONS.get(orientation)
    if method is None:
        return image
    return image.transpose(method)
