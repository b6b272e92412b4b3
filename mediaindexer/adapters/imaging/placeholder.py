"""
Synthese des images de substitution pour les rendus en echec.

Le placeholder signale visuellement la cause de l'echec dans la galerie :
fond colore selon le type d'erreur, bordure, icone (X pour une erreur
d'entree/sortie, ! sinon) et extension du fichier source.
"""

from PIL import Image, ImageDraw, ImageFont

from mediaindexer.core.value_objects import ThumbnailErrorType
from mediaindexer.utils.constants import (
    PLACEHOLDER_DECODING_COLORS,
    PLACEHOLDER_DEFAULT_COLORS,
    PLACEHOLDER_IO_COLORS,
)

Color = tuple[int, int, int]


_COLORS_BY_ERROR = {
    ThumbnailErrorType.IO_ERROR: PLACEHOLDER_IO_COLORS,
    ThumbnailErrorType.DECODING_ERROR: PLACEHOLDER_DECODING_COLORS,
}


def placeholder_colors(error_type: ThumbnailErrorType) -> tuple[Color, Color]:
    """Retourne les couleurs (fond, texte) associees au type d'erreur."""
    return _COLORS_BY_ERROR.get(error_type, PLACEHOLDER_DEFAULT_COLORS)


def create_placeholder(
    width: int,
    height: int,
    extension: str,
    error_type: ThumbnailErrorType,
) -> Image.Image:
    """
    Dessine une image de substitution RGB aux dimensions demandees.

    Args:
        width: Largeur en pixels
        height: Hauteur en pixels
        extension: Extension du fichier source (affichee en majuscules)
        error_type: Classification de l'echec

    Returns:
        Image Pillow en mode RGB
    """
    width = max(1, width)
    height = max(1, height)
    background, foreground = placeholder_colors(error_type)

    image = Image.new("RGB", (width, height), background)
    draw = ImageDraw.Draw(image)

    # Bordure de 2 px
    draw.rectangle((1, 1, width - 2, height - 2), outline=foreground, width=2)

    icon_size = min(width // 3, height // 3)
    icon_x = width // 2 - icon_size // 2
    icon_y = height // 3 - icon_size // 2

    if error_type is ThumbnailErrorType.IO_ERROR:
        draw.line((icon_x, icon_y, icon_x + icon_size, icon_y + icon_size), fill=foreground, width=4)
        draw.line((icon_x + icon_size, icon_y, icon_x, icon_y + icon_size), fill=foreground, width=4)
    else:
        center_x = icon_x + icon_size // 2
        draw.line(
            (center_x, icon_y, center_x, icon_y + icon_size * 2 // 3),
            fill=foreground,
            width=6,
        )
        dot_y = icon_y + icon_size * 3 // 4
        draw.ellipse((center_x - 3, dot_y, center_x + 3, dot_y + 6), fill=foreground)

    if extension:
        font_size = max(12, min(width // 8, height // 6))
        font = ImageFont.load_default(size=font_size)
        text = extension.upper()
        text_width = draw.textlength(text, font=font)
        draw.text(
            (width / 2 - text_width / 2, height * 2 // 3),
            text,
            fill=foreground,
            font=font,
        )

    return image
