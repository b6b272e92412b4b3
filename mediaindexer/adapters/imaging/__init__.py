"""
Adaptateurs d'imagerie (Pillow).

- PillowImageRenderer : implementation de IImageRenderer
- orientation : lecture et application du tag EXIF Orientation
- placeholder : synthese des images de substitution
"""

from mediaindexer.adapters.imaging.orientation import apply_orientation, read_orientation
from mediaindexer.adapters.imaging.pillow_renderer import PillowImageRenderer
from mediaindexer.adapters.imaging.placeholder import create_placeholder

__all__ = [
    "PillowImageRenderer",
    "apply_orientation",
    "create_placeholder",
    "read_orientation",
]
