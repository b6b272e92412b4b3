"""
Tests de la lecture et de l'application de l'orientation EXIF.
"""

import pytest
from PIL import Image

from mediaindexer.adapters.imaging.orientation import (
    EXIF_ORIENTATION_TAG,
    apply_orientation,
    read_orientation,
)


def _marked_image() -> Image.Image:
    """Image 4x2 dont le pixel (0, 0) est rouge, le reste noir."""
    image = Image.new("RGB", (4, 2), (0, 0, 0))
    image.putpixel((0, 0), (255, 0, 0))
    return image


class TestReadOrientation:
    """Tests de lecture du tag Orientation."""

    def test_missing_tag(self):
        assert read_orientation(Image.new("RGB", (4, 2))) == 1

    @pytest.mark.parametrize("value", [1, 3, 6, 8])
    def test_valid_values(self, tmp_path, make_image, value):
        path = make_image(tmp_path / "oriented.jpg", orientation=value)
        with Image.open(path) as img:
            assert read_orientation(img) == value

    def test_out_of_range_falls_back(self):
        image = Image.new("RGB", (4, 2))
        image.getexif()[EXIF_ORIENTATION_TAG] = 42
        assert read_orientation(image) == 1


class TestApplyOrientation:
    """Tests des transformations par orientation."""

    def test_identity(self):
        image = _marked_image()
        assert apply_orientation(image, 1) is image

    def test_unknown_value_is_identity(self):
        image = _marked_image()
        assert apply_orientation(image, 0) is image

    @pytest.mark.parametrize("orientation", [5, 6, 7, 8])
    def test_rotations_swap_dimensions(self, orientation):
        """Les orientations 5 a 8 echangent largeur et hauteur."""
        assert apply_orientation(_marked_image(), orientation).size == (2, 4)

    @pytest.mark.parametrize("orientation", [2, 3, 4])
    def test_flips_keep_dimensions(self, orientation):
        assert apply_orientation(_marked_image(), orientation).size == (4, 2)

    def test_orientation_6_rotates_clockwise(self):
        """Orientation 6 : rotation de 90 degres dans le sens horaire."""
        rotated = apply_orientation(_marked_image(), 6)
        # Le coin haut-gauche passe en haut-droite
        assert rotated.getpixel((1, 0)) == (255, 0, 0)

    def test_orientation_8_rotates_counter_clockwise(self):
        rotated = apply_orientation(_marked_image(), 8)
        # Le coin haut-gauche passe en bas-gauche
        assert rotated.getpixel((0, 3)) == (255, 0, 0)

    def test_orientation_2_mirrors(self):
        mirrored = apply_orientation(_marked_image(), 2)
        assert mirrored.getpixel((3, 0)) == (255, 0, 0)

    def test_orientation_3_rotates_half_turn(self):
        rotated = apply_orientation(_marked_image(), 3)
        assert rotated.getpixel((3, 1)) == (255, 0, 0)
