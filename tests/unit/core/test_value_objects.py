"""
Tests des objets valeur et entites du catalogue.
"""

from mediaindexer.core.entities import DuplicateGroup, FailedRender, MediaFile, Thumbnail
from mediaindexer.core.exceptions import MediaIndexerError, PersistenceError, RenderError
from mediaindexer.core.value_objects import (
    ArtifactKind,
    HashAlgorithm,
    HashKind,
    ImageFormat,
    RenderOutcome,
    RenderStatus,
    ThumbnailErrorType,
)


class TestThumbnailErrorType:
    """Tests de la classification des erreurs de rendu."""

    def test_codes_and_descriptions(self):
        """Chaque type porte un code court et une description."""
        assert ThumbnailErrorType.DECODING_ERROR.code == "DECODING"
        assert ThumbnailErrorType.DECODING_ERROR.description == "Image decoding failed"
        assert ThumbnailErrorType.IO_ERROR.code == "IO"
        assert ThumbnailErrorType.IO_ERROR.description == "File access/I/O error"

    def test_from_code(self):
        """Le code persiste permet de retrouver le type."""
        assert ThumbnailErrorType.from_code("IO") is ThumbnailErrorType.IO_ERROR
        assert ThumbnailErrorType.from_code("NOT_FOUND") is ThumbnailErrorType.FILE_NOT_FOUND

    def test_from_unknown_code(self):
        """Un code inconnu ou absent donne None."""
        assert ThumbnailErrorType.from_code("BOGUS") is None
        assert ThumbnailErrorType.from_code(None) is None


class TestImageFormat:
    """Tests des formats d'encodage."""

    def test_lossy_formats(self):
        """Seuls JPEG et WEBP sont des codecs avec perte."""
        assert ImageFormat.JPEG.is_lossy
        assert ImageFormat.WEBP.is_lossy
        assert not ImageFormat.PNG.is_lossy
        assert not ImageFormat.GIF.is_lossy

    def test_extension_and_mime(self):
        assert ImageFormat.JPEG.extension == "jpeg"
        assert ImageFormat.PNG.mime_subtype == "png"


class TestHashing:
    """Tests des objets valeur de hash."""

    def test_hashlib_names(self):
        """Les noms sont convertis pour hashlib.new()."""
        assert HashAlgorithm.SHA256.hashlib_name == "sha256"
        assert HashAlgorithm.SHA512.hashlib_name == "sha512"
        assert HashAlgorithm.MD5.hashlib_name == "md5"

    def test_hash_kind_labels(self):
        assert HashKind.QUICK.label == "Quick Hash"
        assert HashKind.CONTENT.label == "Content Hash"


class TestRenderOutcome:
    """Tests de l'issue d'un rendu."""

    def test_skipped_statuses(self):
        """Les deux statuts SKIPPED sont consideres comme ignores."""
        assert RenderOutcome(ArtifactKind.THUMBNAIL, RenderStatus.SKIPPED_NO_SOURCE).is_skipped
        assert RenderOutcome(
            ArtifactKind.MINI_THUMBNAIL, RenderStatus.SKIPPED_ALREADY_RENDERED
        ).is_skipped
        assert not RenderOutcome(ArtifactKind.THUMBNAIL, RenderStatus.SUCCESS).is_skipped


class TestEntities:
    """Tests des entites."""

    def test_media_file_path_helpers(self):
        media_file = MediaFile(file_path="/photos/2024/IMG_0001.JPG", extension=".jpg")
        assert media_file.filename == "IMG_0001.JPG"
        assert media_file.quick_hash is None
        assert media_file.content_hash is None

    def test_thumbnail_error_kind(self):
        """error_kind relit le code persiste."""
        thumbnail = Thumbnail(media_file_id=1, failed=True, error_type="DECODING")
        assert thumbnail.error_kind is ThumbnailErrorType.DECODING_ERROR

    def test_failed_render_unknown_kind(self):
        failure = FailedRender(
            file_path="/a.jpg",
            extension=".jpg",
            file_size=10,
            error_type=None,
            error_message=None,
            created_at=MediaFile(file_path="/a.jpg").last_scanned,
        )
        assert failure.error_kind is None

    def test_duplicate_group_count(self):
        """Le nombre de copies redondantes vaut la taille du groupe moins un."""
        group = DuplicateGroup(
            hash_value="abc",
            files=[MediaFile(file_path="/a.jpg"), MediaFile(file_path="/b.jpg")],
        )
        assert group.duplicate_count == 1
        assert DuplicateGroup(hash_value="x").duplicate_count == 0


class TestExceptions:
    """Tests de la hierarchie d'exceptions."""

    def test_render_error_carries_type(self):
        error = RenderError(ThumbnailErrorType.IO_ERROR, "lecture impossible")
        assert error.error_type is ThumbnailErrorType.IO_ERROR
        assert error.message == "lecture impossible"
        assert isinstance(error, MediaIndexerError)

    def test_persistence_error_cause(self):
        cause = RuntimeError("disk full")
        error = PersistenceError("echec", cause)
        assert error.cause is cause
        assert isinstance(error, MediaIndexerError)
