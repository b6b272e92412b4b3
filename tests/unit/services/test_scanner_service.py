"""
Tests du service de scan.

Utilise un vrai repository SQLite et de vrais fichiers sous tmp_path.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mediaindexer.config import Settings
from mediaindexer.core.exceptions import PersistenceError
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.services.scanner import ScannerService, file_extension, is_media_file


@pytest.fixture
def media_root(test_settings: Settings) -> Path:
    return test_settings.scan_roots[0]


@pytest.fixture
def scanner(catalog_repo, test_settings: Settings) -> ScannerService:
    return ScannerService(catalog_repo, test_settings)


class TestExtensions:
    """Tests de la liste blanche d'extensions."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.JPG", ".jpg"),
            ("archive.tar.gz", ".gz"),
            ("README", ""),
            (".hidden", ""),
            ("video.MOV", ".mov"),
        ],
    )
    def test_file_extension(self, name, expected):
        assert file_extension(name) == expected

    def test_is_media_file_case_insensitive(self):
        assert is_media_file("IMG_0001.JPEG")
        assert is_media_file("clip.Mp4")
        assert is_media_file("raw.CR2")
        assert not is_media_file("note.txt")
        assert not is_media_file(".jpg")


class TestScanDirectory:
    """Tests du parcours d'une racine."""

    def test_counts_scanned_and_processed(self, scanner, catalog_repo, media_root):
        """Tous les fichiers reguliers sont scannes, seuls les media sont traites."""
        (media_root / "photo1.jpg").write_bytes(b"jpeg data")
        (media_root / "note.txt").write_text("hello")

        scanner.scan_directory(media_root)

        assert scanner.scanned_count == 2
        assert scanner.processed_count == 1
        media_file = catalog_repo.get_by_path(str(media_root / "photo1.jpg"))
        assert media_file.extension == ".jpg"
        assert media_file.file_size == 9
        assert media_file.quick_hash is None

    def test_recurses_into_subdirectories(self, scanner, catalog_repo, media_root):
        nested = media_root / "2024" / "vacances"
        nested.mkdir(parents=True)
        (nested / "IMG_0001.HEIC").write_bytes(b"x")
        (media_root / "clip.mp4").write_bytes(b"y")

        scanner.scan_directory(media_root)

        assert catalog_repo.count_media_files() == 2
        assert catalog_repo.get_by_path(str(nested / "IMG_0001.HEIC")).extension == ".heic"

    def test_unchanged_file_only_touched(self, scanner, catalog_repo, media_root):
        """Un fichier inchange garde son ID et ses hashes."""
        photo = media_root / "photo.jpg"
        photo.write_bytes(b"data")
        scanner.scan_directory(media_root)
        first = catalog_repo.get_by_path(str(photo))
        catalog_repo.update_hashes(first.id, quick_hash="q", content_hash="c")

        scanner.scan_directory(media_root)

        again = catalog_repo.get_by_path(str(photo))
        assert again.id == first.id
        assert again.content_hash == "c"
        assert again.last_scanned >= first.last_scanned
        assert scanner.processed_count == 1
        assert scanner.scanned_count == 2

    def test_modified_file_replaced(self, scanner, catalog_repo, media_root):
        """Un changement de taille remplace la ligne et vide les hashes."""
        photo = media_root / "photo.jpg"
        photo.write_bytes(b"data")
        scanner.scan_directory(media_root)
        first = catalog_repo.get_by_path(str(photo))
        catalog_repo.update_hashes(first.id, quick_hash="q", content_hash="c")

        photo.write_bytes(b"nouvelles donnees")
        scanner.scan_directory(media_root)

        again = catalog_repo.get_by_path(str(photo))
        assert again.id != first.id
        assert again.file_size == len(b"nouvelles donnees")
        assert again.content_hash is None
        assert scanner.processed_count == 2

    def test_modified_mtime_replaced(self, scanner, catalog_repo, media_root):
        photo = media_root / "photo.jpg"
        photo.write_bytes(b"data")
        scanner.scan_directory(media_root)
        first = catalog_repo.get_by_path(str(photo))

        stat = photo.stat()
        os.utime(photo, (stat.st_atime, stat.st_mtime + 60))
        scanner.scan_directory(media_root)

        assert catalog_repo.get_by_path(str(photo)).id != first.id

    def test_symlink_loop_terminates(self, scanner, catalog_repo, media_root):
        """Une boucle de liens symboliques est parcourue une seule fois."""
        sub = media_root / "sub"
        sub.mkdir()
        (sub / "a.png").write_bytes(b"png")
        (sub / "loop").symlink_to(media_root, target_is_directory=True)

        scanner.scan_directory(media_root)

        assert catalog_repo.count_media_files() == 1
        assert scanner.scanned_count == 1

    def test_symlinked_directory_followed(self, scanner, catalog_repo, media_root, tmp_path):
        outside = tmp_path / "ailleurs"
        outside.mkdir()
        (outside / "b.gif").write_bytes(b"gif")
        (media_root / "lien").symlink_to(outside, target_is_directory=True)

        scanner.scan_directory(media_root)

        assert catalog_repo.get_by_path(str(media_root / "lien" / "b.gif")) is not None

    def test_missing_root_is_ignored(self, scanner, tmp_path):
        scanner.scan_directory(tmp_path / "absent")
        assert scanner.scanned_count == 0

    def test_file_root_is_ignored(self, scanner, tmp_path):
        root = tmp_path / "fichier.jpg"
        root.write_bytes(b"x")
        scanner.scan_directory(root)
        assert scanner.scanned_count == 0


class TestScanAllRoots:
    """Tests du scan de toutes les racines."""

    def test_all_roots_scanned(self, catalog_repo, test_settings, tmp_path):
        second_root = tmp_path / "second"
        second_root.mkdir()
        (test_settings.scan_roots[0] / "a.jpg").write_bytes(b"a")
        (second_root / "b.jpg").write_bytes(b"b")
        settings = test_settings.model_copy(
            update={"scan_roots": [test_settings.scan_roots[0], tmp_path / "absent", second_root]}
        )
        scanner = ScannerService(catalog_repo, settings)

        scanner.scan_all_roots()

        assert scanner.processed_count == 2
        assert catalog_repo.count_media_files() == 2

    def test_persistence_error_propagates(self, test_settings, media_root):
        """Un catalogue indisponible interrompt le scan."""
        (media_root / "a.jpg").write_bytes(b"a")
        repo = MagicMock(spec=ICatalogRepository)
        repo.get_by_path.side_effect = PersistenceError("base verrouillee")
        scanner = ScannerService(repo, test_settings)

        with pytest.raises(PersistenceError):
            scanner.scan_all_roots()
