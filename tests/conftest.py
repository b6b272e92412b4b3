"""
Fixtures pytest partagees pour les tests Media Indexer.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine, session et repository SQLite sur fichier temporaire
- Mock de l'interface IImageRenderer
- Fabriques d'images de test (avec ou sans orientation EXIF)
"""

from pathlib import Path
from typing import Callable, Iterator, Optional
from unittest.mock import MagicMock

import pytest
from PIL import Image
from sqlalchemy import Engine
from sqlmodel import Session

from mediaindexer.config import Settings
from mediaindexer.core.ports.imaging import IImageRenderer, RenderedImage
from mediaindexer.infrastructure.persistence.database import (
    create_catalog_engine,
    get_session,
    init_db,
)
from mediaindexer.infrastructure.persistence.repositories import SQLModelCatalogRepository

EXIF_ORIENTATION_TAG = 0x0112


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base, les sorties et la racine
    de scan de chaque test.
    """
    media_root = tmp_path / "media"
    media_root.mkdir()

    return Settings(
        _env_file=None,  # Ignorer le fichier .env pour les tests
        database_path=tmp_path / "catalog.db",
        thumbnail_output_dir=tmp_path / "output" / "thumbnails",
        html_output_dir=tmp_path / "output" / "html",
        scan_roots=[media_root],
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    """Engine SQLite initialise (tables + migrations) sur un fichier temporaire."""
    engine = create_catalog_engine(tmp_path / "test.db")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session SQLModel liee a l'engine de test."""
    with get_session(engine) as session:
        yield session


@pytest.fixture
def catalog_repo(session: Session) -> SQLModelCatalogRepository:
    """Repository du catalogue sur la base de test."""
    return SQLModelCatalogRepository(session)


@pytest.fixture
def mock_renderer() -> MagicMock:
    """
    Mock de IImageRenderer pour les tests.

    render retourne une image 64x48 ; render_placeholder retourne une image
    aux dimensions demandees. Configurer side_effect dans chaque test pour
    simuler des echecs.
    """
    mock = MagicMock(spec=IImageRenderer)
    mock.render.return_value = RenderedImage(data=b"rendered", width=64, height=48)

    def default_placeholder(width, height, extension, error_type, spec) -> RenderedImage:
        return RenderedImage(data=b"placeholder", width=width, height=height)

    mock.render_placeholder.side_effect = default_placeholder
    return mock


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """
    Fabrique d'images de test.

    Usage:
        path = make_image(tmp_path / "photo.jpg", 200, 100, orientation=6)
    """

    def _make(
        path: Path,
        width: int = 200,
        height: int = 100,
        orientation: Optional[int] = None,
        color: tuple[int, int, int] = (30, 120, 200),
        image_format: str = "JPEG",
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new("RGB", (width, height), color)
        if orientation is not None:
            exif = img.getexif()
            exif[EXIF_ORIENTATION_TAG] = orientation
            img.save(path, format=image_format, exif=exif.tobytes())
        else:
            img.save(path, format=image_format)
        return path

    return _make
