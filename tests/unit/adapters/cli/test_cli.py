"""
Tests des commandes CLI via typer.testing.CliRunner.

Chaque test ecrit un fichier de configuration YAML dans tmp_path et
l'indique avec --config ; base, sorties et logs restent sous tmp_path.
"""

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from mediaindexer.adapters.cli.helpers import format_file_size
from mediaindexer.main import app

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Fichier de configuration pointant vers une racine de scan temporaire."""
    media_root = tmp_path / "media"
    media_root.mkdir()
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "database_path": str(tmp_path / "catalog.db"),
                "thumbnail_output_dir": str(tmp_path / "thumbnails"),
                "html_output_dir": str(tmp_path / "html"),
                "scan_roots": [str(media_root)],
                "log_file": str(tmp_path / "logs" / "test.log"),
            }
        ),
        encoding="utf-8",
    )
    return path


def _invoke(config_path: Path, *args: str):
    return runner.invoke(app, ["--config", str(config_path), *args])


class TestFormatFileSize:
    """Tests du formatage des tailles."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024**3, "3.0 GB"),
        ],
    )
    def test_sizes(self, size, expected):
        assert format_file_size(size) == expected


class TestConfigCommands:
    """Tests de bootstrap et add-root."""

    def test_bootstrap_creates_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "new.yaml"

        result = runner.invoke(app, ["--config", str(path), "bootstrap"])

        assert result.exit_code == 0
        assert path.exists()
        assert str(Path.home() / "Pictures") in path.read_text(encoding="utf-8")

    def test_bootstrap_refuses_overwrite(self, config_path):
        result = _invoke(config_path, "bootstrap")
        assert result.exit_code == 1

    def test_add_root(self, config_path, tmp_path):
        new_root = tmp_path / "autres"

        first = _invoke(config_path, "add-root", str(new_root))
        second = _invoke(config_path, "add-root", str(new_root))

        assert first.exit_code == 0
        assert second.exit_code == 0
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        assert data["scan_roots"].count(str(new_root)) == 1

    def test_invalid_config_exits(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("thumbnail:\n  format: TIFF\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(path), "status"])

        assert result.exit_code == 1


class TestPipelineCommands:
    """Tests des commandes du pipeline sur un petit corpus."""

    def test_full_pipeline(self, config_path, tmp_path, make_image):
        media_root = tmp_path / "media"
        make_image(media_root / "a.jpg", 300, 200)
        make_image(media_root / "copie.jpg", 300, 200)
        (media_root / "broken.jpg").write_bytes(b"pas une image")
        (media_root / "note.txt").write_text("ignore")

        assert _invoke(config_path, "full-scan").exit_code == 0
        assert _invoke(config_path, "thumbnails").exit_code == 0
        html_result = _invoke(config_path, "html")

        assert html_result.exit_code == 0
        assert (tmp_path / "html" / "index.html").exists()
        assert len(list((tmp_path / "thumbnails").iterdir())) == 3

        status = _invoke(config_path, "status")
        assert status.exit_code == 0
        assert "Media Files" in status.output
        assert "Content Hash Duplicates: 1 groups" in status.output

        diagnostic = _invoke(config_path, "diagnostic")
        assert diagnostic.exit_code == 0
        assert "Failed Thumbnails" in diagnostic.output
        assert "Total Failed: 2" in diagnostic.output

    def test_quick_scan_requires_roots(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "database_path": str(tmp_path / "catalog.db"),
                    "log_file": str(tmp_path / "test.log"),
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["--config", str(path), "quick-scan"])

        assert result.exit_code == 1

    def test_html_on_empty_catalog(self, config_path, tmp_path):
        result = _invoke(config_path, "html")

        assert result.exit_code == 0
        assert not (tmp_path / "html" / "index.html").exists()

    def test_optimize(self, config_path):
        assert _invoke(config_path, "optimize", "--yes").exit_code == 0

    def test_version(self, config_path):
        result = _invoke(config_path, "version")
        assert result.exit_code == 0
        assert "Media Indexer v" in result.output
