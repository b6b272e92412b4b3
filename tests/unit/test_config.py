"""
Tests de la configuration (Settings et fichier YAML).
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from mediaindexer.config import HashingSettings, Settings, ThumbnailSettings
from mediaindexer.config_file import (
    CONFIG_FILE_ENV_VAR,
    add_scan_root,
    create_default_config,
    load_settings,
    normalize_keys,
    resolve_config_path,
    save_settings,
    to_snake_case,
)
from mediaindexer.core.exceptions import ConfigurationError
from mediaindexer.core.value_objects import HashAlgorithm, ImageFormat


class TestSettings:
    """Tests des valeurs par defaut et des validateurs."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.thumbnail.max_dimension == 512
        assert settings.thumbnail.quality == 0.85
        assert settings.thumbnail.format is ImageFormat.JPEG
        assert settings.mini_thumbnail.max_height == 100
        assert settings.html.max_page_size_bytes == 200 * 1024 * 1024
        assert settings.html.index_file_name == "index.html"
        assert settings.hashing.content_hash_algorithm is HashAlgorithm.SHA256
        assert settings.scan_roots == []

    @pytest.mark.parametrize("value", ["jpg", "JPG", "jpeg", " Jpeg "])
    def test_format_aliases(self, value):
        assert ThumbnailSettings(format=value).format is ImageFormat.JPEG

    def test_invalid_format_rejected(self):
        with pytest.raises(ValidationError):
            ThumbnailSettings(format="TIFF")

    def test_quality_bounds(self):
        with pytest.raises(ValidationError):
            ThumbnailSettings(quality=1.5)

    @pytest.mark.parametrize(
        "value,expected",
        [("sha256", HashAlgorithm.SHA256), ("SHA-1", HashAlgorithm.SHA1), ("xxh3-64", HashAlgorithm.XXH3_64)],
    )
    def test_hash_algorithm_names(self, value, expected):
        assert HashingSettings(content_hash_algorithm=value).content_hash_algorithm is expected

    def test_paths_expanded(self):
        settings = Settings(_env_file=None, database_path="~/catalog.db", scan_roots="~/Photos")
        assert settings.database_path == Path.home() / "catalog.db"
        assert settings.scan_roots == [Path.home() / "Photos"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MEDIAINDEXER_THUMBNAIL__MAX_DIMENSION", "256")
        monkeypatch.setenv("MEDIAINDEXER_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.thumbnail.max_dimension == 256
        assert settings.log_level == "DEBUG"

    def test_database_url(self, tmp_path):
        settings = Settings(_env_file=None, database_path=tmp_path / "c.db")
        assert settings.database_url == f"sqlite:///{tmp_path / 'c.db'}"


class TestKeyNormalization:
    """Tests de la conversion camelCase -> snake_case."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("maxDimension", "max_dimension"),
            ("scanRoots", "scan_roots"),
            ("contentHashAlgorithm", "content_hash_algorithm"),
            ("max_page_size_bytes", "max_page_size_bytes"),
            ("html", "html"),
        ],
    )
    def test_to_snake_case(self, key, expected):
        assert to_snake_case(key) == expected

    def test_nested(self):
        assert normalize_keys({"miniThumbnail": {"maxHeight": 80}, "scanRoots": ["/a"]}) == {
            "mini_thumbnail": {"max_height": 80},
            "scan_roots": ["/a"],
        }


class TestConfigFile:
    """Tests de lecture et d'ecriture du fichier YAML."""

    def test_resolve_order(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_FILE_ENV_VAR, raising=False)
        assert resolve_config_path(None) == Path("media-indexer-config.yaml")

        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(tmp_path / "env.yaml"))
        assert resolve_config_path(None) == tmp_path / "env.yaml"
        assert resolve_config_path(tmp_path / "explicit.yaml") == tmp_path / "explicit.yaml"

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.thumbnail.max_dimension == 512

    def test_camel_case_file(self, tmp_path):
        """Les fichiers camelCase des anciennes versions restent lisibles."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "databasePath: {db}\n"
            "scanRoots:\n"
            "  - {root}\n"
            "thumbnail:\n"
            "  maxDimension: 300\n"
            "  format: png\n"
            "miniThumbnail:\n"
            "  maxHeight: 80\n"
            "html:\n"
            "  maxPageSizeBytes: 1048576\n"
            "performance:\n"
            "  threadPoolSize: 4\n".format(db=tmp_path / "cat.db", root=tmp_path / "photos"),
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.database_path == tmp_path / "cat.db"
        assert settings.scan_roots == [tmp_path / "photos"]
        assert settings.thumbnail.max_dimension == 300
        assert settings.thumbnail.format is ImageFormat.PNG
        assert settings.mini_thumbnail.max_height == 80
        assert settings.html.max_page_size_bytes == 1048576

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("thumbnail:\n  format: TIFF\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("thumbnail: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "config.yaml"
        initial = Settings(
            _env_file=None,
            database_path=tmp_path / "cat.db",
            scan_roots=[tmp_path / "a"],
            thumbnail=ThumbnailSettings(max_dimension=128, format="webp"),
        )

        save_settings(initial, path)
        reloaded = load_settings(path)

        assert reloaded.thumbnail.max_dimension == 128
        assert reloaded.thumbnail.format is ImageFormat.WEBP
        assert reloaded.scan_roots == [tmp_path / "a"]
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert "log_level" not in data

    def test_create_default_config(self, tmp_path):
        path = create_default_config(tmp_path / "config.yaml")
        assert load_settings(path).scan_roots == [Path.home() / "Pictures"]

    def test_add_scan_root_idempotent(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_settings(Settings(_env_file=None), path)

        assert add_scan_root(path, tmp_path / "photos") is True
        assert add_scan_root(path, tmp_path / "photos") is False
        assert load_settings(path).scan_roots == [tmp_path / "photos"]
