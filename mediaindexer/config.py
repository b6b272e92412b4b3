"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe
MEDIAINDEXER_ (sections imbriquees avec "__", ex: MEDIAINDEXER_THUMBNAIL__MAX_DIMENSION=256),
et peut etre fournie par un fichier YAML (voir config_file.py).

Les encodeurs d'image et l'algorithme de hash sont des ensembles fermes valides au
chargement : une configuration invalide echoue immediatement, pas fichier par fichier.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediaindexer.core.value_objects import HashAlgorithm, ImageFormat

# Alias tolerés pour les noms de format
_FORMAT_ALIASES = {"JPG": "JPEG"}


def _normalize_format(value: object) -> object:
    if isinstance(value, str):
        upper = value.strip().upper()
        return _FORMAT_ALIASES.get(upper, upper)
    return value


class ThumbnailSettings(BaseModel):
    """Parametres des vignettes completes (fichiers sur disque)."""

    max_dimension: int = Field(default=512, ge=1)
    quality: float = Field(default=0.85, ge=0.0, le=1.0)
    format: ImageFormat = ImageFormat.JPEG
    respect_exif_orientation: bool = True
    generate_placeholders: bool = True

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v: object) -> object:
        """Accepte les noms de format en minuscules et l'alias JPG."""
        return _normalize_format(v)


class MiniThumbnailSettings(BaseModel):
    """Parametres des mini vignettes (payload inline dans le catalogue)."""

    max_height: int = Field(default=100, ge=1)
    quality: float = Field(default=0.85, ge=0.0, le=1.0)
    format: ImageFormat = ImageFormat.JPEG
    respect_exif_orientation: bool = True
    generate_placeholders: bool = True

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v: object) -> object:
        """Accepte les noms de format en minuscules et l'alias JPG."""
        return _normalize_format(v)


class HtmlSettings(BaseModel):
    """Parametres de la galerie HTML paginee."""

    max_page_size_bytes: int = Field(default=200 * 1024 * 1024, ge=1)
    index_file_name: str = Field(default="index.html", min_length=1)


class HashingSettings(BaseModel):
    """Parametres du hash de contenu."""

    content_hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256

    @field_validator("content_hash_algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls, v: object) -> object:
        """Accepte 'sha256', 'SHA256', 'xxh3-64'..."""
        if isinstance(v, str):
            candidate = v.strip().upper()
            for algorithm in HashAlgorithm:
                if candidate in (algorithm.value, algorithm.value.replace("-", "")):
                    return algorithm
        return v


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe MEDIAINDEXER_.
    Exemple : MEDIAINDEXER_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    Les cles inconnues (ex: section performance des anciens fichiers) sont ignorees.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAINDEXER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chemins (avec expansion ~)
    database_path: Path = Field(default=Path("media-index.db"))
    thumbnail_output_dir: Path = Field(default=Path("output/thumbnails"))
    html_output_dir: Path = Field(default=Path("output/html"))
    scan_roots: list[Path] = Field(default_factory=list)

    # Sections
    thumbnail: ThumbnailSettings = Field(default_factory=ThumbnailSettings)
    mini_thumbnail: MiniThumbnailSettings = Field(default_factory=MiniThumbnailSettings)
    html: HtmlSettings = Field(default_factory=HtmlSettings)
    hashing: HashingSettings = Field(default_factory=HashingSettings)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/media-indexer.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "database_path", "thumbnail_output_dir", "html_output_dir", "log_file", mode="before"
    )
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("scan_roots", mode="before")
    @classmethod
    def expand_roots(cls, v: object) -> object:
        """Etend ~ dans chaque racine de scan."""
        if v is None:
            return []
        if isinstance(v, (str, Path)):
            v = [v]
        if isinstance(v, list):
            return [Path(root).expanduser() for root in v]
        return v

    @property
    def database_url(self) -> str:
        """URL SQLAlchemy du catalogue SQLite."""
        return f"sqlite:///{self.database_path}"
