"""
Lecture et ecriture du fichier de configuration YAML.

Les fichiers produits par les anciennes versions utilisent des cles camelCase
(maxDimension, scanRoots...) : elles sont converties en snake_case au chargement.
Les valeurs du fichier sont passees a Settings comme arguments d'initialisation,
elles priment donc sur les variables d'environnement.
"""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from mediaindexer.config import Settings
from mediaindexer.core.exceptions import ConfigurationError
from mediaindexer.utils.constants import DEFAULT_CONFIG_FILE

CONFIG_FILE_ENV_VAR = "MEDIAINDEXER_CONFIG_FILE"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

# Cles persistees dans le fichier (le logging reste pilote par l'environnement)
_PERSISTED_KEYS = {
    "database_path",
    "thumbnail_output_dir",
    "html_output_dir",
    "scan_roots",
    "thumbnail",
    "mini_thumbnail",
    "html",
    "hashing",
}


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """
    Retourne le chemin du fichier de configuration.

    Ordre : argument explicite, variable MEDIAINDEXER_CONFIG_FILE, puis
    media-indexer-config.yaml dans le repertoire courant.
    """
    if config_path:
        return Path(config_path).expanduser()
    return Path(os.environ.get(CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG_FILE)).expanduser()


def to_snake_case(key: str) -> str:
    """Convertit une cle camelCase en snake_case (maxDimension -> max_dimension)."""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def normalize_keys(data: Any) -> Any:
    """Convertit recursivement les cles d'un mapping YAML en snake_case."""
    if isinstance(data, dict):
        return {to_snake_case(str(k)): normalize_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Charge la configuration depuis le fichier YAML.

    Un fichier absent donne la configuration par defaut (avec un avertissement).

    Args:
        config_path: Chemin du fichier YAML (defaut: media-indexer-config.yaml)

    Returns:
        Settings resolus (fichier > environnement > defauts)

    Raises:
        ConfigurationError: Fichier illisible, YAML invalide ou valeurs invalides
    """
    path = resolve_config_path(config_path)

    if not path.exists():
        logger.warning(f"Fichier de configuration introuvable: {path}, configuration par defaut")
        return Settings()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Lecture impossible de {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Le fichier {path} doit contenir un mapping YAML")

    try:
        settings = Settings(**normalize_keys(raw))
    except ValidationError as e:
        raise ConfigurationError(f"Configuration invalide dans {path}: {e}") from e

    logger.info(f"Configuration chargee depuis {path}")
    return settings


def save_settings(settings: Settings, config_path: Optional[Path] = None) -> Path:
    """Ecrit la configuration dans le fichier YAML et retourne son chemin."""
    path = resolve_config_path(config_path)
    data = settings.model_dump(mode="json", include=_PERSISTED_KEYS)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    logger.info(f"Configuration sauvegardee dans {path}")
    return path


def create_default_config(config_path: Optional[Path] = None) -> Path:
    """Cree un fichier de configuration par defaut avec ~/Pictures comme racine."""
    settings = Settings(scan_roots=[Path.home() / "Pictures"])
    path = save_settings(settings, config_path)
    logger.info("Configuration par defaut creee")
    return path


def add_scan_root(config_path: Optional[Path], root: Path) -> bool:
    """
    Ajoute une racine de scan au fichier de configuration.

    Returns:
        True si la racine a ete ajoutee, False si elle etait deja presente
    """
    settings = load_settings(config_path)
    new_root = Path(root).expanduser()

    if new_root in settings.scan_roots:
        logger.info(f"Racine de scan deja presente: {new_root}")
        return False

    settings.scan_roots.append(new_root)
    save_settings(settings, config_path)
    logger.info(f"Racine de scan ajoutee: {new_root}")
    return True
