"""
Configuration du logging de Media Indexer via loguru.

Deux sinks :
- console (stderr) : une ligne courte par evenement ; le module et la ligne
  d'origine ne sont affiches qu'en DEBUG
- fichier : tous les niveaux, serialises en JSON, avec rotation et archives zip,
  pour analyser les echecs d'un passage du pipeline apres coup
"""

import sys
from typing import Optional

from loguru import logger

from mediaindexer.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> <level>{message}</level>"
)
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> "
    "<cyan>{name}:{line}</cyan> <level>{message}</level>"
)


def configure_logging(settings: Settings, level: Optional[str] = None) -> None:
    """
    Remplace les sinks loguru par ceux decrits dans la configuration.

    Args :
        settings : Configuration chargee (log_level, log_file, rotation, retention)
        level : Niveau console impose par la ligne de commande (-v / -q),
            prioritaire sur settings.log_level
    """
    console_level = (level or settings.log_level).upper()
    logger.remove()

    logger.add(
        sys.stderr,
        level=console_level,
        format=DEBUG_CONSOLE_FORMAT if console_level == "DEBUG" else CONSOLE_FORMAT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )

    log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        encoding="utf-8",
        enqueue=True,
    )

    logger.debug(f"Logging configure (console {console_level}, fichier {log_file})")
