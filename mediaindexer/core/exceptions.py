"""
Exceptions du domaine Media Indexer.

Taxonomie :
- ScanError : echec sur une racine ou un fichier pendant le scan (non fatal)
- HashError : echec du calcul d'une empreinte (non fatal, champ laisse vide)
- RenderError : echec classifie du rendu d'un artefact (persiste, jamais propage)
- PersistenceError : catalogue indisponible ou contrainte violee (fatal pour l'etape)
- ConfigurationError : fichier de configuration invalide
"""

from typing import Optional

from mediaindexer.core.value_objects import ThumbnailErrorType


class MediaIndexerError(Exception):
    """Exception de base de l'application."""


class ScanError(MediaIndexerError):
    """Echec du scan d'une racine ou d'un fichier."""


class HashError(MediaIndexerError):
    """Echec du calcul d'une empreinte pour un fichier."""


class RenderError(MediaIndexerError):
    """
    Echec classifie du rendu d'une vignette.

    Attributes:
        error_type: Classification de l'erreur
        message: Message descriptif persiste dans le catalogue
    """

    def __init__(self, error_type: ThumbnailErrorType, message: str) -> None:
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class PersistenceError(MediaIndexerError):
    """
    Le catalogue est indisponible ou une contrainte a ete violee.

    Interrompt l'etape en cours ; les lignes deja committees restent valides.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class ConfigurationError(MediaIndexerError):
    """Configuration invalide ou illisible."""
