"""
Service de calcul des empreintes du catalogue.

Deux passes independantes et reprenables : seules les lignes dont le champ
est encore vide sont calculees, une relance sur un catalogue complet ne
calcule donc rien.
"""

from pathlib import Path

from loguru import logger

from mediaindexer.config import Settings
from mediaindexer.core.entities import MediaFile
from mediaindexer.core.exceptions import HashError
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.infrastructure.persistence.hash_service import (
    compute_content_hash,
    compute_quick_hash,
)
from mediaindexer.utils.constants import (
    CONTENT_HASH_PROGRESS_INTERVAL,
    QUICK_HASH_PROGRESS_INTERVAL,
)


class HashingService:
    """
    Service de generation des empreintes rapides et des hashes de contenu.

    Attributs:
        processed_count: Lignes parcourues par la derniere passe
        computed_count: Empreintes effectivement calculees par la derniere passe
    """

    def __init__(self, catalog_repo: ICatalogRepository, settings: Settings) -> None:
        self._catalog_repo = catalog_repo
        self._settings = settings
        self.processed_count = 0
        self.computed_count = 0

    def generate_quick_hashes(self) -> int:
        """
        Calcule l'empreinte rapide des fichiers qui n'en ont pas.

        Returns:
            Nombre d'empreintes calculees
        """
        logger.info("Debut du calcul des empreintes rapides")
        media_files = self._catalog_repo.list_media_files()
        self.processed_count = 0
        self.computed_count = 0

        for media_file in media_files:
            if media_file.quick_hash is None:
                quick_hash = compute_quick_hash(
                    media_file.path, media_file.file_size, media_file.last_modified
                )
                self._catalog_repo.update_hashes(media_file.id, quick_hash=quick_hash)
                self.computed_count += 1

            self.processed_count += 1
            if self.processed_count % QUICK_HASH_PROGRESS_INTERVAL == 0:
                logger.info(f"Empreintes rapides: {self.processed_count} fichiers...")

        logger.info(
            f"Empreintes rapides terminees: {self.computed_count} calculee(s) "
            f"sur {self.processed_count} fichier(s)"
        )
        return self.computed_count

    def generate_content_hashes(self) -> int:
        """
        Calcule le hash de contenu des fichiers qui n'en ont pas.

        Un fichier disparu ou illisible est journalise et garde un hash vide.

        Returns:
            Nombre de hashes calcules
        """
        algorithm = self._settings.hashing.content_hash_algorithm
        logger.info(f"Debut du calcul des hashes de contenu ({algorithm.value})")
        media_files = self._catalog_repo.list_media_files()
        self.processed_count = 0
        self.computed_count = 0

        for media_file in media_files:
            if media_file.content_hash is None:
                try:
                    content_hash = self._hash_content(media_file)
                except HashError as e:
                    logger.error(str(e))
                    content_hash = None

                if content_hash is not None:
                    self._catalog_repo.update_hashes(media_file.id, content_hash=content_hash)
                    self.computed_count += 1

            self.processed_count += 1
            if self.processed_count % CONTENT_HASH_PROGRESS_INTERVAL == 0:
                logger.info(f"Hashes de contenu: {self.processed_count} fichiers...")

        logger.info(
            f"Hashes de contenu termines: {self.computed_count} calcule(s) "
            f"sur {self.processed_count} fichier(s)"
        )
        return self.computed_count

    def _hash_content(self, media_file: MediaFile) -> str | None:
        path = Path(media_file.file_path)
        if not path.exists():
            logger.warning(f"Fichier introuvable, hash ignore: {path}")
            return None

        try:
            return compute_content_hash(path, self._settings.hashing.content_hash_algorithm)
        except OSError as e:
            raise HashError(f"Calcul du hash impossible pour {path}: {e}") from e
