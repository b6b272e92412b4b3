"""
Service de scan des racines media.

Parcourt recursivement les racines configurees et synchronise le catalogue :
les fichiers inchanges (meme taille, meme mtime) sont seulement marques comme
revus, les fichiers nouveaux ou modifies remplacent leur ligne avec des hashes
vides (et perdent leurs vignettes).
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from mediaindexer.config import Settings
from mediaindexer.core.entities import MediaFile
from mediaindexer.core.exceptions import PersistenceError, ScanError
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.utils.constants import MEDIA_EXTENSIONS, SCAN_PROGRESS_INTERVAL
from mediaindexer.utils.dates import utc_from_timestamp, utc_now


def file_extension(file_name: str) -> str:
    """Extension en minuscules avec le point, "" si absente (les fichiers caches n'en ont pas)."""
    last_dot = file_name.rfind(".")
    return file_name[last_dot:].lower() if last_dot > 0 else ""


def is_media_file(file_name: str) -> bool:
    """Verifie l'extension contre la liste blanche (insensible a la casse)."""
    return file_extension(file_name) in MEDIA_EXTENSIONS


class ScannerService:
    """
    Service de decouverte des fichiers media.

    Les compteurs scanned_count et processed_count croissent sur toute la
    duree de vie de l'instance :
    - scanned_count : fichiers reguliers rencontres pendant le parcours
    - processed_count : fichiers media nouveaux ou modifies enregistres
    """

    def __init__(self, catalog_repo: ICatalogRepository, settings: Settings) -> None:
        """
        Initialise le service de scan.

        Args:
            catalog_repo: Repository du catalogue
            settings: Configuration de l'application (racines de scan)
        """
        self._catalog_repo = catalog_repo
        self._settings = settings
        self._visited: set[Path] = set()
        self.scanned_count = 0
        self.processed_count = 0

    def scan_all_roots(self) -> None:
        """Scanne toutes les racines configurees ; une racine en echec n'arrete pas les suivantes."""
        roots = self._settings.scan_roots
        logger.info(f"Debut du scan de {len(roots)} racine(s)")

        for root in roots:
            try:
                self.scan_directory(root)
            except ScanError as e:
                logger.error(f"Echec du scan de la racine {root}: {e}")

        logger.info(
            f"Scan termine. Scannes: {self.scanned_count}, traites: {self.processed_count}"
        )

    def scan_directory(self, root: Path) -> None:
        """
        Scanne une racine recursivement.

        Les liens symboliques vers des repertoires sont suivis ; le chemin reel
        de chaque repertoire et fichier n'est visite qu'une fois par racine.

        Raises:
            ScanError: Si le parcours de la racine echoue
            PersistenceError: Si le catalogue est indisponible
        """
        root = Path(root).expanduser().absolute()

        if not root.exists():
            logger.warning(f"Racine de scan inexistante: {root}")
            return
        if not root.is_dir():
            logger.warning(f"La racine de scan n'est pas un repertoire: {root}")
            return

        logger.info(f"Scan du repertoire: {root}")
        self._visited.clear()

        root_real = self._resolve(root)
        if root_real is None:
            raise ScanError(f"Chemin reel introuvable pour {root}")
        self._visited.add(root_real)

        def _on_walk_error(error: OSError) -> None:
            logger.warning(f"Repertoire illisible: {error.filename} ({error.strerror})")

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error, followlinks=True):
            current = Path(dirpath)

            # Elague les repertoires deja visites (boucles de liens symboliques)
            kept = []
            for name in sorted(dirnames):
                real = self._mark_visited(current / name)
                if real is not None:
                    kept.append(name)
            dirnames[:] = kept

            for name in sorted(filenames):
                self._scan_entry(current / name)

        logger.info(f"Scan du repertoire termine: {root}")

    def _resolve(self, path: Path) -> Optional[Path]:
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.debug(f"Chemin reel introuvable, ignore: {path} ({e})")
            return None

    def _mark_visited(self, path: Path) -> Optional[Path]:
        """Retourne le chemin reel si jamais visite (et le marque), None sinon."""
        real = self._resolve(path)
        if real is None:
            return None
        if real in self._visited:
            logger.debug(f"Chemin deja visite (boucle potentielle), ignore: {path}")
            return None
        self._visited.add(real)
        return real

    def _scan_entry(self, path: Path) -> None:
        if self._mark_visited(path) is None:
            return

        try:
            stat = path.stat()
        except OSError as e:
            logger.error(f"Lecture des attributs impossible: {path} ({e})")
            return

        if not path.is_file():
            return

        self.scanned_count += 1
        if not is_media_file(path.name):
            return

        try:
            self._process_file(path, stat.st_size, utc_from_timestamp(stat.st_mtime))
        except PersistenceError:
            raise
        except Exception as e:
            logger.error(f"Echec du traitement de {path}: {e}")

    def _process_file(self, path: Path, file_size: int, last_modified: datetime) -> None:
        file_path = str(path)
        now = utc_now()
        existing = self._catalog_repo.get_by_path(file_path)

        if (
            existing is not None
            and existing.last_modified == last_modified
            and existing.file_size == file_size
        ):
            self._catalog_repo.touch_media_file(existing.id, now)
            return

        self._catalog_repo.replace_media_file(
            MediaFile(
                file_path=file_path,
                extension=file_extension(path.name),
                file_size=file_size,
                last_modified=last_modified,
                last_scanned=now,
            )
        )
        self.processed_count += 1

        if self.processed_count % SCAN_PROGRESS_INTERVAL == 0:
            logger.info(f"{self.processed_count} fichiers traites...")
