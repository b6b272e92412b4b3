"""
Interfaces ports pour le catalogue persistant.

Interface abstraite (port) definissant le contrat de persistance du catalogue.
L'implementation (adaptateur) fournit le stockage concret (SQLite via SQLModel).
Le catalogue sert aussi de registre d'idempotence : les champs non renseignes et
les artefacts manquants pilotent la reprise des etapes.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from mediaindexer.core.entities import (
    DuplicateGroup,
    FailedRender,
    GalleryItem,
    MediaFile,
    MiniThumbnail,
    Thumbnail,
)
from mediaindexer.core.value_objects import HashKind


class ICatalogRepository(ABC):
    """
    Interface de stockage du catalogue media.

    Toutes les erreurs du moteur de stockage sont remontees sous forme de
    PersistenceError.
    """

    # Fichiers media

    @abstractmethod
    def get_by_id(self, media_file_id: int) -> Optional[MediaFile]:
        """Recupere un fichier media par son ID."""
        ...

    @abstractmethod
    def get_by_path(self, file_path: str) -> Optional[MediaFile]:
        """Recupere un fichier media par son chemin absolu."""
        ...

    @abstractmethod
    def list_media_files(self) -> list[MediaFile]:
        """Liste tous les fichiers media, tries par chemin."""
        ...

    @abstractmethod
    def replace_media_file(self, media_file: MediaFile) -> MediaFile:
        """
        Remplace (ou insere) la ligne associee au chemin du fichier.

        L'ancienne ligne et ses vignettes sont supprimees : un nouvel ID est emis
        et les vignettes obsoletes devront etre regenerees.
        """
        ...

    @abstractmethod
    def touch_media_file(self, media_file_id: int, scanned_at: datetime) -> None:
        """Met a jour uniquement la date de dernier scan."""
        ...

    @abstractmethod
    def update_hashes(
        self,
        media_file_id: int,
        quick_hash: Optional[str] = None,
        content_hash: Optional[str] = None,
    ) -> None:
        """Renseigne les empreintes fournies (les valeurs None sont ignorees)."""
        ...

    @abstractmethod
    def find_by_hash(self, kind: HashKind, hash_value: str) -> list[MediaFile]:
        """Liste les fichiers partageant une empreinte donnee."""
        ...

    @abstractmethod
    def duplicate_groups(self, kind: HashKind) -> list[DuplicateGroup]:
        """Regroupe les fichiers par empreinte (groupes de 2 fichiers ou plus)."""
        ...

    # Vignettes

    @abstractmethod
    def save_thumbnail(self, thumbnail: Thumbnail) -> Thumbnail:
        """Enregistre la vignette d'un fichier (remplace la precedente)."""
        ...

    @abstractmethod
    def save_mini_thumbnail(self, mini_thumbnail: MiniThumbnail) -> MiniThumbnail:
        """Enregistre la mini vignette d'un fichier (remplace la precedente)."""
        ...

    @abstractmethod
    def get_thumbnail(self, media_file_id: int) -> Optional[Thumbnail]:
        """Recupere la vignette d'un fichier."""
        ...

    @abstractmethod
    def get_mini_thumbnail(self, media_file_id: int) -> Optional[MiniThumbnail]:
        """Recupere la mini vignette d'un fichier."""
        ...

    @abstractmethod
    def list_gallery_items(self) -> list[GalleryItem]:
        """Liste les mini vignettes jointes a leur fichier, triees par chemin."""
        ...

    @abstractmethod
    def list_failed_thumbnails(self) -> list[FailedRender]:
        """Liste les vignettes en echec, triees par chemin."""
        ...

    @abstractmethod
    def list_failed_mini_thumbnails(self) -> list[FailedRender]:
        """Liste les mini vignettes en echec, triees par chemin."""
        ...

    # Statistiques et maintenance

    @abstractmethod
    def count_media_files(self) -> int:
        ...

    @abstractmethod
    def count_thumbnails(self) -> int:
        ...

    @abstractmethod
    def count_mini_thumbnails(self) -> int:
        ...

    @abstractmethod
    def optimize(self) -> None:
        """Compacte et analyse la base (VACUUM / ANALYZE)."""
        ...
