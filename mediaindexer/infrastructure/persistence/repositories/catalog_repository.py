"""
Implementation SQLModel du repository du catalogue.

Implemente l'interface ICatalogRepository pour la persistance des fichiers media,
des vignettes et des mini vignettes dans la base de donnees SQLite via SQLModel.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from itertools import groupby
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from mediaindexer.core.entities import (
    DuplicateGroup,
    FailedRender,
    GalleryItem,
    MediaFile,
    MiniThumbnail,
    Thumbnail,
)
from mediaindexer.core.exceptions import PersistenceError
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.core.value_objects import HashKind
from mediaindexer.infrastructure.persistence.models import (
    MediaFileModel,
    MiniThumbnailModel,
    ThumbnailModel,
)
from mediaindexer.utils.dates import as_utc


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel du catalogue.

    Implemente ICatalogRepository avec conversion bidirectionnelle entre
    les entites du domaine (dataclass) et les modeles de persistance.
    Chaque ecriture est committee immediatement : une etape interrompue
    laisse le catalogue dans un etat coherent et reprenable.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Convertit les erreurs SQLAlchemy en PersistenceError apres rollback."""
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError(f"Echec catalogue ({action}): {e}", cause=e) from e

    # Conversions

    def _to_entity(self, model: MediaFileModel) -> MediaFile:
        return MediaFile(
            id=model.id,
            file_path=model.file_path,
            extension=model.extension,
            file_size=model.file_size,
            last_modified=as_utc(model.last_modified),
            last_scanned=as_utc(model.last_scanned),
            quick_hash=model.quick_hash,
            content_hash=model.content_hash,
        )

    def _to_model(self, entity: MediaFile) -> MediaFileModel:
        return MediaFileModel(
            file_path=entity.file_path,
            extension=entity.extension,
            file_size=entity.file_size,
            last_modified=as_utc(entity.last_modified),
            last_scanned=as_utc(entity.last_scanned),
            quick_hash=entity.quick_hash,
            content_hash=entity.content_hash,
        )

    def _thumbnail_to_entity(self, model: ThumbnailModel) -> Thumbnail:
        return Thumbnail(
            id=model.id,
            media_file_id=model.media_file_id,
            thumbnail_path=model.thumbnail_path,
            width=model.width,
            height=model.height,
            orientation=model.orientation,
            format=model.format,
            created_at=as_utc(model.created_at),
            failed=model.failed,
            error_message=model.error_message,
            error_type=model.error_type,
        )

    def _mini_to_entity(self, model: MiniThumbnailModel) -> MiniThumbnail:
        return MiniThumbnail(
            id=model.id,
            media_file_id=model.media_file_id,
            base64_data=model.base64_data,
            width=model.width,
            height=model.height,
            orientation=model.orientation,
            format=model.format,
            created_at=as_utc(model.created_at),
            failed=model.failed,
            error_message=model.error_message,
            error_type=model.error_type,
        )

    # Fichiers media

    def get_by_id(self, media_file_id: int) -> Optional[MediaFile]:
        """Recupere un fichier media par son ID."""
        with self._guard("get_by_id"):
            model = self._session.get(MediaFileModel, media_file_id)
        if model:
            return self._to_entity(model)
        return None

    def get_by_path(self, file_path: str) -> Optional[MediaFile]:
        """Recupere un fichier media par son chemin."""
        with self._guard("get_by_path"):
            statement = select(MediaFileModel).where(MediaFileModel.file_path == file_path)
            model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def list_media_files(self) -> list[MediaFile]:
        with self._guard("list_media_files"):
            statement = select(MediaFileModel).order_by(MediaFileModel.file_path)
            models = self._session.exec(statement).all()
        return [self._to_entity(m) for m in models]

    def replace_media_file(self, media_file: MediaFile) -> MediaFile:
        """
        Remplace la ligne du chemin par un nouvel enregistrement.

        Les vignettes dependantes sont supprimees explicitement avant la ligne
        elle-meme ; le nouvel enregistrement recoit un ID jamais utilise.
        """
        with self._guard("replace_media_file"):
            statement = select(MediaFileModel).where(
                MediaFileModel.file_path == media_file.file_path
            )
            existing = self._session.exec(statement).first()

            if existing:
                self._delete_artifacts(existing.id)
                self._session.flush()
                self._session.delete(existing)
                self._session.flush()

            model = self._to_model(media_file)
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
        return self._to_entity(model)

    def _delete_rows(self, model_cls, media_file_id: int) -> None:
        statement = select(model_cls).where(model_cls.media_file_id == media_file_id)
        for model in self._session.exec(statement).all():
            self._session.delete(model)

    def _delete_artifacts(self, media_file_id: int) -> None:
        self._delete_rows(ThumbnailModel, media_file_id)
        self._delete_rows(MiniThumbnailModel, media_file_id)

    def touch_media_file(self, media_file_id: int, scanned_at: datetime) -> None:
        """Met a jour la date de dernier scan sans toucher aux hashes."""
        with self._guard("touch_media_file"):
            model = self._session.get(MediaFileModel, media_file_id)
            if model is None:
                return
            model.last_scanned = as_utc(scanned_at)
            self._session.add(model)
            self._session.commit()

    def update_hashes(
        self,
        media_file_id: int,
        quick_hash: Optional[str] = None,
        content_hash: Optional[str] = None,
    ) -> None:
        with self._guard("update_hashes"):
            model = self._session.get(MediaFileModel, media_file_id)
            if model is None:
                return
            if quick_hash is not None:
                model.quick_hash = quick_hash
            if content_hash is not None:
                model.content_hash = content_hash
            self._session.add(model)
            self._session.commit()

    def find_by_hash(self, kind: HashKind, hash_value: str) -> list[MediaFile]:
        """Liste les fichiers ayant l'empreinte donnee, tries par chemin."""
        column = getattr(MediaFileModel, kind.value)
        with self._guard("find_by_hash"):
            statement = (
                select(MediaFileModel)
                .where(column == hash_value)
                .order_by(MediaFileModel.file_path)
            )
            models = self._session.exec(statement).all()
        return [self._to_entity(m) for m in models]

    def duplicate_groups(self, kind: HashKind) -> list[DuplicateGroup]:
        """
        Regroupe les fichiers par empreinte.

        Seules les empreintes partagees par au moins deux fichiers forment un
        groupe. Les groupes sont tries par empreinte, les fichiers par chemin.
        """
        column = getattr(MediaFileModel, kind.value)
        with self._guard("duplicate_groups"):
            shared = (
                select(column)
                .where(col(column).is_not(None))
                .group_by(column)
                .having(func.count() > 1)
            )
            statement = (
                select(MediaFileModel)
                .where(col(column).in_(shared))
                .order_by(column, MediaFileModel.file_path)
            )
            models = self._session.exec(statement).all()

        return [
            DuplicateGroup(hash_value=hash_value, files=[self._to_entity(m) for m in members])
            for hash_value, members in groupby(models, key=lambda m: getattr(m, kind.value))
        ]

    # Vignettes

    def save_thumbnail(self, thumbnail: Thumbnail) -> Thumbnail:
        """Enregistre la vignette du fichier en remplacant la precedente."""
        with self._guard("save_thumbnail"):
            self._delete_rows(ThumbnailModel, thumbnail.media_file_id)
            self._session.flush()
            model = ThumbnailModel(
                media_file_id=thumbnail.media_file_id,
                thumbnail_path=thumbnail.thumbnail_path,
                width=thumbnail.width,
                height=thumbnail.height,
                orientation=thumbnail.orientation,
                format=thumbnail.format,
                created_at=as_utc(thumbnail.created_at),
                failed=thumbnail.failed,
                error_message=thumbnail.error_message,
                error_type=thumbnail.error_type,
            )
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
        return self._thumbnail_to_entity(model)

    def save_mini_thumbnail(self, mini_thumbnail: MiniThumbnail) -> MiniThumbnail:
        """Enregistre la mini vignette du fichier en remplacant la precedente."""
        with self._guard("save_mini_thumbnail"):
            self._delete_rows(MiniThumbnailModel, mini_thumbnail.media_file_id)
            self._session.flush()
            model = MiniThumbnailModel(
                media_file_id=mini_thumbnail.media_file_id,
                base64_data=mini_thumbnail.base64_data,
                width=mini_thumbnail.width,
                height=mini_thumbnail.height,
                orientation=mini_thumbnail.orientation,
                format=mini_thumbnail.format,
                created_at=as_utc(mini_thumbnail.created_at),
                failed=mini_thumbnail.failed,
                error_message=mini_thumbnail.error_message,
                error_type=mini_thumbnail.error_type,
            )
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
        return self._mini_to_entity(model)

    def get_thumbnail(self, media_file_id: int) -> Optional[Thumbnail]:
        with self._guard("get_thumbnail"):
            statement = select(ThumbnailModel).where(
                ThumbnailModel.media_file_id == media_file_id
            )
            model = self._session.exec(statement).first()
        return self._thumbnail_to_entity(model) if model else None

    def get_mini_thumbnail(self, media_file_id: int) -> Optional[MiniThumbnail]:
        with self._guard("get_mini_thumbnail"):
            statement = select(MiniThumbnailModel).where(
                MiniThumbnailModel.media_file_id == media_file_id
            )
            model = self._session.exec(statement).first()
        return self._mini_to_entity(model) if model else None

    def list_gallery_items(self) -> list[GalleryItem]:
        """Joint chaque mini vignette a son fichier, tri par chemin."""
        with self._guard("list_gallery_items"):
            statement = (
                select(MiniThumbnailModel, MediaFileModel)
                .join(MediaFileModel, MiniThumbnailModel.media_file_id == MediaFileModel.id)
                .order_by(MediaFileModel.file_path)
            )
            rows = self._session.exec(statement).all()

        return [
            GalleryItem(
                file_path=media.file_path,
                base64_data=mini.base64_data,
                format=mini.format,
                width=mini.width,
                height=mini.height,
            )
            for mini, media in rows
        ]

    def _list_failed(self, model_cls) -> list[FailedRender]:
        statement = (
            select(model_cls, MediaFileModel)
            .join(MediaFileModel, model_cls.media_file_id == MediaFileModel.id)
            .where(col(model_cls.failed).is_(True))
            .order_by(MediaFileModel.file_path)
        )
        rows = self._session.exec(statement).all()
        return [
            FailedRender(
                file_path=media.file_path,
                extension=media.extension,
                file_size=media.file_size,
                error_type=artifact.error_type,
                error_message=artifact.error_message,
                created_at=as_utc(artifact.created_at),
            )
            for artifact, media in rows
        ]

    def list_failed_thumbnails(self) -> list[FailedRender]:
        with self._guard("list_failed_thumbnails"):
            return self._list_failed(ThumbnailModel)

    def list_failed_mini_thumbnails(self) -> list[FailedRender]:
        with self._guard("list_failed_mini_thumbnails"):
            return self._list_failed(MiniThumbnailModel)

    # Statistiques et maintenance

    def _count(self, model_cls) -> int:
        with self._guard(f"count {model_cls.__tablename__}"):
            return self._session.exec(select(func.count()).select_from(model_cls)).one()

    def count_media_files(self) -> int:
        return self._count(MediaFileModel)

    def count_thumbnails(self) -> int:
        return self._count(ThumbnailModel)

    def count_mini_thumbnails(self) -> int:
        return self._count(MiniThumbnailModel)

    def optimize(self) -> None:
        """Execute VACUUM puis ANALYZE hors transaction."""
        with self._guard("optimize"):
            self._session.commit()
            engine = self._session.get_bind()
            with engine.connect().execution_options(isolation_level="AUTOCOMMIT") as conn:
                conn.exec_driver_sql("VACUUM")
                conn.exec_driver_sql("ANALYZE")
