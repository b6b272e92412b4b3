"""
Modeles SQLModel pour le catalogue media.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- media_files: Fichiers media decouverts par le scanner
- thumbnails: Vignettes completes (fichier sur disque)
- mini_thumbnails: Mini vignettes (payload base64 en base)

Les identifiants de media_files sont en AUTOINCREMENT : un ID supprime n'est
jamais reattribue, une vignette <id>.<ext> obsolete ne peut donc pas etre
reprise par un autre fichier.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, Index, SQLModel

from mediaindexer.utils.dates import utc_now


class MediaFileModel(SQLModel, table=True):
    """
    Modele representant un fichier media catalogue.

    Le chemin absolu est unique ; les hashes restent NULL tant qu'ils
    n'ont pas ete calcules pour la version courante du fichier.
    """

    __tablename__ = "media_files"
    __table_args__ = (
        Index("ix_media_files_quick_hash", "quick_hash"),
        Index("ix_media_files_content_hash", "content_hash"),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    file_path: str = Field(unique=True)
    extension: str = ""
    file_size: int = 0
    last_modified: datetime
    last_scanned: datetime
    quick_hash: Optional[str] = None
    content_hash: Optional[str] = None


class ThumbnailModel(SQLModel, table=True):
    """
    Modele representant une vignette complete.

    Une ligne en echec (failed=True) a thumbnail_path renseigne seulement
    si un placeholder a ete ecrit a la place.
    """

    __tablename__ = "thumbnails"

    id: Optional[int] = Field(default=None, primary_key=True)
    media_file_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("media_files.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    thumbnail_path: Optional[str] = None
    width: int = 0
    height: int = 0
    orientation: int = 1
    format: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    failed: bool = False
    error_message: Optional[str] = None
    error_type: Optional[str] = None


class MiniThumbnailModel(SQLModel, table=True):
    """Modele representant une mini vignette stockee inline (base64)."""

    __tablename__ = "mini_thumbnails"

    id: Optional[int] = Field(default=None, primary_key=True)
    media_file_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("media_files.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    base64_data: Optional[str] = None
    width: int = 0
    height: int = 0
    orientation: int = 1
    format: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    failed: bool = False
    error_message: Optional[str] = None
    error_type: Optional[str] = None
