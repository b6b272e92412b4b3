"""
Service de generation des vignettes.

Pilote, pour chaque fichier du catalogue et chaque type d'artefact, la
machine a etats du rendu :

    source absente        -> SKIPPED_NO_SOURCE (rien n'est ecrit)
    artefact deja present -> SKIPPED_ALREADY_RENDERED
    rendu reussi          -> SUCCESS (fichier ou payload + ligne)
    echec classifie       -> FAILED (placeholder ou ligne d'echec seule)

Le travail sur les pixels est delegue a l'adaptateur IImageRenderer.
"""

import base64
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from mediaindexer.config import Settings
from mediaindexer.core.entities import MediaFile, MiniThumbnail, Thumbnail
from mediaindexer.core.exceptions import PersistenceError, RenderError
from mediaindexer.core.ports.imaging import IImageRenderer, RenderedImage, RenderSpec
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.core.value_objects import (
    ArtifactKind,
    RenderOutcome,
    RenderStatus,
    ThumbnailErrorType,
)
from mediaindexer.utils.constants import (
    MINI_PLACEHOLDER_ASPECT_RATIO,
    THUMBNAIL_PROGRESS_INTERVAL,
)


@dataclass
class RenderStats:
    """
    Compteurs d'une passe de generation.

    Attributs:
        kind: Type d'artefact genere
        processed: Fichiers parcourus
        by_status: Nombre d'issues par RenderStatus
        by_error: Nombre d'echecs par ThumbnailErrorType
        placeholders: Placeholders synthetises
        errors: Fichiers abandonnes sur erreur inattendue
    """

    kind: ArtifactKind
    processed: int = 0
    by_status: Counter = field(default_factory=Counter)
    by_error: Counter = field(default_factory=Counter)
    placeholders: int = 0
    errors: int = 0

    def record(self, outcome: RenderOutcome) -> None:
        self.by_status[outcome.status] += 1
        if outcome.error_type is not None:
            self.by_error[outcome.error_type] += 1
        if outcome.placeholder:
            self.placeholders += 1

    @property
    def succeeded(self) -> int:
        return self.by_status[RenderStatus.SUCCESS]

    @property
    def failed(self) -> int:
        return self.by_status[RenderStatus.FAILED]

    @property
    def skipped(self) -> int:
        return (
            self.by_status[RenderStatus.SKIPPED_NO_SOURCE]
            + self.by_status[RenderStatus.SKIPPED_ALREADY_RENDERED]
        )


class ThumbnailService:
    """
    Service de rendu des vignettes completes et des mini vignettes.

    Les vignettes completes sont ecrites sous thumbnail_output_dir/<id>.<ext> ;
    les mini vignettes sont stockees en base64 dans le catalogue.
    """

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        renderer: IImageRenderer,
        settings: Settings,
    ) -> None:
        """
        Initialise le service de vignettes.

        Args:
            catalog_repo: Repository du catalogue
            renderer: Implementation de IImageRenderer (Pillow)
            settings: Configuration (sections thumbnail et mini_thumbnail)
        """
        self._catalog_repo = catalog_repo
        self._renderer = renderer
        self._settings = settings

    # Specifications de rendu

    def _thumbnail_spec(self) -> RenderSpec:
        cfg = self._settings.thumbnail
        return RenderSpec(
            image_format=cfg.format,
            quality=cfg.quality,
            respect_orientation=cfg.respect_exif_orientation,
            max_dimension=cfg.max_dimension,
        )

    def _mini_spec(self) -> RenderSpec:
        cfg = self._settings.mini_thumbnail
        return RenderSpec(
            image_format=cfg.format,
            quality=cfg.quality,
            respect_orientation=cfg.respect_exif_orientation,
            target_height=cfg.max_height,
        )

    def thumbnail_path(self, media_file: MediaFile) -> Path:
        """Chemin de sortie de la vignette complete : <dossier>/<id>.<ext>."""
        extension = self._settings.thumbnail.format.extension
        return self._settings.thumbnail_output_dir / f"{media_file.id}.{extension}"

    # Vignettes completes

    def render_thumbnail(self, media_file: MediaFile) -> RenderOutcome:
        """
        Produit la vignette complete d'un fichier.

        Raises:
            PersistenceError: Si le catalogue est indisponible
        """
        kind = ArtifactKind.THUMBNAIL
        source = media_file.path

        if not source.exists():
            logger.warning(f"Fichier introuvable: {source}")
            return RenderOutcome(kind, RenderStatus.SKIPPED_NO_SOURCE)

        output = self.thumbnail_path(media_file)
        if output.exists():
            logger.debug(f"Vignette deja presente: {output}")
            return RenderOutcome(kind, RenderStatus.SKIPPED_ALREADY_RENDERED)

        spec = self._thumbnail_spec()
        try:
            rendered = self._renderer.render(source, spec)
        except RenderError as e:
            return self._thumbnail_failure(media_file, output, spec, e)

        output.write_bytes(rendered.data)
        self._catalog_repo.save_thumbnail(
            Thumbnail(
                media_file_id=media_file.id,
                thumbnail_path=str(output),
                width=rendered.width,
                height=rendered.height,
                orientation=rendered.orientation,
                format=spec.image_format.value,
            )
        )
        return RenderOutcome(
            kind, RenderStatus.SUCCESS, width=rendered.width, height=rendered.height
        )

    def _thumbnail_failure(
        self,
        media_file: MediaFile,
        output: Path,
        spec: RenderSpec,
        error: RenderError,
    ) -> RenderOutcome:
        kind = ArtifactKind.THUMBNAIL
        logger.warning(f"{error.message} [Format: {media_file.extension}]")

        if not self._settings.thumbnail.generate_placeholders:
            self._catalog_repo.save_thumbnail(
                Thumbnail(
                    media_file_id=media_file.id,
                    failed=True,
                    error_message=error.message,
                    error_type=error.error_type.code,
                )
            )
            return RenderOutcome(kind, RenderStatus.FAILED, error_type=error.error_type)

        size = self._settings.thumbnail.max_dimension
        placeholder = self._placeholder(media_file, size, size, error.error_type, spec)
        output.write_bytes(placeholder.data)
        self._catalog_repo.save_thumbnail(
            Thumbnail(
                media_file_id=media_file.id,
                thumbnail_path=str(output),
                width=placeholder.width,
                height=placeholder.height,
                format=spec.image_format.value,
                failed=True,
                error_message=f"Placeholder generated for {error.error_type.description}",
                error_type=error.error_type.code,
            )
        )
        logger.debug(f"Placeholder de vignette genere pour {media_file.file_path}")
        return RenderOutcome(
            kind,
            RenderStatus.FAILED,
            error_type=error.error_type,
            placeholder=True,
            width=placeholder.width,
            height=placeholder.height,
        )

    # Mini vignettes

    def render_mini_thumbnail(self, media_file: MediaFile, force: bool = False) -> RenderOutcome:
        """
        Produit la mini vignette d'un fichier.

        Une mini vignette deja stockee avec un payload n'est pas recalculee,
        sauf si force=True.

        Raises:
            PersistenceError: Si le catalogue est indisponible
        """
        kind = ArtifactKind.MINI_THUMBNAIL
        source = media_file.path

        if not source.exists():
            logger.warning(f"Fichier introuvable: {source}")
            return RenderOutcome(kind, RenderStatus.SKIPPED_NO_SOURCE)

        if not force:
            existing = self._catalog_repo.get_mini_thumbnail(media_file.id)
            if existing is not None and existing.base64_data:
                return RenderOutcome(kind, RenderStatus.SKIPPED_ALREADY_RENDERED)

        spec = self._mini_spec()
        try:
            rendered = self._renderer.render(source, spec)
        except RenderError as e:
            return self._mini_failure(media_file, spec, e)

        self._catalog_repo.save_mini_thumbnail(
            MiniThumbnail(
                media_file_id=media_file.id,
                base64_data=base64.b64encode(rendered.data).decode("ascii"),
                width=rendered.width,
                height=rendered.height,
                orientation=rendered.orientation,
                format=spec.image_format.value,
            )
        )
        return RenderOutcome(
            kind, RenderStatus.SUCCESS, width=rendered.width, height=rendered.height
        )

    def _mini_failure(
        self,
        media_file: MediaFile,
        spec: RenderSpec,
        error: RenderError,
    ) -> RenderOutcome:
        kind = ArtifactKind.MINI_THUMBNAIL
        logger.warning(f"{error.message} [Format: {media_file.extension}]")

        if not self._settings.mini_thumbnail.generate_placeholders:
            self._catalog_repo.save_mini_thumbnail(
                MiniThumbnail(
                    media_file_id=media_file.id,
                    failed=True,
                    error_message=error.message,
                    error_type=error.error_type.code,
                )
            )
            return RenderOutcome(kind, RenderStatus.FAILED, error_type=error.error_type)

        height = self._settings.mini_thumbnail.max_height
        width = int(height * MINI_PLACEHOLDER_ASPECT_RATIO)
        placeholder = self._placeholder(media_file, width, height, error.error_type, spec)
        self._catalog_repo.save_mini_thumbnail(
            MiniThumbnail(
                media_file_id=media_file.id,
                base64_data=base64.b64encode(placeholder.data).decode("ascii"),
                width=placeholder.width,
                height=placeholder.height,
                format=spec.image_format.value,
                failed=True,
                error_message=f"Placeholder generated for {error.error_type.description}",
                error_type=error.error_type.code,
            )
        )
        logger.debug(f"Placeholder de mini vignette genere pour {media_file.file_path}")
        return RenderOutcome(
            kind,
            RenderStatus.FAILED,
            error_type=error.error_type,
            placeholder=True,
            width=placeholder.width,
            height=placeholder.height,
        )

    def _placeholder(
        self,
        media_file: MediaFile,
        width: int,
        height: int,
        error_type: ThumbnailErrorType,
        spec: RenderSpec,
    ) -> RenderedImage:
        return self._renderer.render_placeholder(
            width, height, media_file.extension, error_type, spec
        )

    # Passes completes

    def generate_thumbnails(self) -> RenderStats:
        """Genere les vignettes completes de tout le catalogue."""
        logger.info("Debut de la generation des vignettes")
        self._settings.thumbnail_output_dir.mkdir(parents=True, exist_ok=True)
        return self._run(ArtifactKind.THUMBNAIL, self.render_thumbnail)

    def generate_mini_thumbnails(self, force: bool = False) -> RenderStats:
        """Genere les mini vignettes de tout le catalogue."""
        logger.info("Debut de la generation des mini vignettes")
        return self._run(
            ArtifactKind.MINI_THUMBNAIL,
            lambda media_file: self.render_mini_thumbnail(media_file, force=force),
        )

    def _run(self, kind: ArtifactKind, render) -> RenderStats:
        media_files = self._catalog_repo.list_media_files()
        logger.info(f"{len(media_files)} fichiers media a traiter")
        stats = RenderStats(kind=kind)

        for media_file in media_files:
            try:
                stats.record(render(media_file))
            except PersistenceError:
                raise
            except Exception as e:
                stats.errors += 1
                logger.error(f"Echec du rendu ({kind.value}) pour {media_file.file_path}: {e}")

            stats.processed += 1
            if stats.processed % THUMBNAIL_PROGRESS_INTERVAL == 0:
                logger.info(f"Rendu ({kind.value}): {stats.processed} fichiers...")

        logger.info(
            f"Generation terminee ({kind.value}): {stats.succeeded} reussi(s), "
            f"{stats.failed} echec(s), {stats.skipped} ignore(s), "
            f"{stats.placeholders} placeholder(s)"
        )
        return stats
