"""
Service de statistiques et de diagnostic du catalogue.

Fournit les agregats affiches par les commandes status et diagnostic :
totaux du catalogue, doublons par empreinte et rendus en echec.
"""

from collections import Counter
from dataclasses import dataclass, field

from mediaindexer.core.entities import FailedRender
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.core.value_objects import HashKind
from mediaindexer.services.deduplicator import DuplicateService, DuplicateSummary


@dataclass
class CatalogStats:
    """Totaux du catalogue et bilan des doublons par empreinte."""

    media_files: int
    thumbnails: int
    mini_thumbnails: int
    quick_duplicates: DuplicateSummary
    content_duplicates: DuplicateSummary


@dataclass
class FailureReport:
    """
    Rendus en echec, par type d'artefact.

    error_summary compte les echecs par code d'erreur (IO, DECODING...),
    toutes categories confondues.
    """

    failed_thumbnails: list[FailedRender] = field(default_factory=list)
    failed_mini_thumbnails: list[FailedRender] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.failed_thumbnails) + len(self.failed_mini_thumbnails)

    @property
    def error_summary(self) -> Counter:
        return Counter(
            failure.error_type or "UNKNOWN"
            for failure in self.failed_thumbnails + self.failed_mini_thumbnails
        )


class ReportingService:
    """Service de lecture des agregats du catalogue."""

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        duplicate_service: DuplicateService,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._duplicate_service = duplicate_service

    def catalog_stats(self) -> CatalogStats:
        return CatalogStats(
            media_files=self._catalog_repo.count_media_files(),
            thumbnails=self._catalog_repo.count_thumbnails(),
            mini_thumbnails=self._catalog_repo.count_mini_thumbnails(),
            quick_duplicates=self._duplicate_service.summarize(HashKind.QUICK),
            content_duplicates=self._duplicate_service.summarize(HashKind.CONTENT),
        )

    def failure_report(self) -> FailureReport:
        return FailureReport(
            failed_thumbnails=self._catalog_repo.list_failed_thumbnails(),
            failed_mini_thumbnails=self._catalog_repo.list_failed_mini_thumbnails(),
        )
