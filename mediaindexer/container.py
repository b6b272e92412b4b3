"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
configuration, engine SQLite, repository du catalogue et services du pipeline.
"""

from dependency_injector import containers, providers

from .adapters.imaging import PillowImageRenderer
from .config_file import load_settings
from .infrastructure.persistence.database import create_catalog_engine, get_session, init_db
from .infrastructure.persistence.repositories import SQLModelCatalogRepository
from .services.deduplicator import DuplicateService
from .services.gallery import GalleryService
from .services.hashing import HashingService
from .services.reporting import ReportingService
from .services.scanner import ScannerService
from .services.thumbnails import ThumbnailService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.config_file.override(providers.Object(Path("config.yaml")))
        container.database.init()  # Initialise la DB une fois
        scanner = container.scanner_service()
    """

    # Chemin du fichier YAML (None : MEDIAINDEXER_CONFIG_FILE ou fichier par defaut)
    config_file = providers.Object(None)

    # Configuration - singleton chargee une seule fois
    config = providers.Singleton(load_settings, config_file)

    # Engine SQLite - un seul par processus
    engine = providers.Singleton(
        create_catalog_engine,
        database_path=config.provided.database_path,
    )

    # Database - Resource pour initialisation unique (tables + migrations)
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(get_session, engine=engine)

    # Repository - Factory pour nouvelle instance avec session fraiche
    catalog_repository = providers.Factory(
        SQLModelCatalogRepository,
        session=session,
    )

    # Adaptateur d'imagerie (sans etat - Singleton)
    image_renderer = providers.Singleton(PillowImageRenderer)

    # Services du pipeline
    scanner_service = providers.Factory(
        ScannerService,
        catalog_repo=catalog_repository,
        settings=config,
    )

    hashing_service = providers.Factory(
        HashingService,
        catalog_repo=catalog_repository,
        settings=config,
    )

    duplicate_service = providers.Factory(
        DuplicateService,
        catalog_repo=catalog_repository,
    )

    thumbnail_service = providers.Factory(
        ThumbnailService,
        catalog_repo=catalog_repository,
        renderer=image_renderer,
        settings=config,
    )

    gallery_service = providers.Factory(
        GalleryService,
        catalog_repo=catalog_repository,
        settings=config,
    )

    reporting_service = providers.Factory(
        ReportingService,
        catalog_repo=catalog_repository,
        duplicate_service=duplicate_service,
    )
