"""
Module de persistance SQLite du catalogue.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Engine SQLite, session factory, initialisation et migrations
- models.py : Modeles SQLModel representant les tables de la base de donnees
- hash_service.py : Calcul des empreintes (rapide et contenu)

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from mediaindexer.infrastructure.persistence import create_catalog_engine, init_db

    engine = create_catalog_engine("media-index.db")
    init_db(engine)
    with get_session(engine) as session:
        repo = SQLModelCatalogRepository(session)
"""

from mediaindexer.infrastructure.persistence.database import (
    create_catalog_engine,
    get_session,
    init_db,
)
from mediaindexer.infrastructure.persistence.models import (
    MediaFileModel,
    MiniThumbnailModel,
    ThumbnailModel,
)

__all__ = [
    "create_catalog_engine",
    "get_session",
    "init_db",
    "MediaFileModel",
    "ThumbnailModel",
    "MiniThumbnailModel",
]
