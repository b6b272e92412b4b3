"""
Implementations SQLModel des repositories.

Ce module contient l'implementation concrete de l'interface ICatalogRepository
definie dans mediaindexer/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Le repository :
- Herite de l'interface ABC du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from mediaindexer.infrastructure.persistence.repositories.catalog_repository import (
    SQLModelCatalogRepository,
)

__all__ = [
    "SQLModelCatalogRepository",
]
