"""
Service de detection des doublons.

Regroupe les fichiers du catalogue par empreinte (rapide ou contenu).
Chaque groupe est libelle selon la cle reellement utilisee.
"""

from dataclasses import dataclass

from loguru import logger

from mediaindexer.core.entities import DuplicateGroup
from mediaindexer.core.ports.repositories import ICatalogRepository
from mediaindexer.core.value_objects import HashKind


@dataclass(frozen=True)
class DuplicateSummary:
    """
    Bilan des doublons pour une cle.

    Attributs:
        key: Empreinte utilisee pour le regroupement
        group_count: Nombre de groupes (empreintes partagees)
        duplicate_file_count: Copies redondantes (somme des tailles de groupe - 1)
    """

    key: HashKind
    group_count: int
    duplicate_file_count: int


class DuplicateService:
    """Service de regroupement des fichiers par empreinte."""

    def __init__(self, catalog_repo: ICatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def find_duplicates(self, key: HashKind = HashKind.CONTENT) -> list[DuplicateGroup]:
        """
        Liste les groupes de fichiers partageant une meme empreinte.

        Args:
            key: Empreinte de regroupement (defaut: hash de contenu)

        Returns:
            Groupes d'au moins deux fichiers, fichiers tries par chemin
        """
        logger.info(f"Recherche des doublons par {key.label}")
        groups = self._catalog_repo.duplicate_groups(key)

        for index, group in enumerate(groups):
            if index == 0 or (index + 1) % 10 == 0:
                logger.info(
                    f"Groupe de doublons {index + 1} ({key.label}: {group.hash_value}): "
                    f"{len(group.files)} fichiers"
                )

        logger.info(f"Recherche des doublons terminee: {len(groups)} groupe(s) par {key.label}")
        return groups

    def summarize(self, key: HashKind = HashKind.CONTENT) -> DuplicateSummary:
        """Calcule le nombre de groupes et de copies redondantes pour une cle."""
        groups = self._catalog_repo.duplicate_groups(key)
        return DuplicateSummary(
            key=key,
            group_count=len(groups),
            duplicate_file_count=sum(group.duplicate_count for group in groups),
        )
