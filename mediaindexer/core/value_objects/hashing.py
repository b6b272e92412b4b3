"""
Objets valeur pour le calcul des empreintes.

Deux niveaux d'empreinte coexistent dans le catalogue :
- QUICK : empreinte rapide sur les metadonnees (nom, taille, mtime)
- CONTENT : hash cryptographique (ou xxh3) du contenu complet
"""

from enum import Enum


class HashAlgorithm(str, Enum):
    """Algorithmes de hash de contenu selectionnables dans la configuration."""

    SHA256 = "SHA-256"
    SHA1 = "SHA-1"
    SHA512 = "SHA-512"
    MD5 = "MD5"
    XXH3_64 = "XXH3-64"  # Hash incremental rapide 64 bits (non cryptographique)

    @property
    def hashlib_name(self) -> str:
        """Nom de l'algorithme pour hashlib.new()."""
        return self.value.replace("-", "").lower()


class HashKind(str, Enum):
    """Colonne d'empreinte utilisee comme cle de regroupement."""

    QUICK = "quick_hash"
    CONTENT = "content_hash"

    @property
    def label(self) -> str:
        return "Quick Hash" if self is HashKind.QUICK else "Content Hash"
