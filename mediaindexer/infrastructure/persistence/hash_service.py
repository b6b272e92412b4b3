"""
Fonctions de calcul des empreintes de fichiers.

Deux niveaux :
    - Empreinte rapide : MD5 de "nom|taille|mtime", sans lire le contenu.
      Detecte les changements et les doublons probables a cout quasi nul.
    - Hash de contenu : digest du flux complet, lu par blocs de 8 Kio
      (le fichier n'est jamais charge entierement en memoire).

Les algorithmes hashlib (SHA-256, SHA-1, SHA-512, MD5) et XXH3-64 (xxhash)
sont selectionnables via HashAlgorithm.
"""

import hashlib
from datetime import datetime
from pathlib import Path

import xxhash
from loguru import logger

from mediaindexer.core.value_objects import HashAlgorithm
from mediaindexer.utils.constants import HASH_BUFFER_SIZE


def compute_quick_hash(file_path: Path, file_size: int, last_modified: datetime) -> str:
    """
    Calcule l'empreinte rapide d'un fichier a partir de ses metadonnees.

    Args :
        file_path : Chemin du fichier (seul le nom de base est utilise)
        file_size : Taille en octets
        last_modified : Date de derniere modification

    Retourne :
        Digest hexadecimal MD5 (32 caracteres), ou xxh64 (16 caracteres)
        si MD5 est indisponible sur la plateforme
    """
    payload = f"{Path(file_path).name}|{file_size}|{last_modified.isoformat()}".encode("utf-8")
    try:
        return hashlib.md5(payload).hexdigest()
    except ValueError as e:
        # Builds FIPS : MD5 refuse
        logger.error(f"MD5 indisponible, repli sur xxh64: {e}")
        return xxhash.xxh64(payload).hexdigest()


def _new_hasher(algorithm: HashAlgorithm):
    if algorithm is HashAlgorithm.XXH3_64:
        return xxhash.xxh3_64()
    return hashlib.new(algorithm.hashlib_name)


def compute_content_hash(
    file_path: Path,
    algorithm: HashAlgorithm = HashAlgorithm.SHA256,
    buffer_size: int = HASH_BUFFER_SIZE,
) -> str:
    """
    Calcule le hash du contenu complet d'un fichier, lu en flux.

    Args :
        file_path : Chemin vers le fichier a hasher
        algorithm : Algorithme de hash (defaut SHA-256)
        buffer_size : Taille des blocs de lecture (defaut 8 Kio)

    Retourne :
        Digest hexadecimal en minuscules

    Raises :
        FileNotFoundError : Si le fichier n'existe pas
        PermissionError : Si le fichier n'est pas lisible
    """
    hasher = _new_hasher(algorithm)

    with open(file_path, "rb") as f:
        while chunk := f.read(buffer_size):
            hasher.update(chunk)

    return hasher.hexdigest()
