"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- ArtifactKind : Vignette complete ou mini vignette
- ThumbnailErrorType : Classification fermee des erreurs de rendu
- RenderStatus / RenderOutcome : Issue terminale d'un rendu
- ImageFormat : Encodeurs supportes
- HashAlgorithm : Algorithmes de hash de contenu
- HashKind : Colonne d'empreinte (rapide ou contenu)
"""

from mediaindexer.core.value_objects.hashing import HashAlgorithm, HashKind
from mediaindexer.core.value_objects.render import (
    ArtifactKind,
    ImageFormat,
    RenderOutcome,
    RenderStatus,
    ThumbnailErrorType,
)

__all__ = [
    "ArtifactKind",
    "ImageFormat",
    "RenderOutcome",
    "RenderStatus",
    "ThumbnailErrorType",
    "HashAlgorithm",
    "HashKind",
]
