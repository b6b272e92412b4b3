"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des donnees
- ICatalogRepository : Stockage du catalogue (fichiers, vignettes, mini vignettes)

Ports imagerie : Contrats pour le rendu des images
- IImageRenderer : Decodage, orientation, redimensionnement, encodage, placeholders
- RenderSpec : Parametres de rendu d'un artefact
- RenderedImage : Image encodee prete a etre persistee
"""

from mediaindexer.core.ports.imaging import IImageRenderer, RenderedImage, RenderSpec
from mediaindexer.core.ports.repositories import ICatalogRepository

__all__ = [
    "ICatalogRepository",
    "IImageRenderer",
    "RenderSpec",
    "RenderedImage",
]
