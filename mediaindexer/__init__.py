"""
Media Indexer - Catalogue incremental de photos et videos.

Ce package fournit les fonctionnalites pour scanner des arborescences de
medias, calculer leurs empreintes, detecter les doublons, generer des
vignettes et publier une galerie HTML statique paginee.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (etapes du pipeline)
- adapters/ : Couche infrastructure (CLI, imagerie Pillow)
- infrastructure/ : Persistance SQLite (SQLModel)
"""

__version__ = "1.0.0"
