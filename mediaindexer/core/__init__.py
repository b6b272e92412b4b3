"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), objets valeur et exceptions.
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (MediaFile, Thumbnail, MiniThumbnail)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (ThumbnailErrorType, ImageFormat, HashAlgorithm)
"""
