"""
Couche services (etapes du pipeline).

Chaque service orchestre une etape du catalogage en s'appuyant sur les ports
de core/, jamais sur les implementations concretes des adapters :

- scanner : parcours des racines et enregistrement incremental
- hashing : empreintes rapides et empreintes de contenu
- deduplicator : regroupement des doublons par empreinte
- thumbnails : vignettes completes et mini vignettes
- gallery : galerie HTML statique paginee
- reporting : statistiques et diagnostic des echecs
"""
