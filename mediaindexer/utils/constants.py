"""
Constantes globales pour Media Indexer.

Ce module contient les constantes utilisees dans l'application:
- Extensions media reconnues lors du scan (images et videos)
- Tailles de buffer et seuils de progression des etapes
- Couleurs des placeholders par type d'erreur
"""

# Extensions image reconnues
IMAGE_EXTENSIONS = frozenset({
    ".jpg",
    ".jpeg",
    ".png",
    ".bmp",
    ".gif",
    ".webp",
    ".heic",
    ".heif",
    ".tiff",
    ".tif",
    ".dng",
    ".raw",
    ".cr2",
    ".nef",
    ".arw",
})

# Extensions video reconnues (cataloguees, mais pas de vignette video)
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".mov",
    ".avi",
    ".mkv",
    ".webm",
    ".m4v",
})

# Liste blanche complete utilisee par le scanner (comparaison insensible a la casse)
MEDIA_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

# Lecture en flux pour le hash de contenu (8 Kio)
HASH_BUFFER_SIZE = 8192

# Frequence des logs de progression
SCAN_PROGRESS_INTERVAL = 1000
QUICK_HASH_PROGRESS_INTERVAL = 1000
CONTENT_HASH_PROGRESS_INTERVAL = 100
THUMBNAIL_PROGRESS_INTERVAL = 100

# Surcout HTML estime par vignette pour l'estimation du nombre de pages
HTML_FRAGMENT_OVERHEAD_BYTES = 500

# Fenetre de navigation autour de la page courante (+/- N pages)
NAVIGATION_WINDOW = 5

# Ratio largeur/hauteur des placeholders de mini vignettes (3:2)
MINI_PLACEHOLDER_ASPECT_RATIO = 1.5

# Couleurs des placeholders (fond, texte)
PLACEHOLDER_IO_COLORS = ((220, 53, 69), (255, 255, 255))
PLACEHOLDER_DECODING_COLORS = ((255, 193, 7), (0, 0, 0))
PLACEHOLDER_DEFAULT_COLORS = ((108, 117, 125), (255, 255, 255))

# Fichier de configuration YAML par defaut
DEFAULT_CONFIG_FILE = "media-indexer-config.yaml"
