"""
Constantes globales pour TeleStock.

Ce module contient toutes les constantes utilisees dans l'application:
- Extensions reconnues par type de media (photo, video, audio)
- Limites imposees par la plateforme de messagerie (taille d'album)
- Parametres par defaut de la planche contact (grille de miniatures)
- Conventions de nommage des fichiers derives
"""

# Extensions photo (envoyees comme image avec apercu)
PHOTO_EXTENSIONS = frozenset({
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".bmp",
})

# Extensions video (apercu + decoupage eventuel)
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".avi",
    ".mov",
    ".mkv",
    ".webm",
    ".flv",
})

# Extensions audio
AUDIO_EXTENSIONS = frozenset({
    ".mp3",
    ".wav",
    ".ogg",
    ".m4a",
    ".flac",
    ".aac",
})

# Suffixes de fichiers en cours d'ecriture, ignores lors du scan
PARTIAL_SUFFIXES = frozenset({
    ".part",
    ".tmp",
    ".crdownload",
})

# Nombre maximum d'elements dans un album (limite Telegram)
MAX_ALBUM_ITEMS = 10

# Planche contact : 6 colonnes x 5 lignes = 30 frames
PREVIEW_COLUMNS = 6
PREVIEW_ROWS = 5
PREVIEW_JPEG_QUALITY = 85

# Taille de base d'une cellule de la grille (pixels)
THUMBNAIL_BASE_WIDTH = 320
THUMBNAIL_MIN_HEIGHT = 180

# Marqueur insere dans les noms des fichiers livres
DELIVERY_ID_MARKER = "_msgid_"

# Conteneur final des segments apres remux
SEGMENT_CONTAINER = ".mp4"
