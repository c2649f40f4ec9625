"""
Utilitaires et constantes pour TeleStock.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from src.utils.constants import (
    AUDIO_EXTENSIONS,
    MAX_ALBUM_ITEMS,
    PHOTO_EXTENSIONS,
    VIDEO_EXTENSIONS,
)
from src.utils.helpers import format_size, parse_size

__all__ = [
    "PHOTO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "MAX_ALBUM_ITEMS",
    "format_size",
    "parse_size",
]
