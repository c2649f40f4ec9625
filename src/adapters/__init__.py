"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer + Rich)
- ffmpeg/ : Sonde et traitements vidéo par sous-processus (ffprobe, ffmpeg)
- telegram/ : Transport de messagerie (API Bot Telegram via httpx)
- file_system : Opérations sur le système de fichiers

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""

from src.adapters.ffmpeg import FFmpegToolkit
from src.adapters.file_system import FileSystemAdapter
from src.adapters.telegram import TelegramBotTransport

__all__ = [
    "FFmpegToolkit",
    "FileSystemAdapter",
    "TelegramBotTransport",
]
