"""
TeleStock - Envoi de médias vers Telegram.

Ce package scanne un répertoire de fichiers nommés TAG_DESCRIPTION.ext,
les envoie vers un chat Telegram avec une légende #TAG, génère une planche
contact pour chaque vidéo, découpe les vidéos trop volumineuses et range
les fichiers livrés dans un répertoire final.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (pipeline, orchestration des envois)
- adapters/ : Couche infrastructure (CLI, ffmpeg, API Bot Telegram, fichiers)
"""

__version__ = "0.1.0"
