"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Port outil média : Contrat pour l'utilitaire de transcodage
- IMediaToolkit : Sonde, extraction de frames, découpage, remux

Port transport : Contrat pour le service de messagerie
- IMessagingTransport : Envoi de fichiers et publication d'albums
- TransportHandle : Référence vers un fichier déjà envoyé
- AlbumEntry : Élément d'album prêt à publier

Port système de fichiers : Contrat pour les opérations fichiers
- IFileSystem : Listage, taille, déplacement
"""

from src.core.ports.file_system import IFileSystem
from src.core.ports.media_toolkit import IMediaToolkit
from src.core.ports.transport import (
    AlbumEntry,
    IMessagingTransport,
    ProgressCallback,
    TransportHandle,
)

__all__ = [
    # Outil média
    "IMediaToolkit",
    # Transport
    "IMessagingTransport",
    "TransportHandle",
    "AlbumEntry",
    "ProgressCallback",
    # Système de fichiers
    "IFileSystem",
]
