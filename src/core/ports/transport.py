"""
Interface port pour le transport de messagerie.

Le transport est une capacite opaque : il sait envoyer un fichier vers son
stockage, puis publier un ou plusieurs fichiers deja envoyes dans un chat.
Le pipeline ne connait ni le protocole ni la gestion du rate limiting.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from src.core.value_objects import MediaKind

# Callback de progression : (octets transferes, octets totaux ou -1)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class TransportHandle:
    """
    Reference cote transport vers un fichier deja envoye.

    Attributs:
        file_id: Identifiant du fichier dans le stockage du transport
        kind: Type de media sous lequel le fichier a ete envoye
        name: Nom du fichier d'origine
    """

    file_id: str
    kind: MediaKind
    name: str = ""


@dataclass(frozen=True)
class AlbumEntry:
    """Element d'album pret a publier : handle + legende + dimensions."""

    handle: TransportHandle
    caption: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


class IMessagingTransport(ABC):
    """
    Interface du transport de messagerie.

    Les echecs levent TransportError. La gestion des limites de debit
    (attente et nouvel essai) releve de l'implementation.
    """

    @abstractmethod
    async def resolve_destination(self, chat_id: int) -> int:
        """
        Verifie et resout un identifiant logique de chat.

        Returns:
            Identifiant de destination utilisable par send_single/send_album
        """
        ...

    @abstractmethod
    async def upload_item(
        self,
        path: Path,
        kind: MediaKind,
        progress: Optional[ProgressCallback] = None,
    ) -> TransportHandle:
        """
        Envoie les octets d'un fichier vers le stockage du transport.

        Args:
            path: Fichier a envoyer
            kind: Type de media
            progress: Callback appele a chaque bloc transfere

        Returns:
            Handle reutilisable pour la publication
        """
        ...

    @abstractmethod
    async def send_single(
        self, destination: int, handle: TransportHandle, caption: str
    ) -> int:
        """Publie un fichier seul avec sa legende, retourne l'id du message."""
        ...

    @abstractmethod
    async def send_album(self, destination: int, entries: list[AlbumEntry]) -> int:
        """
        Publie plusieurs fichiers comme un seul album (operation atomique).

        Returns:
            Identifiant du premier message de l'album
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libere les ressources reseau."""
        ...
