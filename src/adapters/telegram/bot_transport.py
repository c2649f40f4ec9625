"""
Transport de messagerie base sur l'API Bot Telegram.

Implemente IMessagingTransport avec httpx. Les fichiers sont d'abord
envoyes vers un chat de transit pour obtenir un file_id reutilisable,
puis publies dans le chat de destination (message seul ou album).
L'album n'est donc publie qu'une fois tous ses elements envoyes.

Usage:
    transport = TelegramBotTransport(token="123:abc", staging_chat_id=-100123)
    handle = await transport.upload_item(path, MediaKind.VIDEO)
    message_id = await transport.send_single(-100456, handle, "#tag legende")
    await transport.close()
"""

import json
import os
from pathlib import Path
from typing import Any, BinaryIO, Optional

import httpx
from loguru import logger

from src.adapters.telegram.retry import RateLimitError, with_retry
from src.core.errors import TransportError
from src.core.ports.transport import (
    AlbumEntry,
    IMessagingTransport,
    ProgressCallback,
    TransportHandle,
)
from src.core.value_objects import MediaKind

# Methode d'envoi et nom du champ fichier par type de media
SEND_METHODS: dict[MediaKind, tuple[str, str]] = {
    MediaKind.PHOTO: ("sendPhoto", "photo"),
    MediaKind.VIDEO: ("sendVideo", "video"),
    MediaKind.AUDIO: ("sendAudio", "audio"),
    MediaKind.DOCUMENT: ("sendDocument", "document"),
}

# Champs du message retourne pouvant contenir le fichier (l'API peut
# requalifier un envoi, ex: video non reconnue -> document)
FILE_FIELDS = ("photo", "video", "audio", "document", "animation", "voice")


class ProgressFileReader:
    """
    Enveloppe de fichier binaire signalant chaque bloc lu.

    httpx lit le fichier par blocs pendant l'envoi multipart : chaque
    lecture fait avancer le compteur et appelle le callback.
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        total: int,
        callback: Optional[ProgressCallback] = None,
    ) -> None:
        self._file = fileobj
        self._total = total
        self._callback = callback
        self._transferred = 0

    def read(self, size: int = -1) -> bytes:
        chunk = self._file.read(size)
        if chunk:
            self._transferred += len(chunk)
            if self._callback is not None:
                self._callback(self._transferred, self._total)
        return chunk

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        position = self._file.seek(offset, whence)
        self._transferred = position
        return position

    def tell(self) -> int:
        return self._file.tell()

    def fileno(self) -> int:
        return self._file.fileno()


class TelegramBotTransport(IMessagingTransport):
    """
    Client API Bot Telegram.

    Implemente IMessagingTransport avec:
    - Envoi des fichiers vers un chat de transit (file_id reutilisable)
    - Publication en message seul ou en album (sendMediaGroup)
    - Retry automatique sur flood control (429)

    Attributes:
        DEFAULT_BASE_URL: URL de base de l'API Bot
    """

    DEFAULT_BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        token: str,
        staging_chat_id: int,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 600.0,
        max_attempts: int = 5,
        max_wait: float = 60.0,
    ) -> None:
        """
        Initialise le transport.

        Args:
            token: Jeton du bot
            staging_chat_id: Chat de transit ou les fichiers sont envoyes
            base_url: URL de base de l'API (serveur Bot API local possible)
            timeout: Delai maximum d'une requete en secondes
            max_attempts: Nombre de tentatives sur 429
            max_wait: Attente maximum entre deux tentatives
        """
        self._token = token
        self._staging_chat_id = staging_chat_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._max_wait = max_wait
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Returns:
            httpx.AsyncClient configure pour l'API Bot
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._base_url}/bot{self._token}",
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    async def _call(
        self,
        method: str,
        data: Optional[dict[str, Any]] = None,
        upload: Optional[tuple[str, Path, Optional[ProgressCallback]]] = None,
    ) -> Any:
        """
        Appelle une methode de l'API et retourne le champ result.

        Args:
            method: Nom de la methode (sendPhoto, getChat...)
            data: Parametres de la requete
            upload: (champ, fichier, callback) pour un envoi multipart

        Raises:
            TransportError: Erreur API ou reseau, ou 429 apres epuisement
                des tentatives
        """

        @with_retry(max_attempts=self._max_attempts, max_wait=self._max_wait)
        async def _do_request() -> Any:
            client = self._get_client()
            try:
                if upload is None:
                    response = await client.post(f"/{method}", data=data)
                else:
                    field, path, callback = upload
                    total = path.stat().st_size
                    with open(path, "rb") as handle:
                        reader = ProgressFileReader(handle, total, callback)
                        response = await client.post(
                            f"/{method}",
                            data=data,
                            files={field: (path.name, reader)},
                        )
            except httpx.HTTPError as e:
                raise TransportError(f"{method}: erreur reseau ({e})") from e
            except OSError as e:
                raise TransportError(f"{method}: lecture impossible ({e})") from e
            return self._parse_response(method, response)

        try:
            return await _do_request()
        except RateLimitError as e:
            raise TransportError(
                f"{method}: limite de debit toujours active apres "
                f"{self._max_attempts} tentatives",
                error_code=429,
            ) from e

    @staticmethod
    def _parse_response(method: str, response: httpx.Response) -> Any:
        """Extrait result ou convertit l'erreur API en exception."""
        try:
            payload = response.json()
        except ValueError:
            raise TransportError(
                f"{method}: reponse invalide (HTTP {response.status_code})",
                error_code=response.status_code,
            )

        if payload.get("ok"):
            return payload.get("result")

        error_code = payload.get("error_code", response.status_code)
        if error_code == 429:
            retry_after = payload.get("parameters", {}).get("retry_after")
            raise RateLimitError(retry_after)

        description = payload.get("description", "erreur inconnue")
        raise TransportError(f"{method}: {description}", error_code=error_code)

    @staticmethod
    def _extract_file_id(message: dict[str, Any], kind: MediaKind) -> str:
        """Retrouve le file_id du fichier dans le message retourne."""
        _, preferred = SEND_METHODS[kind]
        for field in (preferred, *FILE_FIELDS):
            value = message.get(field)
            if not value:
                continue
            # Les photos sont retournees en plusieurs tailles, la plus grande en dernier
            if isinstance(value, list):
                value = value[-1]
            return value["file_id"]
        raise TransportError("Aucun fichier dans la reponse de l'API")

    async def resolve_destination(self, chat_id: int) -> int:
        chat = await self._call("getChat", {"chat_id": chat_id})
        return int(chat["id"])

    async def upload_item(
        self,
        path: Path,
        kind: MediaKind,
        progress: Optional[ProgressCallback] = None,
    ) -> TransportHandle:
        method, field = SEND_METHODS[kind]
        data: dict[str, Any] = {"chat_id": self._staging_chat_id}
        if kind == MediaKind.VIDEO:
            data["supports_streaming"] = "true"

        message = await self._call(method, data, upload=(field, path, progress))
        handle = TransportHandle(
            file_id=self._extract_file_id(message, kind),
            kind=kind,
            name=path.name,
        )

        # Le message de transit n'est plus utile, le file_id reste valide
        try:
            await self._call(
                "deleteMessage",
                {"chat_id": self._staging_chat_id, "message_id": message["message_id"]},
            )
        except TransportError as e:
            logger.warning(f"Message de transit non supprime ({path.name}): {e}")

        return handle

    async def send_single(
        self, destination: int, handle: TransportHandle, caption: str
    ) -> int:
        method, field = SEND_METHODS[handle.kind]
        message = await self._call(
            method,
            {"chat_id": destination, field: handle.file_id, "caption": caption},
        )
        return int(message.get("message_id", 0))

    async def send_album(self, destination: int, entries: list[AlbumEntry]) -> int:
        media = []
        for entry in entries:
            item: dict[str, Any] = {
                "type": SEND_METHODS[entry.handle.kind][1],
                "media": entry.handle.file_id,
            }
            if entry.caption:
                item["caption"] = entry.caption
            if entry.width:
                item["width"] = entry.width
            if entry.height:
                item["height"] = entry.height
            if entry.handle.kind == MediaKind.VIDEO:
                item["supports_streaming"] = True
            media.append(item)

        messages = await self._call(
            "sendMediaGroup",
            {"chat_id": destination, "media": json.dumps(media)},
        )
        if not messages:
            return 0
        return int(messages[0].get("message_id", 0))

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
