"""
Service d'envoi des fichiers vers le transport de messagerie.

Deux modes :
- envoi simple : un fichier, une legende, un message ;
- envoi d'album : tous les elements sont envoyes en parallele (borne par un
  semaphore), puis l'album est publie en une seule operation, uniquement si
  chaque element a ete envoye.

L'ordre des elements de l'album est celui de la requete, jamais l'ordre
de fin des envois.
"""

import asyncio
from pathlib import Path

from src.core.errors import TeleStockError, UploadFailure
from src.core.ports.transport import AlbumEntry, IMessagingTransport, TransportHandle
from src.core.value_objects import AlbumRequest, MediaItem, MediaKind
from src.services.album import validate_item_count
from src.services.context import PipelineContext


class UploadOrchestrator:
    """
    Orchestration des envois et suivi de leur progression.

    Attributes:
        concurrency: Nombre maximum d'envois simultanes dans un album
    """

    def __init__(
        self,
        transport: IMessagingTransport,
        context: PipelineContext,
        concurrency: int = 4,
    ) -> None:
        self._transport = transport
        self._context = context
        self.concurrency = max(1, concurrency)

    async def single_upload(
        self,
        destination: int,
        path: Path,
        caption: str,
        kind: MediaKind = MediaKind.DOCUMENT,
    ) -> int:
        """
        Envoie un fichier seul avec sa legende.

        Returns:
            Identifiant du message livre (non nul)

        Raises:
            UploadFailure: Echec de l'envoi ou identifiant nul
        """
        handle = await self._upload_one(path, kind)
        try:
            delivery_id = await self._transport.send_single(destination, handle, caption)
        except TeleStockError as e:
            raise UploadFailure(f"Publication impossible de {path.name}: {e}") from e
        return self._check_delivery(delivery_id, path.name)

    async def album_upload(self, request: AlbumRequest) -> int:
        """
        Envoie tous les elements puis publie l'album.

        Les envois sont tous attendus, qu'ils reussissent ou non. Si un seul
        echoue, l'album n'est pas publie.

        Returns:
            Identifiant du premier message de l'album (non nul)

        Raises:
            AlbumTooLarge: Si la requete depasse la limite d'elements
            UploadFailure: Si un element ou la publication echoue
        """
        validate_item_count(len(request))

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(item: MediaItem) -> TransportHandle:
            async with semaphore:
                return await self._upload_one(item.path, item.kind)

        results = await asyncio.gather(
            *(_bounded(item) for item in request.items),
            return_exceptions=True,
        )

        for item, result in zip(request.items, results):
            if isinstance(result, (asyncio.CancelledError, UploadFailure)):
                raise result
            if isinstance(result, BaseException):
                raise UploadFailure(
                    f"Envoi impossible de {item.path.name}: {result}"
                ) from result

        # gather conserve l'ordre des arguments : results[i] correspond a items[i]
        entries = [
            AlbumEntry(
                handle=handle,
                caption=item.caption,
                width=item.width,
                height=item.height,
            )
            for item, handle in zip(request.items, results)
        ]

        self._context.raise_if_cancelled()
        try:
            delivery_id = await self._transport.send_album(request.destination, entries)
        except TeleStockError as e:
            raise UploadFailure(f"Publication de l'album impossible: {e}") from e
        return self._check_delivery(delivery_id, request.items[0].path.name)

    async def _upload_one(self, path: Path, kind: MediaKind) -> TransportHandle:
        """Envoie un element en suivant sa progression dans le registre."""
        progress = self._context.progress
        upload_id = progress.register(path.name, _size_or_unknown(path))

        def _on_progress(transferred: int, total: int) -> None:
            progress.update(upload_id, transferred, total)

        try:
            self._context.raise_if_cancelled()
            return await self._transport.upload_item(path, kind, _on_progress)
        except TeleStockError as e:
            raise UploadFailure(f"Envoi impossible de {path.name}: {e}") from e
        finally:
            progress.remove(upload_id)

    def _check_delivery(self, delivery_id: int, name: str) -> int:
        if not delivery_id:
            raise UploadFailure(f"Aucun identifiant de livraison pour {name}")
        self._context.log.debug(f"{name} livre (message {delivery_id})")
        return delivery_id


def _size_or_unknown(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return -1
