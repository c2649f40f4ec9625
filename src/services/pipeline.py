"""
Pipeline de traitement d'un lot de fichiers.

Traite les fichiers du repertoire source un par un, strictement en
sequence :
- photo, audio, document : envoi simple avec legende ;
- video : sonde, planche contact, decoupage eventuel, album
  (planche + segments) ;
puis deplacement vers le repertoire final.

Toute erreur metier ou systeme est contenue au niveau du fichier : le fichier reste
en place dans le repertoire source et le lot continue. Seule l'annulation
arrete le lot.
"""

import asyncio
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional

from src.core.entities import DeliveryResult, SourceFile
from src.core.errors import TeleStockError
from src.core.value_objects import MediaKind
from src.services.album import AlbumBuilder
from src.services.catalog import FileCatalog, detect_media_kind, parse_filename
from src.services.context import PipelineContext
from src.services.probe import MediaProbeService
from src.services.relocator import FileRelocator, RelocationResult
from src.services.segmenter import Segmenter
from src.services.thumbnail import ThumbnailComposer
from src.services.uploader import UploadOrchestrator
from src.utils.helpers import format_size

# Prefixe des repertoires de travail crees pour chaque video
SCRATCH_PREFIX = "telestock_"


@dataclass
class FileOutcome:
    """
    Issue du traitement d'un fichier.

    Attributs:
        source: Fichier traite
        delivery_id: Identifiant de livraison (0 = echec)
        error: Message d'erreur (vide si succes)
        relocation: Resultat du deplacement (None si echec)
    """

    source: SourceFile
    delivery_id: int = 0
    error: str = ""
    relocation: Optional[RelocationResult] = None

    @property
    def success(self) -> bool:
        return self.delivery_id != 0 and not self.error


@dataclass
class BatchSummary:
    """Bilan d'un lot : fichiers traites, reussis, echoues."""

    outcomes: list[FileOutcome] = field(default_factory=list)
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return self.processed - self.succeeded

    @property
    def failures(self) -> dict[str, str]:
        """Nom de fichier -> raison de l'echec."""
        return {
            outcome.source.filename: outcome.error
            for outcome in self.outcomes
            if not outcome.success
        }


@contextmanager
def scratch_directory(
    parent: Optional[Path], keep: bool = False, log=None
) -> Iterator[Path]:
    """
    Repertoire de travail exclusif au fichier en cours.

    Supprime a la sortie, en cas de succes comme d'echec, sauf si keep
    est demande.
    """
    if parent is not None:
        parent.mkdir(parents=True, exist_ok=True)
    workdir = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=parent))
    try:
        yield workdir
    finally:
        if keep:
            if log is not None:
                log.info(f"Repertoire de travail conserve: {workdir}")
        else:
            shutil.rmtree(workdir, ignore_errors=True)


class BatchPipeline:
    """
    Orchestration du traitement d'un lot.

    Utilisation typique:
        pipeline = container.batch_pipeline()
        summary = await pipeline.run()
    """

    def __init__(
        self,
        catalog: FileCatalog,
        probe_service: MediaProbeService,
        segmenter: Segmenter,
        thumbnail_composer: ThumbnailComposer,
        album_builder: AlbumBuilder,
        uploader: UploadOrchestrator,
        relocator: FileRelocator,
        context: PipelineContext,
        destination: int,
        temp_dir: Optional[Path] = None,
        keep_temp: bool = False,
        on_file_done: Optional[Callable[[FileOutcome], None]] = None,
    ) -> None:
        """
        Initialise le pipeline.

        Args:
            catalog: Catalogue du repertoire source
            probe_service: Sonde video
            segmenter: Decoupage des videos
            thumbnail_composer: Planche contact
            album_builder: Assemblage des albums
            uploader: Envoi des fichiers
            relocator: Deplacement vers le repertoire final
            context: Contexte partage (logger, progression, annulation)
            destination: Chat cible (deja resolu)
            temp_dir: Parent des repertoires de travail (None = temporaire systeme)
            keep_temp: Conserver les repertoires de travail pour inspection
            on_file_done: Callback appele apres chaque fichier
        """
        self._catalog = catalog
        self._probe = probe_service
        self._segmenter = segmenter
        self._thumbnails = thumbnail_composer
        self._albums = album_builder
        self._uploader = uploader
        self._relocator = relocator
        self._context = context
        self._destination = destination
        self._temp_dir = temp_dir
        self._keep_temp = keep_temp
        self._on_file_done = on_file_done

    async def run(self) -> BatchSummary:
        """
        Traite tous les fichiers du repertoire source.

        Returns:
            BatchSummary (lot partiel si annule)

        Raises:
            CatalogError: Repertoire source illisible
        """
        files = self._catalog.scan()
        self._context.log.info(f"{len(files)} fichier(s) a traiter")

        summary = BatchSummary()
        for source in files:
            if self._context.cancelled:
                summary.cancelled = True
                break
            try:
                outcome = await self.process_file(source)
            except asyncio.CancelledError:
                self._context.cancel()
                summary.cancelled = True
                self._context.log.warning(f"Lot annule pendant {source.filename}")
                break
            summary.outcomes.append(outcome)
            if self._on_file_done is not None:
                self._on_file_done(outcome)

        self._context.log.info(
            f"Bilan: {summary.processed} traite(s), {summary.succeeded} reussi(s), "
            f"{summary.failed} echoue(s)"
        )
        return summary

    async def process_file(self, source: SourceFile) -> FileOutcome:
        """
        Traite un fichier : envoi puis deplacement.

        Les erreurs metier et systeme (OSError) sont converties en FileOutcome
        en echec ; l'annulation est propagee.
        """
        ctx = self._context.for_file(source.filename)
        try:
            parsed = parse_filename(source.filename)
            kind = detect_media_kind(source.filename)
            ctx.log.info(f"Traitement de {source.filename} ({kind.value}, {parsed.caption})")

            if kind == MediaKind.VIDEO:
                relocation, delivery_id = await self._process_video(
                    source, parsed.caption, ctx
                )
            else:
                delivery_id = await self._uploader.single_upload(
                    self._destination, source.path, parsed.caption, kind
                )
                ctx.raise_if_cancelled()
                relocation = self._relocator.relocate(source.path, delivery_id, [])
        except (TeleStockError, OSError) as e:
            self._log_file_info(ctx, source, success=False, error=e)
            return FileOutcome(source=source, error=str(e))

        self._log_file_info(ctx, source, success=True)
        return FileOutcome(source=source, delivery_id=delivery_id, relocation=relocation)

    async def _process_video(
        self, source: SourceFile, caption: str, ctx: PipelineContext
    ) -> tuple[RelocationResult, int]:
        """Planche contact + decoupage + album, dans un repertoire de travail dedie."""
        with scratch_directory(self._temp_dir, self._keep_temp, ctx.log) as workdir:
            delivery = await self.deliver_video(source, caption, workdir, ctx)
            # Aucun deplacement apres annulation
            ctx.raise_if_cancelled()
            # Les fichiers conserves quittent le repertoire de travail avant sa suppression
            relocation = self._relocator.relocate(
                source.path, delivery.delivery_id, delivery.retained_files
            )
        return relocation, delivery.delivery_id

    async def deliver_video(
        self,
        source: SourceFile,
        caption: str,
        workdir: Path,
        ctx: PipelineContext,
    ) -> DeliveryResult:
        """
        Prepare et envoie l'album d'une video.

        Returns:
            DeliveryResult avec la planche et les segments derives a conserver
        """
        probe = await self._probe.probe(source.path)
        ctx.raise_if_cancelled()

        preview = await self._thumbnails.build_preview(
            source.path, probe, source.path.stem, workdir
        )
        ctx.raise_if_cancelled()

        plan = await self._segmenter.plan(source.path, source.size_bytes, probe, workdir)
        ctx.raise_if_cancelled()

        request = self._albums.build(
            self._destination, preview.path, caption, plan, probe
        )
        ctx.log.info(
            f"Album de {len(request)} element(s): 1 apercu + {len(plan)} video(s)"
        )
        delivery_id = await self._uploader.album_upload(request)
        return DeliveryResult(
            delivery_id=delivery_id,
            retained_files=[preview.path, *plan.derived_segments],
        )

    @staticmethod
    def _log_file_info(
        ctx: PipelineContext,
        source: SourceFile,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        status = "SUCCESS" if success else "FAILED"
        line = f"[{status}] {source.filename} ({format_size(source.size_bytes)})"
        if error is not None:
            ctx.log.warning(f"{line} - Erreur: {error}")
        else:
            ctx.log.info(line)
