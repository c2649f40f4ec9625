"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
adaptateurs (ffmpeg, Telegram, systeme de fichiers) et services du pipeline.
"""

from dependency_injector import containers, providers

from .adapters.ffmpeg import FFmpegToolkit
from .adapters.file_system import FileSystemAdapter
from .adapters.telegram import TelegramBotTransport
from .config import Settings
from .services.album import AlbumBuilder
from .services.catalog import FileCatalog
from .services.context import PipelineContext
from .services.pipeline import BatchPipeline
from .services.probe import MediaProbeService
from .services.relocator import FileRelocator
from .services.segmenter import Segmenter
from .services.thumbnail import ThumbnailComposer
from .services.uploader import UploadOrchestrator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        transport = container.transport()
        destination = await transport.resolve_destination(settings.storage_chat_id)
        pipeline = container.batch_pipeline(destination=destination)
        summary = await pipeline.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Contexte partage du lot (logger, progression, annulation)
    pipeline_context = providers.Singleton(PipelineContext)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)

    media_toolkit = providers.Singleton(
        FFmpegToolkit,
        ffmpeg_path=config.provided.ffmpeg_path,
        ffprobe_path=config.provided.ffprobe_path,
        probe_timeout=config.provided.probe_timeout,
        ffmpeg_timeout=config.provided.ffmpeg_timeout,
    )

    # Transport - Singleton, le client HTTP est partage entre les envois
    transport = providers.Singleton(
        TelegramBotTransport,
        token=config.provided.bot_token,
        staging_chat_id=config.provided.effective_staging_chat_id,
        base_url=config.provided.api_base_url,
        timeout=config.provided.upload_timeout,
        max_attempts=config.provided.api_max_attempts,
        max_wait=config.provided.api_max_wait,
    )

    # Services stateless
    catalog = providers.Factory(
        FileCatalog,
        file_system=file_system,
        source_dir=config.provided.source_dir,
    )
    probe_service = providers.Factory(MediaProbeService, toolkit=media_toolkit)
    segmenter = providers.Factory(
        Segmenter,
        toolkit=media_toolkit,
        max_size=config.provided.max_size,
    )
    thumbnail_composer = providers.Factory(
        ThumbnailComposer,
        toolkit=media_toolkit,
        columns=config.provided.preview_columns,
        rows=config.provided.preview_rows,
        quality=config.provided.preview_quality,
    )
    album_builder = providers.Singleton(AlbumBuilder)
    relocator = providers.Factory(
        FileRelocator,
        file_system=file_system,
        done_dir=config.provided.done_dir,
    )
    uploader = providers.Factory(
        UploadOrchestrator,
        transport=transport,
        context=pipeline_context,
        concurrency=config.provided.upload_concurrency,
    )

    # Pipeline - Factory car la destination est resolue au lancement
    # Utiliser: container.batch_pipeline(destination=..., on_file_done=...)
    batch_pipeline = providers.Factory(
        BatchPipeline,
        catalog=catalog,
        probe_service=probe_service,
        segmenter=segmenter,
        thumbnail_composer=thumbnail_composer,
        album_builder=album_builder,
        uploader=uploader,
        relocator=relocator,
        context=pipeline_context,
        temp_dir=config.provided.temp_dir,
        keep_temp=config.provided.keep_temp,
    )
