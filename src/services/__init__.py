"""
Application services layer (use cases).

Services orchestrate the media preparation and delivery pipeline:
catalog scan, video probe, contact sheet, segmentation, album assembly,
concurrent upload and relocation of delivered files.

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""

from src.services.album import AlbumBuilder, validate_item_count
from src.services.catalog import (
    FileCatalog,
    build_caption,
    detect_media_kind,
    parse_filename,
)
from src.services.context import PipelineContext
from src.services.pipeline import BatchPipeline, BatchSummary, FileOutcome
from src.services.probe import MediaProbeService
from src.services.progress import ProgressRegistry
from src.services.relocator import FileRelocator, RelocationResult, done_name
from src.services.segmenter import Segmenter
from src.services.thumbnail import ThumbnailComposer
from src.services.uploader import UploadOrchestrator

__all__ = [
    "AlbumBuilder",
    "BatchPipeline",
    "BatchSummary",
    "FileCatalog",
    "FileOutcome",
    "FileRelocator",
    "MediaProbeService",
    "PipelineContext",
    "ProgressRegistry",
    "RelocationResult",
    "Segmenter",
    "ThumbnailComposer",
    "UploadOrchestrator",
    "build_caption",
    "detect_media_kind",
    "done_name",
    "parse_filename",
    "validate_item_count",
]
