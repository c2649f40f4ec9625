"""
Service de sonde video.

Combine les requetes independantes de l'outil externe (duree, debit,
resolution, codec audio) en un VideoProbe.
"""

from pathlib import Path

from loguru import logger

from src.core.errors import ProbeFailure, ToolError
from src.core.ports.media_toolkit import IMediaToolkit
from src.core.value_objects import VideoProbe


class MediaProbeService:
    """Inspection en lecture seule d'un fichier video."""

    def __init__(self, toolkit: IMediaToolkit) -> None:
        self._toolkit = toolkit

    async def probe(self, path: Path) -> VideoProbe:
        """
        Mesure la duree, le debit, la resolution et le codec audio.

        Un debit absent n'est pas une erreur (0 = inconnu). L'absence de
        piste audio non plus.

        Args:
            path: Fichier video

        Returns:
            VideoProbe

        Raises:
            ProbeFailure: Outil en erreur, sortie illisible ou duree <= 0
        """
        try:
            duration = await self._toolkit.probe_duration(path)
            bitrate = await self._toolkit.probe_bitrate(path)
            width, height = await self._toolkit.probe_resolution(path)
            audio_codec = await self._toolkit.probe_audio_codec(path)
        except ToolError as e:
            raise ProbeFailure(f"Sonde impossible pour {path.name}: {e}") from e

        if duration <= 0:
            raise ProbeFailure(f"Duree invalide pour {path.name}: {duration}")

        probe = VideoProbe(
            duration_seconds=duration,
            bitrate=max(bitrate, 0),
            width=width,
            height=height,
            audio_codec=audio_codec,
        )
        logger.debug(
            f"Sonde {path.name}: {duration:.2f}s, {probe.bitrate} bit/s, "
            f"{width}x{height}, audio={audio_codec or 'aucun'}"
        )
        return probe
