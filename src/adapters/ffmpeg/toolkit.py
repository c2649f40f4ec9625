"""
Implementation de IMediaToolkit basee sur les binaires ffprobe et ffmpeg.

Les formes d'arguments sont fixes : les sondes interrogent une seule
propriete a la fois en sortie brute (une valeur par ligne), le decoupage
utilise le muxer segment en copie de flux.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.ffmpeg.runner import run_tool
from src.core.errors import ProbeFailure
from src.core.ports.media_toolkit import IMediaToolkit

# Sortie brute ffprobe : une valeur par ligne, sans cle ni section
RAW_OUTPUT_FORMAT = "default=noprint_wrappers=1:nokey=1"

# Extension des segments intermediaires produits par le muxer segment
INTERMEDIATE_SUFFIX = ".ts"


class FFmpegToolkit(IMediaToolkit):
    """
    Acces a ffprobe/ffmpeg par sous-processus.

    Attributes:
        ffmpeg_path: Binaire ffmpeg
        ffprobe_path: Binaire ffprobe
        probe_timeout: Delai maximum d'une sonde (secondes)
        ffmpeg_timeout: Delai maximum d'un traitement ffmpeg (None = illimite)
    """

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        probe_timeout: Optional[float] = 30.0,
        ffmpeg_timeout: Optional[float] = None,
    ) -> None:
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path
        self.probe_timeout = probe_timeout
        self.ffmpeg_timeout = ffmpeg_timeout

    # Sondes

    async def _probe(self, path: Path, *entries: str) -> list[str]:
        """Lance ffprobe et retourne les lignes non vides de la sortie."""
        command = [
            self.ffprobe_path,
            "-v", "error",
            *entries,
            "-of", RAW_OUTPUT_FORMAT,
            str(path),
        ]
        output = await run_tool(command, timeout=self.probe_timeout)
        return [line.strip() for line in output.splitlines() if line.strip()]

    async def probe_duration(self, path: Path) -> float:
        lines = await self._probe(path, "-show_entries", "format=duration")
        if not lines:
            raise ProbeFailure(f"Duree absente pour {path.name}")
        try:
            return float(lines[0])
        except ValueError:
            raise ProbeFailure(f"Duree illisible pour {path.name}: {lines[0]!r}")

    async def probe_bitrate(self, path: Path) -> int:
        lines = await self._probe(path, "-show_entries", "format=bit_rate")
        if not lines or lines[0] == "N/A":
            return 0
        try:
            return int(float(lines[0]))
        except ValueError:
            logger.debug(f"Debit illisible pour {path.name}: {lines[0]!r}")
            return 0

    async def probe_resolution(self, path: Path) -> tuple[int, int]:
        lines = await self._probe(
            path,
            "-select_streams", "v:0",
            "-show_entries", "stream=width,height",
        )
        if len(lines) < 2:
            raise ProbeFailure(f"Resolution absente pour {path.name}")
        try:
            return int(lines[0]), int(lines[1])
        except ValueError:
            raise ProbeFailure(
                f"Resolution illisible pour {path.name}: {lines[0]!r}x{lines[1]!r}"
            )

    async def probe_audio_codec(self, path: Path) -> str:
        lines = await self._probe(
            path,
            "-select_streams", "a:0",
            "-show_entries", "stream=codec_name",
        )
        return lines[0].lower() if lines else ""

    # Traitements

    async def extract_frame(self, path: Path, timestamp: float, output: Path) -> Path:
        command = [
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel", "error",
            "-ss", f"{timestamp:.2f}",
            "-i", str(path),
            "-frames:v", "1",
            "-q:v", "2",
            "-y",
            str(output),
        ]
        await run_tool(command, timeout=self.ffmpeg_timeout)
        return output

    async def segment(
        self, path: Path, segment_seconds: int, output_dir: Path
    ) -> list[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        # Un % dans le nom serait interprete par le muxer segment
        prefix = f"{path.stem}_part"
        pattern = output_dir / f"{prefix.replace('%', '%%')}%03d{INTERMEDIATE_SUFFIX}"
        command = [
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel", "error",
            "-i", str(path),
            "-c", "copy",
            "-map", "0",
            "-f", "segment",
            "-segment_time", str(segment_seconds),
            "-reset_timestamps", "1",
            str(pattern),
        ]
        await run_tool(command, timeout=self.ffmpeg_timeout)

        # Le nombre de segments depend des images cles : on liste le resultat
        produced = sorted(
            p
            for p in output_dir.iterdir()
            if p.suffix == INTERMEDIATE_SUFFIX and p.name.startswith(prefix)
        )
        logger.debug(f"{len(produced)} segment(s) produit(s) pour {path.name}")
        return produced

    async def remux(self, source: Path, output: Path, aac_filter: bool = False) -> Path:
        command = [
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel", "error",
            "-y",
            "-i", str(source),
            "-c", "copy",
        ]
        if aac_filter:
            command += ["-bsf:a", "aac_adtstoasc"]
        command.append(str(output))
        await run_tool(command, timeout=self.ffmpeg_timeout)
        return output
