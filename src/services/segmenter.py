"""
Service de decoupage des videos trop volumineuses.

Decide si une video depasse la taille maximale d'un element, calcule la
duree cible d'un segment a partir du debit (mesure ou estime), puis fait
decouper la video en copie de flux par l'outil externe.

Le decoupage est une approximation : les coupures sont alignees sur les
images cles de la source, la taille des segments varie autour de la cible.
Le nombre de segments produits est donc lu sur disque apres coup.
"""

import math
import shutil
from pathlib import Path

from loguru import logger

from src.core.errors import SegmentationFailure, ToolError
from src.core.ports.media_toolkit import IMediaToolkit
from src.core.value_objects import SegmentPlan, VideoProbe
from src.utils.constants import SEGMENT_CONTAINER
from src.utils.helpers import format_size

# Sous-repertoire du repertoire de travail pour les segments intermediaires
SEGMENTS_SUBDIR = "segments"


def needs_split(size_bytes: int, max_size: int) -> bool:
    """True si le fichier depasse la limite (max_size <= 0 : pas de limite)."""
    if max_size <= 0:
        return False
    return size_bytes > max_size


def effective_bitrate(probe: VideoProbe, size_bytes: int) -> float:
    """
    Debit a utiliser pour le calcul des segments (bits/seconde).

    Le debit mesure s'il est positif, sinon une estimation a partir de la
    taille et de la duree : (taille * 8) / duree.
    """
    if probe.bitrate > 0:
        return float(probe.bitrate)
    return size_bytes * 8 / probe.duration_seconds


def segment_seconds(max_size: int, bitrate: float) -> int:
    """Duree cible d'un segment : (max_size * 8) / debit, arrondie a l'inferieur, minimum 1."""
    if bitrate <= 0:
        return 1
    return max(1, math.floor(max_size * 8 / bitrate))


def estimate_segment_count(size_bytes: int, max_size: int) -> int:
    """
    Estimation du nombre de segments (indicatif uniquement).

    Sert a signaler tot un album probablement trop grand ; le nombre reel
    depend de l'encodeur.
    """
    if not needs_split(size_bytes, max_size):
        return 1
    return math.ceil(size_bytes / max_size)


class Segmenter:
    """
    Planification et execution du decoupage d'une video.

    Attributes:
        max_size: Taille maximale d'un element en octets (0 = pas de limite)
    """

    def __init__(self, toolkit: IMediaToolkit, max_size: int) -> None:
        self._toolkit = toolkit
        self.max_size = max_size

    async def plan(
        self,
        source: Path,
        size_bytes: int,
        probe: VideoProbe,
        workdir: Path,
    ) -> SegmentPlan:
        """
        Produit le plan de decoupage d'une video.

        Sans decoupage necessaire, le plan contient le seul fichier original
        et aucun sous-processus n'est lance.

        Args:
            source: Video originale
            size_bytes: Taille de la video
            probe: Resultat de la sonde
            workdir: Repertoire de travail (propriete du fichier en cours)

        Returns:
            SegmentPlan (au moins un segment)

        Raises:
            SegmentationFailure: Outil en erreur ou aucun segment produit
        """
        if not needs_split(size_bytes, self.max_size):
            return SegmentPlan(source=source, segments=(source,))

        bitrate = effective_bitrate(probe, size_bytes)
        seconds = segment_seconds(self.max_size, bitrate)
        logger.info(
            f"Decoupage de {source.name} ({format_size(size_bytes)}) en segments "
            f"de {seconds}s (~{estimate_segment_count(size_bytes, self.max_size)} attendus, "
            f"debit {bitrate:.0f} bit/s)"
        )

        segments_dir = workdir / SEGMENTS_SUBDIR
        intermediates: list[Path] = []
        outputs: list[Path] = []
        try:
            intermediates = await self._toolkit.segment(source, seconds, segments_dir)
            if not intermediates:
                raise SegmentationFailure(f"Aucun segment produit pour {source.name}")

            aac_filter = probe.audio_codec == "aac"
            for intermediate in intermediates:
                output = workdir / f"{intermediate.stem}{SEGMENT_CONTAINER}"
                outputs.append(await self._toolkit.remux(intermediate, output, aac_filter))
                intermediate.unlink(missing_ok=True)
        except ToolError as e:
            _remove_all(outputs)
            shutil.rmtree(segments_dir, ignore_errors=True)
            raise SegmentationFailure(f"Decoupage impossible de {source.name}: {e}") from e
        except SegmentationFailure:
            shutil.rmtree(segments_dir, ignore_errors=True)
            raise

        logger.info(f"{source.name}: {len(outputs)} segment(s) produit(s)")
        return SegmentPlan(source=source, segments=tuple(outputs), segment_seconds=seconds)


def _remove_all(paths: list[Path]) -> None:
    for path in paths:
        path.unlink(missing_ok=True)
