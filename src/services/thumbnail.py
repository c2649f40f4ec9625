"""
Service de generation de la planche contact d'une video.

Echantillonne des frames a intervalles reguliers via l'outil externe,
puis les assemble en une grille JPEG avec Pillow.
"""

from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from src.core.errors import ThumbnailFailure, ToolError
from src.core.ports.media_toolkit import IMediaToolkit
from src.core.value_objects import GridLayout, ThumbnailGrid, VideoProbe
from src.utils.constants import (
    PREVIEW_COLUMNS,
    PREVIEW_JPEG_QUALITY,
    PREVIEW_ROWS,
    THUMBNAIL_BASE_WIDTH,
    THUMBNAIL_MIN_HEIGHT,
)

# Suffixe du fichier de planche contact
PREVIEW_SUFFIX = "_preview.jpg"


def sample_timestamps(duration: float, count: int) -> list[float]:
    """Instants d'echantillonnage : duree / count * i, pour i de 0 a count - 1."""
    if count <= 0:
        return []
    step = duration / count
    return [step * i for i in range(count)]


def compute_layout(
    frame_width: int, frame_height: int, columns: int, rows: int
) -> GridLayout:
    """
    Taille des cellules de la grille, proportions de la video conservees.

    Largeur de base 320 px ; si la hauteur obtenue est inferieure a 180 px
    (video tres large), la hauteur est fixee a 180 px et la largeur deduite.
    """
    if frame_width <= 0 or frame_height <= 0:
        raise ThumbnailFailure(
            f"Dimensions de frame invalides: {frame_width}x{frame_height}"
        )

    cell_width = THUMBNAIL_BASE_WIDTH
    cell_height = THUMBNAIL_BASE_WIDTH * frame_height // frame_width
    if cell_height < THUMBNAIL_MIN_HEIGHT:
        cell_height = THUMBNAIL_MIN_HEIGHT
        cell_width = THUMBNAIL_MIN_HEIGHT * frame_width // frame_height

    return GridLayout(
        columns=columns, rows=rows, cell_width=cell_width, cell_height=cell_height
    )


def compose_grid(
    frames: list[Path],
    columns: int,
    rows: int,
    output: Path,
    quality: int = PREVIEW_JPEG_QUALITY,
) -> ThumbnailGrid:
    """
    Assemble les frames en une grille JPEG.

    Le nombre de frames est verifie avant toute ecriture. La taille des
    cellules est calculee a partir de la premiere frame ; chaque frame est
    redimensionnee (bilineaire) et placee ligne par ligne.

    Args:
        frames: Images dans l'ordre chronologique
        columns: Nombre de colonnes
        rows: Nombre de lignes
        output: Fichier JPEG a ecrire
        quality: Qualite JPEG

    Returns:
        ThumbnailGrid decrivant l'image produite

    Raises:
        ThumbnailFailure: Nombre de frames incorrect ou image illisible
    """
    expected = columns * rows
    if len(frames) != expected:
        raise ThumbnailFailure(
            f"Nombre de frames incorrect: {len(frames)} (attendu {columns}x{rows}={expected})"
        )

    try:
        with Image.open(frames[0]) as first:
            layout = compute_layout(first.width, first.height, columns, rows)

        canvas = Image.new("RGB", (layout.width, layout.height))
        for index, frame_path in enumerate(frames):
            with Image.open(frame_path) as frame:
                cell = frame.convert("RGB").resize(
                    (layout.cell_width, layout.cell_height),
                    Image.Resampling.BILINEAR,
                )
            canvas.paste(cell, layout.cell_origin(index))

        canvas.save(output, "JPEG", quality=quality)
    except (OSError, UnidentifiedImageError) as e:
        raise ThumbnailFailure(f"Composition impossible de {output.name}: {e}") from e

    return ThumbnailGrid(
        path=output,
        width=layout.width,
        height=layout.height,
        frame_count=expected,
        columns=columns,
        rows=rows,
    )


class ThumbnailComposer:
    """
    Generation de la planche contact (apercu) d'une video.

    Attributes:
        columns: Nombre de colonnes de la grille
        rows: Nombre de lignes de la grille
        quality: Qualite JPEG de la planche
    """

    def __init__(
        self,
        toolkit: IMediaToolkit,
        columns: int = PREVIEW_COLUMNS,
        rows: int = PREVIEW_ROWS,
        quality: int = PREVIEW_JPEG_QUALITY,
    ) -> None:
        self._toolkit = toolkit
        self.columns = columns
        self.rows = rows
        self.quality = quality

    @property
    def frame_count(self) -> int:
        return self.columns * self.rows

    async def extract_frames(
        self, path: Path, duration: float, count: int, workdir: Path
    ) -> list[Path]:
        """
        Extrait count frames reparties sur la duree de la video.

        En cas d'echec, les frames deja extraites sont supprimees.

        Raises:
            ThumbnailFailure: Si une extraction echoue
        """
        workdir.mkdir(parents=True, exist_ok=True)
        frames: list[Path] = []
        try:
            for index, timestamp in enumerate(sample_timestamps(duration, count)):
                output = workdir / f"frame_{index:03d}.jpg"
                frames.append(await self._toolkit.extract_frame(path, timestamp, output))
        except ToolError as e:
            _remove_frames(frames)
            raise ThumbnailFailure(
                f"Extraction de frame impossible pour {path.name}: {e}"
            ) from e
        return frames

    async def build_preview(
        self,
        path: Path,
        probe: VideoProbe,
        name_stem: str,
        workdir: Path,
    ) -> ThumbnailGrid:
        """
        Produit la planche contact d'une video.

        Les frames intermediaires sont supprimees, la planche est conservee.

        Args:
            path: Video source
            probe: Resultat de la sonde (duree)
            name_stem: Prefixe du nom de la planche (TAG_DESCRIPTION)
            workdir: Repertoire de travail

        Returns:
            ThumbnailGrid
        """
        frames_dir = workdir / "frames"
        frames = await self.extract_frames(
            path, probe.duration_seconds, self.frame_count, frames_dir
        )
        output = workdir / f"{name_stem}{PREVIEW_SUFFIX}"
        try:
            grid = compose_grid(frames, self.columns, self.rows, output, self.quality)
        finally:
            _remove_frames(frames)

        logger.debug(f"Planche contact {output.name}: {grid.width}x{grid.height}")
        return grid


def _remove_frames(frames: list[Path]) -> None:
    for frame in frames:
        frame.unlink(missing_ok=True)
