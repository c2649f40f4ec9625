"""
Commandes CLI d'inspection locale (scan, probe, preview).

Aucune de ces commandes n'utilise le reseau ni ne deplace de fichier.
"""

import asyncio
import shutil
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container
from src.core.errors import CatalogError, InvalidFilenameFormat, TeleStockError
from src.core.value_objects import MediaKind
from src.services.catalog import detect_media_kind, parse_filename
from src.services.pipeline import scratch_directory
from src.services.segmenter import (
    effective_bitrate,
    estimate_segment_count,
    needs_split,
    segment_seconds,
)
from src.utils.constants import MAX_ALBUM_ITEMS
from src.utils.helpers import format_size


def scan() -> None:
    """Liste les fichiers du repertoire source (simulation, rien n'est envoye)."""
    asyncio.run(_scan_async())


@with_container()
async def _scan_async(container) -> None:
    """Implementation async de la commande scan."""
    settings = container.config()
    catalog = container.catalog()

    try:
        files = catalog.scan()
    except CatalogError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Fichiers en attente ({settings.source_dir})")
    table.add_column("Fichier", style="cyan")
    table.add_column("Type")
    table.add_column("Taille", justify="right")
    table.add_column("Legende / remarque", overflow="fold")

    invalid = 0
    for source in files:
        kind = detect_media_kind(source.filename)
        size = format_size(source.size_bytes)
        try:
            caption = parse_filename(source.filename).caption
        except InvalidFilenameFormat as e:
            invalid += 1
            table.add_row(source.filename, kind.value, size, f"[red]{e}[/red]")
            continue

        remark = caption
        if kind == MediaKind.VIDEO and needs_split(source.size_bytes, settings.max_size):
            parts = estimate_segment_count(source.size_bytes, settings.max_size)
            color = "red" if 1 + parts > MAX_ALBUM_ITEMS else "yellow"
            remark += f" [{color}](~{parts} segments)[/{color}]"
        table.add_row(source.filename, kind.value, size, remark)

    console.print(table)
    console.print(f"\n[bold]Total: {len(files)} fichier(s)[/bold]")
    if invalid:
        console.print(f"[red]{invalid} nom(s) de fichier invalide(s)[/red]")


def probe(
    file: Annotated[Path, typer.Argument(help="Fichier video a inspecter")],
) -> None:
    """Affiche la sonde d'une video et le decoupage qui serait applique."""
    asyncio.run(_probe_async(file))


@with_container()
async def _probe_async(container, file: Path) -> None:
    """Implementation async de la commande probe."""
    settings = container.config()
    if not file.is_file():
        console.print(f"[red]Fichier introuvable:[/red] {file}")
        raise typer.Exit(1)

    try:
        result = await container.probe_service().probe(file)
    except TeleStockError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    size = file.stat().st_size
    console.print(f"[bold cyan]{file.name}[/bold cyan] ({format_size(size)})")
    console.print(f"  Duree : {result.duration_seconds:.2f} s")
    console.print(
        f"  Debit : {result.bitrate} bit/s"
        if result.has_bitrate
        else "  Debit : [yellow]inconnu[/yellow]"
    )
    console.print(f"  Resolution : {result.width}x{result.height}")
    console.print(f"  Audio : {result.audio_codec or 'aucun'}")

    if needs_split(size, settings.max_size):
        bitrate = effective_bitrate(result, size)
        seconds = segment_seconds(settings.max_size, bitrate)
        parts = estimate_segment_count(size, settings.max_size)
        console.print(
            f"  Decoupage : segments de {seconds} s, ~{parts} segment(s) "
            f"(max {format_size(settings.max_size)})"
        )
    else:
        console.print("  Decoupage : [green]aucun[/green]")


def preview(
    file: Annotated[Path, typer.Argument(help="Fichier video source")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Repertoire de sortie (defaut: courant)"),
    ] = None,
) -> None:
    """Genere la planche contact d'une video localement."""
    asyncio.run(_preview_async(file, output_dir or Path.cwd()))


@with_container()
async def _preview_async(container, file: Path, output_dir: Path) -> None:
    """Implementation async de la commande preview."""
    settings = container.config()
    if not file.is_file():
        console.print(f"[red]Fichier introuvable:[/red] {file}")
        raise typer.Exit(1)

    composer = container.thumbnail_composer()
    try:
        with scratch_directory(settings.temp_dir) as workdir:
            result = await container.probe_service().probe(file)
            grid = await composer.build_preview(file, result, file.stem, workdir)
            output_dir.mkdir(parents=True, exist_ok=True)
            target = output_dir / grid.path.name
            shutil.move(str(grid.path), str(target))
    except TeleStockError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Planche contact:[/green] {target} "
        f"({grid.width}x{grid.height}, {grid.columns}x{grid.rows} frames)"
    )
