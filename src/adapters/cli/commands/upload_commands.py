"""
Commande CLI d'envoi du lot (run).
"""

import asyncio
import contextlib
import signal
from typing import Annotated, Optional

import typer
from loguru import logger

from src.adapters.cli.helpers import console, with_container
from src.adapters.cli.progress_display import UploadProgressDisplay, render_summary
from src.core.errors import CatalogError, TransportError
from src.services.pipeline import BatchSummary
from src.utils.helpers import format_size, parse_size


def run(
    keep_temp: Annotated[
        bool,
        typer.Option("--keep-temp", help="Conserver les repertoires de travail"),
    ] = False,
    max_size: Annotated[
        Optional[str],
        typer.Option("--max-size", help="Taille maximale d'un element (ex: 2G, 500M)"),
    ] = None,
) -> None:
    """Envoie tous les fichiers du repertoire source puis les deplace."""
    summary = asyncio.run(_run_async(keep_temp, max_size))
    if summary.failed or summary.cancelled:
        raise typer.Exit(1)


@with_container()
async def _run_async(
    container, keep_temp: bool, max_size: Optional[str]
) -> BatchSummary:
    """Implementation async de la commande run."""
    settings = container.config()
    if not settings.telegram_enabled:
        console.print(
            "[red]Bot non configure:[/red] definir TELESTOCK_BOT_TOKEN "
            "et TELESTOCK_STORAGE_CHAT_ID"
        )
        raise typer.Exit(1)

    if keep_temp:
        settings.keep_temp = True
    if max_size is not None:
        try:
            settings.max_size = parse_size(max_size)
        except ValueError as e:
            console.print(f"[red]Taille invalide:[/red] {e}")
            raise typer.Exit(1)

    console.print(f"[bold cyan]Repertoire source[/bold cyan]: {settings.source_dir}")
    console.print(
        f"[dim]Taille max par element: "
        f"{format_size(settings.max_size) if settings.max_size else 'illimitee'}[/dim]\n"
    )

    context = container.pipeline_context()
    transport = container.transport()
    try:
        try:
            destination = await transport.resolve_destination(settings.storage_chat_id)
        except TransportError as e:
            console.print(f"[red]Chat de destination invalide:[/red] {e}")
            raise typer.Exit(1)

        display = UploadProgressDisplay(context.progress, console)
        pipeline = container.batch_pipeline(
            destination=destination, on_file_done=display.print_outcome
        )

        with display:
            pipeline_task = asyncio.create_task(pipeline.run())
            refresher = asyncio.create_task(display.run())
            _install_interrupt_handler(context, pipeline_task)
            try:
                summary = await pipeline_task
            except asyncio.CancelledError:
                summary = BatchSummary(cancelled=True)
            except CatalogError as e:
                console.print(f"[red]Erreur:[/red] {e}")
                raise typer.Exit(1)
            finally:
                refresher.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await refresher
    finally:
        await transport.close()

    console.print()
    console.print(render_summary(summary))
    return summary


def _install_interrupt_handler(context, task: asyncio.Task) -> None:
    """Ctrl-C : signale l'annulation et interrompt l'etape en cours."""

    def _on_interrupt() -> None:
        logger.warning("Interruption demandee, arret du lot")
        context.cancel()
        task.cancel()

    with contextlib.suppress(NotImplementedError):
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, _on_interrupt)
