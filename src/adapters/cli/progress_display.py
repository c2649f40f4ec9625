"""
Affichage Rich de la progression des envois.

Lit periodiquement le registre de progression et synchronise une barre
par envoi en cours. Les barres disparaissent quand l'envoi se termine.
"""

import asyncio
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from src.services.pipeline import BatchSummary, FileOutcome
from src.services.progress import ProgressRegistry

# Intervalle de rafraichissement de l'affichage (secondes)
REFRESH_INTERVAL = 0.2


class UploadProgressDisplay:
    """
    Barres de progression des envois, alimentees par le registre.

    Usage:
        display = UploadProgressDisplay(registry, console)
        with display:
            refresher = asyncio.create_task(display.run())
            ...
            refresher.cancel()
    """

    def __init__(self, registry: ProgressRegistry, console: Console) -> None:
        self._registry = registry
        self._console = console
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
        )
        self._tasks: dict[int, TaskID] = {}

    def __enter__(self) -> "UploadProgressDisplay":
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.refresh()
        self._progress.stop()

    def refresh(self) -> None:
        """Synchronise les barres avec le contenu du registre."""
        states = {state.upload_id: state for state in self._registry.snapshot()}

        for upload_id in list(self._tasks):
            if upload_id not in states:
                self._progress.remove_task(self._tasks.pop(upload_id))

        for upload_id, state in states.items():
            total: Optional[int] = state.total if state.total >= 0 else None
            task_id = self._tasks.get(upload_id)
            if task_id is None:
                self._tasks[upload_id] = self._progress.add_task(
                    f"[cyan]{state.name}", total=total, completed=state.transferred
                )
            else:
                self._progress.update(task_id, total=total, completed=state.transferred)

    async def run(self) -> None:
        """Rafraichit l'affichage jusqu'a annulation."""
        while True:
            self.refresh()
            await asyncio.sleep(REFRESH_INTERVAL)

    def print_outcome(self, outcome: FileOutcome) -> None:
        """Affiche une ligne par fichier termine (au-dessus des barres)."""
        if outcome.success:
            self._console.print(
                f"[green]OK[/green] {outcome.source.filename} "
                f"[dim](message {outcome.delivery_id})[/dim]"
            )
        else:
            self._console.print(
                f"[red]ECHEC[/red] {outcome.source.filename}: {outcome.error}"
            )


def render_summary(summary: BatchSummary) -> Table:
    """Tableau recapitulatif d'un lot."""
    table = Table(title="Resume de l'envoi", show_lines=False)
    table.add_column("Fichier", style="cyan")
    table.add_column("Statut")
    table.add_column("Detail", overflow="fold")

    for outcome in summary.outcomes:
        if outcome.success:
            detail = outcome.relocation.original.name if outcome.relocation else ""
            table.add_row(outcome.source.filename, "[green]livre[/green]", detail)
        else:
            table.add_row(outcome.source.filename, "[red]echec[/red]", outcome.error)

    table.caption = (
        f"{summary.processed} traite(s), {summary.succeeded} reussi(s), "
        f"{summary.failed} echoue(s)"
        + (" - lot annule" if summary.cancelled else "")
    )
    return table
