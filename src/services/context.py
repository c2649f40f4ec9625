"""
Contexte d'execution transmis explicitement aux services du pipeline.

Regroupe le logger lie au lot, le registre de progression et le signal
d'annulation. Aucun etat global : chaque lot cree son propre contexte.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from src.services.progress import ProgressRegistry


@dataclass
class PipelineContext:
    """
    Contexte partage par les etapes du traitement d'un lot.

    Attributs:
        log: Logger loguru (eventuellement lie a des champs supplementaires)
        progress: Registre de progression des envois
        cancel_event: Signal d'annulation du lot
    """

    log: Any = field(default_factory=lambda: logger)
    progress: ProgressRegistry = field(default_factory=ProgressRegistry)
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def cancelled(self) -> bool:
        """True si l'annulation a ete demandee."""
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        """Demande l'arret du lot."""
        self.cancel_event.set()

    def raise_if_cancelled(self) -> None:
        """Leve CancelledError si l'annulation a ete demandee."""
        if self.cancel_event.is_set():
            raise asyncio.CancelledError()

    def for_file(self, filename: str) -> "PipelineContext":
        """Contexte derive dont le logger porte le nom du fichier traite."""
        return PipelineContext(
            log=self.log.bind(file=filename),
            progress=self.progress,
            cancel_event=self.cancel_event,
        )
