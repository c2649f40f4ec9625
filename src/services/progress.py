"""
Registre de progression des envois en cours.

Seul etat partage entre les envois concurrents d'un album : chaque
element y inscrit sa progression, l'affichage lit des copies.
Toutes les operations sont protegees par un verrou.
"""

import itertools
import threading
from dataclasses import replace

from src.core.entities import ProgressState


class ProgressRegistry:
    """
    Table des envois en cours, indexee par identifiant d'envoi.

    Les entrees sont creees au debut d'un envoi et supprimees a la fin,
    qu'il reussisse ou echoue.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[int, ProgressState] = {}
        self._ids = itertools.count(1)

    def register(self, name: str, total: int = -1) -> int:
        """
        Cree une entree pour un nouvel envoi.

        Args:
            name: Nom du fichier envoye
            total: Taille totale en octets (-1 si inconnue)

        Returns:
            Identifiant unique de l'envoi
        """
        with self._lock:
            upload_id = next(self._ids)
            self._entries[upload_id] = ProgressState(
                upload_id=upload_id, name=name, total=total
            )
            return upload_id

    def update(self, upload_id: int, transferred: int, total: int) -> None:
        """Met a jour la progression. Ignore les identifiants inconnus."""
        with self._lock:
            state = self._entries.get(upload_id)
            if state is None:
                return
            state.transferred = transferred
            if total >= 0:
                state.total = total

    def remove(self, upload_id: int) -> None:
        """Supprime l'entree d'un envoi termine."""
        with self._lock:
            self._entries.pop(upload_id, None)

    def snapshot(self) -> list[ProgressState]:
        """Copies des entrees en cours, triees par identifiant."""
        with self._lock:
            return [replace(self._entries[key]) for key in sorted(self._entries)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
