"""
Service de deplacement des fichiers livres vers le repertoire final.

Le fichier original est renomme <stem>_msgid_<id><ext> puis deplace ;
les fichiers derives conserves (planche contact, segments) suivent avec
le meme suffixe applique a leur propre nom.
"""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from src.core.errors import RelocateFailure
from src.core.ports.file_system import IFileSystem
from src.utils.constants import DELIVERY_ID_MARKER


def done_name(path: Path, delivery_id: int) -> str:
    """
    Nom du fichier une fois livre.

    Example:
        >>> done_name(Path("travel_sunset_beach.jpg"), 12345)
        'travel_sunset_beach_msgid_12345.jpg'
    """
    return f"{path.stem}{DELIVERY_ID_MARKER}{delivery_id}{path.suffix}"


@dataclass
class RelocationResult:
    """
    Resultat du deplacement d'un fichier livre et de ses derives.

    Attributs:
        original: Nouveau chemin du fichier original
        moved: Nouveaux chemins des fichiers derives deplaces
        failed: Fichiers derives restes en place
    """

    original: Path
    moved: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)


class FileRelocator:
    """Deplacement des fichiers livres dans le repertoire final."""

    def __init__(self, file_system: IFileSystem, done_dir: Path) -> None:
        self._file_system = file_system
        self._done_dir = done_dir

    @property
    def done_dir(self) -> Path:
        return self._done_dir

    def target_for(self, path: Path, delivery_id: int) -> Path:
        return self._done_dir / done_name(path, delivery_id)

    def relocate(
        self,
        original: Path,
        delivery_id: int,
        retained: list[Path],
    ) -> RelocationResult:
        """
        Deplace le fichier original puis les fichiers derives.

        Un echec sur un fichier derive est journalise mais n'annule pas
        le deplacement de l'original.

        Args:
            original: Fichier source livre
            delivery_id: Identifiant de livraison (non nul)
            retained: Fichiers derives a conserver

        Returns:
            RelocationResult

        Raises:
            RelocateFailure: Identifiant nul ou echec du deplacement de l'original
        """
        if not delivery_id:
            raise RelocateFailure(original, f"Identifiant de livraison nul pour {original.name}")

        target = self.target_for(original, delivery_id)
        if not self._file_system.atomic_move(original, target):
            raise RelocateFailure(
                original, f"Deplacement impossible de {original.name} vers {target}"
            )

        result = RelocationResult(original=target)
        for extra in retained:
            extra_target = self.target_for(extra, delivery_id)
            if self._file_system.atomic_move(extra, extra_target):
                result.moved.append(extra_target)
            else:
                logger.warning(f"Fichier derive non deplace: {extra.name}")
                result.failed.append(extra)
        return result
