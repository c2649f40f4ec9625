"""
Interface port pour l'utilitaire externe d'inspection et de traitement video.

Interface abstraite (port) definissant les operations que le pipeline
attend de l'outil de transcodage (ffprobe/ffmpeg). L'implementation
concrete lance des sous-processus ; les tests utilisent une implementation
factice.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IMediaToolkit(ABC):
    """
    Interface pour l'inspection et le traitement des fichiers video.

    Toutes les operations sont bloquantes pour le flux appelant (coroutines
    attendues) et annulables : une annulation interrompt le sous-processus.
    Les echecs levent ToolError.
    """

    @abstractmethod
    async def probe_duration(self, path: Path) -> float:
        """
        Retourne la duree totale du fichier en secondes.

        Raises:
            ToolError: Si l'outil echoue
            ProbeFailure: Si la reponse n'est pas un nombre
        """
        ...

    @abstractmethod
    async def probe_bitrate(self, path: Path) -> int:
        """
        Retourne le debit du conteneur en bits/seconde.

        Retourne 0 si le conteneur ne fournit pas cette information
        (ce n'est pas une erreur).
        """
        ...

    @abstractmethod
    async def probe_resolution(self, path: Path) -> tuple[int, int]:
        """Retourne (largeur, hauteur) de la premiere piste video."""
        ...

    @abstractmethod
    async def probe_audio_codec(self, path: Path) -> str:
        """Retourne le codec de la premiere piste audio ("" si aucune)."""
        ...

    @abstractmethod
    async def extract_frame(self, path: Path, timestamp: float, output: Path) -> Path:
        """
        Extrait une seule frame a l'instant donne.

        Args:
            path: Video source
            timestamp: Position en secondes
            output: Image a ecrire (ecrasee si existante)

        Returns:
            Chemin de l'image ecrite
        """
        ...

    @abstractmethod
    async def segment(
        self, path: Path, segment_seconds: int, output_dir: Path
    ) -> list[Path]:
        """
        Decoupe la video en segments contigus sans re-encodage.

        Le nombre de segments depend du comportement reel de l'encodeur
        (coupures alignees sur les images cles) : il est determine en listant
        les fichiers produits, jamais calcule a l'avance.

        Args:
            path: Video source
            segment_seconds: Duree cible d'un segment
            output_dir: Repertoire de travail ou ecrire les segments

        Returns:
            Segments produits, tries dans l'ordre de lecture
        """
        ...

    @abstractmethod
    async def remux(self, source: Path, output: Path, aac_filter: bool = False) -> Path:
        """
        Copie les flux dans un conteneur final sans re-encodage.

        Args:
            source: Segment intermediaire
            output: Fichier final
            aac_filter: Applique le filtre aac_adtstoasc a la piste audio

        Returns:
            Chemin du fichier final
        """
        ...
