"""
Objets valeur pour la preparation des medias.

Objets valeur immutables representant les informations extraites d'un fichier
source (nom parse, sonde video) et les artefacts produits par le pipeline
(plan de decoupage, planche contact, elements d'album).
Tous les objets valeur utilisent @dataclass(frozen=True) pour garantir l'immutabilite.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class MediaKind(Enum):
    """Type de media determine par l'extension du fichier.

    Valeurs:
        PHOTO: Image envoyee avec apercu
        VIDEO: Video (planche contact + segments eventuels)
        AUDIO: Piste audio
        DOCUMENT: Tout le reste (envoye comme fichier brut)
    """

    PHOTO = "photo"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


@dataclass(frozen=True)
class ParsedName:
    """
    Metadonnees extraites d'un nom de fichier TAG_DESCRIPTION.ext.

    Attributs:
        tag: Partie avant le premier underscore (non vide)
        description: Partie apres le premier underscore, sans extension (non vide)
    """

    tag: str
    description: str

    @property
    def caption(self) -> str:
        """Legende affichee : #TAG suivi de la description avec espaces."""
        return f"#{self.tag} {self.description.replace('_', ' ')}"


@dataclass(frozen=True)
class VideoProbe:
    """
    Proprietes mesurees d'une video via ffprobe.

    Attributs:
        duration_seconds: Duree totale en secondes (> 0)
        bitrate: Debit en bits/seconde, 0 si le conteneur ne le fournit pas
        width: Largeur de la premiere piste video en pixels
        height: Hauteur de la premiere piste video en pixels
        audio_codec: Codec de la premiere piste audio ("" si absente)
    """

    duration_seconds: float
    bitrate: int = 0
    width: int = 0
    height: int = 0
    audio_codec: str = ""

    @property
    def has_bitrate(self) -> bool:
        """Indique si le conteneur a fourni un debit exploitable."""
        return self.bitrate > 0


@dataclass(frozen=True)
class SegmentPlan:
    """
    Decision de decoupage d'une video.

    Contient toujours au moins un chemin. Si aucun decoupage n'est
    necessaire, l'unique segment est le fichier original.

    Attributs:
        source: Fichier video original
        segments: Chemins des segments dans l'ordre de lecture
        segment_seconds: Duree cible d'un segment (0 si pas de decoupage)
    """

    source: Path
    segments: tuple[Path, ...]
    segment_seconds: int = 0

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("Un plan de decoupage contient au moins un segment")

    @property
    def is_split(self) -> bool:
        """True si la video a ete decoupee en fichiers derives."""
        return self.segments != (self.source,)

    @property
    def derived_segments(self) -> tuple[Path, ...]:
        """Segments produits par le pipeline (hors fichier original)."""
        return tuple(p for p in self.segments if p != self.source)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass(frozen=True)
class GridLayout:
    """
    Disposition d'une planche contact.

    Attributs:
        columns: Nombre de colonnes
        rows: Nombre de lignes
        cell_width: Largeur d'une cellule en pixels
        cell_height: Hauteur d'une cellule en pixels
    """

    columns: int
    rows: int
    cell_width: int
    cell_height: int

    @property
    def frame_count(self) -> int:
        return self.columns * self.rows

    @property
    def width(self) -> int:
        return self.cell_width * self.columns

    @property
    def height(self) -> int:
        return self.cell_height * self.rows

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Coin superieur gauche de la cellule d'indice donne (ordre ligne par ligne)."""
        column = index % self.columns
        row = index // self.columns
        return column * self.cell_width, row * self.cell_height


@dataclass(frozen=True)
class ThumbnailGrid:
    """
    Planche contact composee a partir de frames echantillonnees.

    Attributs:
        path: Chemin de l'image JPEG produite
        width: Largeur totale en pixels
        height: Hauteur totale en pixels
        frame_count: Nombre de frames composees
        columns: Nombre de colonnes de la grille
        rows: Nombre de lignes de la grille
    """

    path: Path
    width: int
    height: int
    frame_count: int
    columns: int
    rows: int


@dataclass(frozen=True)
class MediaItem:
    """
    Element unitaire d'une requete d'album.

    Attributs:
        path: Fichier a envoyer
        kind: Type de media (PHOTO ou VIDEO dans un album)
        caption: Legende (vide pour tous les elements sauf le premier)
        width: Largeur optionnelle (videos)
        height: Hauteur optionnelle (videos)
    """

    path: Path
    kind: MediaKind
    caption: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class AlbumRequest:
    """
    Lot complet a envoyer comme un seul album.

    Attributs:
        destination: Identifiant logique du chat cible
        items: Elements ordonnes (1 a 10)
    """

    destination: int
    items: tuple[MediaItem, ...]

    @property
    def caption(self) -> str:
        """Legende de l'album (portee par le premier element)."""
        return self.items[0].caption if self.items else ""

    def __len__(self) -> int:
        return len(self.items)
