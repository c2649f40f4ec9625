"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- MediaKind : Type de media (PHOTO, VIDEO, AUDIO, DOCUMENT)
- ParsedName : Tag et description extraits d'un nom de fichier
- VideoProbe : Duree, debit et resolution mesures d'une video
- SegmentPlan : Liste ordonnee des segments a envoyer
- GridLayout : Disposition d'une planche contact
- ThumbnailGrid : Planche contact produite
- MediaItem : Element d'un album
- AlbumRequest : Album complet a envoyer
"""

from src.core.value_objects.media import (
    AlbumRequest,
    GridLayout,
    MediaItem,
    MediaKind,
    ParsedName,
    SegmentPlan,
    ThumbnailGrid,
    VideoProbe,
)

__all__ = [
    "AlbumRequest",
    "GridLayout",
    "MediaItem",
    "MediaKind",
    "ParsedName",
    "SegmentPlan",
    "ThumbnailGrid",
    "VideoProbe",
]
