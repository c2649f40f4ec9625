"""
Service d'assemblage des albums.

Construit la requete d'album d'une video : la planche contact en premier
(seul element portant la legende), puis les segments dans leur ordre de
lecture. La limite d'elements est verifiee avant toute operation reseau.
"""

from pathlib import Path

from src.core.errors import AlbumTooLarge
from src.core.value_objects import (
    AlbumRequest,
    MediaItem,
    MediaKind,
    SegmentPlan,
    VideoProbe,
)
from src.utils.constants import MAX_ALBUM_ITEMS


def validate_item_count(item_count: int, limit: int = MAX_ALBUM_ITEMS) -> None:
    """
    Verifie qu'un album respecte la limite de la plateforme.

    Raises:
        AlbumTooLarge: Si item_count > limit
        ValueError: Si item_count < 1
    """
    if item_count < 1:
        raise ValueError("Un album contient au moins un element")
    if item_count > limit:
        raise AlbumTooLarge(item_count, limit)


class AlbumBuilder:
    """Assemblage des elements d'un album dans l'ordre de publication."""

    def __init__(self, max_items: int = MAX_ALBUM_ITEMS) -> None:
        self.max_items = max_items

    def build(
        self,
        destination: int,
        preview: Path,
        caption: str,
        plan: SegmentPlan,
        probe: VideoProbe,
    ) -> AlbumRequest:
        """
        Construit la requete d'album.

        Args:
            destination: Identifiant du chat cible
            preview: Planche contact (premier element, photo)
            caption: Legende complete (portee par le premier element)
            plan: Plan de decoupage (segments dans l'ordre)
            probe: Sonde de la video (dimensions des segments)

        Returns:
            AlbumRequest de 1 + len(plan) elements

        Raises:
            AlbumTooLarge: Si 1 + len(plan) depasse la limite
        """
        validate_item_count(1 + len(plan), self.max_items)

        width = probe.width or None
        height = probe.height or None
        items = [MediaItem(path=preview, kind=MediaKind.PHOTO, caption=caption)]
        items.extend(
            MediaItem(path=segment, kind=MediaKind.VIDEO, width=width, height=height)
            for segment in plan.segments
        )
        return AlbumRequest(destination=destination, items=tuple(items))
