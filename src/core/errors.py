"""
Exceptions metier du pipeline TeleStock.

Chaque erreur est contenue au niveau du fichier traite : le pipeline
l'enregistre comme echec et passe au fichier suivant. Seul le bilan
du lot (traites / reussis / echoues) remonte a l'appelant.
"""

from pathlib import Path
from typing import Optional


class TeleStockError(Exception):
    """Erreur de base du pipeline, contenue au niveau du fichier."""


class CatalogError(TeleStockError):
    """Le repertoire source ne peut pas etre lu."""


class InvalidFilenameFormat(TeleStockError):
    """
    Nom de fichier ne respectant pas la convention TAG_DESCRIPTION.ext.

    Attributes:
        filename: Nom de fichier rejete
    """

    def __init__(self, filename: str, reason: str = "") -> None:
        self.filename = filename
        message = (
            f"Format de nom invalide: attendu TAG_DESCRIPTION.ext, recu {filename}"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ToolError(TeleStockError):
    """
    Echec d'un appel a l'utilitaire externe (ffmpeg/ffprobe).

    Attributes:
        command: Ligne de commande executee
        returncode: Code de retour (None si timeout ou binaire introuvable)
        output: Sortie d'erreur capturee
    """

    def __init__(
        self,
        command: list[str],
        returncode: Optional[int] = None,
        output: str = "",
        message: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        detail = message or f"code de retour {returncode}"
        tool = command[0] if command else "?"
        super().__init__(f"{tool} a echoue: {detail}")


class ProbeFailure(TeleStockError):
    """La sonde video a echoue ou a retourne une valeur inexploitable."""


class SegmentationFailure(TeleStockError):
    """Le decoupage de la video a echoue."""


class ThumbnailFailure(TeleStockError):
    """L'extraction d'une frame ou la composition de la planche a echoue."""


class AlbumTooLarge(TeleStockError):
    """
    L'album depasse le nombre maximum d'elements autorise.

    Attributes:
        item_count: Nombre d'elements demandes
        limit: Limite de la plateforme
    """

    def __init__(self, item_count: int, limit: int) -> None:
        self.item_count = item_count
        self.limit = limit
        super().__init__(
            f"L'album aurait {item_count} elements "
            f"(1 apercu + {item_count - 1} segments), limite de {limit}"
        )


class TransportError(TeleStockError):
    """
    Erreur retournee par le transport de messagerie.

    Attributes:
        error_code: Code d'erreur de l'API (si disponible)
    """

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        self.error_code = error_code
        super().__init__(message)


class UploadFailure(TeleStockError):
    """L'envoi d'un element ou de l'album a echoue."""


class RelocateFailure(TeleStockError):
    """
    Le deplacement d'un fichier vers le repertoire final a echoue.

    Attributes:
        source: Fichier qui n'a pas pu etre deplace
    """

    def __init__(self, source: Path, message: str) -> None:
        self.source = source
        super().__init__(message)
