"""
Entites du pipeline d'envoi.

Entites representant un fichier en attente de traitement, le resultat
de sa livraison et la progression de l'envoi de chaque element.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SourceFile:
    """
    Fichier en attente de traitement dans le repertoire source.

    Le nom de fichier sert de cle de tri : l'ordre de traitement est
    deterministe d'une execution a l'autre, independamment des dates
    de modification.

    Attributs :
        path : Chemin absolu du fichier
        size_bytes : Taille du fichier en octets
    """

    path: Path
    size_bytes: int = 0

    @property
    def filename(self) -> str:
        """Nom de fichier (sans le chemin)."""
        return self.path.name


@dataclass
class DeliveryResult:
    """
    Resultat de l'envoi d'un fichier source.

    Attributs :
        delivery_id : Identifiant du message livre (0 = echec)
        retained_files : Fichiers derives a conserver avec l'original
            (planche contact, segments)
    """

    delivery_id: int = 0
    retained_files: list[Path] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True si la plateforme a retourne un identifiant de livraison."""
        return self.delivery_id != 0


@dataclass
class ProgressState:
    """
    Progression de l'envoi d'un element.

    Mutee par les callbacks du transport, lue par l'affichage.

    Attributs :
        upload_id : Identifiant unique de l'envoi
        name : Nom du fichier envoye
        total : Taille totale en octets (-1 si inconnue)
        transferred : Octets deja transferes
    """

    upload_id: int
    name: str = ""
    total: int = -1
    transferred: int = 0

    @property
    def finished(self) -> bool:
        """True quand tous les octets connus ont ete transferes."""
        return self.total >= 0 and self.transferred >= self.total

    @property
    def ratio(self) -> float:
        """Fraction transferee (0.0 si la taille totale est inconnue)."""
        if self.total <= 0:
            return 1.0 if self.total == 0 else 0.0
        return min(self.transferred / self.total, 1.0)
