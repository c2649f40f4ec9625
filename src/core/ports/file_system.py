"""
Interfaces ports pour le système de fichiers.

Interface abstraite (port) définissant les contrats pour les opérations fichiers
dont le pipeline a besoin : lister le répertoire source, mesurer un fichier,
déplacer les fichiers livrés vers le répertoire final.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface pour les opérations de base sur les fichiers.

    Définit les opérations pour interagir avec le système de fichiers :
    vérification d'existence, listage non récursif, taille, déplacement.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def list_files(self, directory: Path) -> list[Path]:
        """
        Liste les fichiers d'un répertoire (non récursif).

        Les sous-répertoires sont exclus. L'ordre est lexicographique
        sur le nom de fichier.

        Args :
            directory : Répertoire à lister

        Retourne :
            Chemins des fichiers, triés par nom

        Lève :
            OSError : Si le répertoire ne peut pas être lu
        """
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Récupère la taille du fichier en octets.

        Args :
            path : Chemin vers le fichier

        Retourne :
            Taille du fichier en octets, ou 0 si le fichier n'existe pas
        """
        ...

    @abstractmethod
    def atomic_move(self, source: Path, destination: Path) -> bool:
        """
        Déplace un fichier, avec repli copie + suppression entre systèmes de fichiers.

        La copie est synchronisée sur le support avant suppression de la source.
        Crée les répertoires parents si nécessaire.

        Args :
            source : Chemin actuel du fichier
            destination : Chemin cible du fichier

        Retourne :
            True si réussi, False sinon
        """
        ...
