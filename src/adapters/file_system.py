"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem pour les operations fichiers reelles :
listage du repertoire source et deplacement des fichiers livres.
"""

import os
import shutil
import uuid
from pathlib import Path

from loguru import logger

from src.core.ports.file_system import IFileSystem

# Taille du bloc de copie pour le repli cross-filesystem (8 MB)
COPY_CHUNK_SIZE: int = 8 * 1024 * 1024


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def list_files(self, directory: Path) -> list[Path]:
        """
        Liste les fichiers reguliers d'un repertoire (non recursif).

        Les sous-repertoires sont ignores. Les erreurs de lecture du
        repertoire sont propagees (OSError).
        """
        files = [entry for entry in directory.iterdir() if entry.is_file()]
        return sorted(files, key=lambda p: p.name)

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def atomic_move(self, source: Path, destination: Path) -> bool:
        """
        Deplace un fichier de maniere atomique.

        Utilise os.replace pour un deplacement atomique sur le meme filesystem.
        Pour un deplacement cross-filesystem, copie vers un fichier temporaire
        a cote de la destination, force l'ecriture sur disque (fsync), renomme
        le temporaire puis supprime la source.

        Args:
            source: Chemin du fichier source
            destination: Chemin de destination

        Returns:
            True si le deplacement a reussi, False sinon.
        """
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)

            try:
                os.replace(source, destination)
            except OSError:
                # Cross-filesystem: copie intermediaire avec fichier temporaire
                temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
                try:
                    self._copy_synced(source, temp)
                    os.replace(temp, destination)
                    source.unlink()
                except Exception:
                    if temp.exists():
                        temp.unlink()
                    raise

            return True
        except Exception as e:
            logger.warning(f"Deplacement impossible {source} -> {destination}: {e}")
            return False

    @staticmethod
    def _copy_synced(source: Path, destination: Path) -> None:
        """Copie le contenu puis fsync la destination avant de la fermer."""
        with open(source, "rb") as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst, COPY_CHUNK_SIZE)
            dst.flush()
            os.fsync(dst.fileno())
        shutil.copystat(source, destination)
