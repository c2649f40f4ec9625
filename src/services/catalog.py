"""
Service de catalogue du repertoire source.

Liste les fichiers a traiter et extrait les metadonnees portees par leur
nom (convention TAG_DESCRIPTION.ext) : tag, description, legende et type
de media.
"""

from pathlib import Path

from loguru import logger

from src.core.entities import SourceFile
from src.core.errors import CatalogError, InvalidFilenameFormat
from src.core.ports.file_system import IFileSystem
from src.core.value_objects import MediaKind, ParsedName
from src.utils.constants import (
    AUDIO_EXTENSIONS,
    PARTIAL_SUFFIXES,
    PHOTO_EXTENSIONS,
    VIDEO_EXTENSIONS,
)


def parse_filename(filename: str) -> ParsedName:
    """
    Decoupe un nom de fichier en tag et description.

    Le tag est la partie avant le premier underscore, la description tout
    ce qui suit (extension exclue). Les underscores suivants appartiennent
    a la description.

    Args:
        filename: Nom de fichier (avec ou sans chemin)

    Returns:
        ParsedName(tag, description)

    Raises:
        InvalidFilenameFormat: Pas d'underscore, tag ou description vide

    Example:
        >>> parse_filename("travel_sunset_beach.jpg")
        ParsedName(tag='travel', description='sunset_beach')
    """
    stem = Path(filename).stem
    tag, separator, description = stem.partition("_")
    if not separator:
        raise InvalidFilenameFormat(filename, "aucun underscore")
    if not tag:
        raise InvalidFilenameFormat(filename, "tag vide")
    if not description:
        raise InvalidFilenameFormat(filename, "description vide")
    return ParsedName(tag=tag, description=description)


def build_caption(tag: str, description: str) -> str:
    """Legende : "#" + tag, espace, description avec underscores remplaces."""
    return ParsedName(tag=tag, description=description).caption


def detect_media_kind(filename: str) -> MediaKind:
    """Type de media deduit de l'extension (insensible a la casse)."""
    extension = Path(filename).suffix.lower()
    if extension in PHOTO_EXTENSIONS:
        return MediaKind.PHOTO
    if extension in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    if extension in AUDIO_EXTENSIONS:
        return MediaKind.AUDIO
    return MediaKind.DOCUMENT


def is_candidate(path: Path) -> bool:
    """Exclut les fichiers caches et les fichiers en cours d'ecriture."""
    if path.name.startswith("."):
        return False
    return path.suffix.lower() not in PARTIAL_SUFFIXES


class FileCatalog:
    """
    Catalogue des fichiers du repertoire source.

    Le scan est non recursif et trie par nom : deux executions sur le
    meme repertoire traitent les fichiers dans le meme ordre.
    """

    def __init__(self, file_system: IFileSystem, source_dir: Path) -> None:
        """
        Initialise le catalogue.

        Args:
            file_system: Implementation de IFileSystem
            source_dir: Repertoire contenant les fichiers a envoyer
        """
        self._file_system = file_system
        self._source_dir = source_dir

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    def scan(self) -> list[SourceFile]:
        """
        Liste les fichiers a traiter.

        Returns:
            SourceFile tries par nom de fichier

        Raises:
            CatalogError: Repertoire absent ou illisible
        """
        if not self._file_system.exists(self._source_dir):
            raise CatalogError(f"Repertoire source introuvable: {self._source_dir}")

        try:
            paths = self._file_system.list_files(self._source_dir)
        except OSError as e:
            raise CatalogError(
                f"Lecture impossible du repertoire source {self._source_dir}: {e}"
            ) from e

        files = [
            SourceFile(path=path, size_bytes=self._file_system.get_size(path))
            for path in paths
            if is_candidate(path)
        ]
        files.sort(key=lambda f: f.filename)

        skipped = len(paths) - len(files)
        if skipped:
            logger.debug(f"{skipped} fichier(s) cache(s) ou partiel(s) ignore(s)")
        return files
