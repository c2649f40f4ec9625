"""
Journalisation de TeleStock via loguru.

Deux destinations :
- console : une ligne courte par evenement, prefixee par le fichier en cours
  de traitement quand le service a lie son nom (logger.bind(file=...)) ;
- fichier JSON tournant : tous les niveaux, y compris les commandes ffmpeg
  et les appels a l'API Bot logues en DEBUG.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "{file_prefix}"
    "<level>{message}</level>\n{exception}"
)


def _console_format(record: dict) -> str:
    """Format console : le nom du fichier lie apparait avant le message."""
    file_prefix = ""
    if record["extra"].get("file"):
        file_prefix = "<magenta>{extra[file]}</magenta> | "
    return CONSOLE_FORMAT.replace("{file_prefix}", file_prefix)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = Path("logs/telestock.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    console_sink: Any = None,
) -> None:
    """
    Installe les destinations console et fichier.

    Appelee au demarrage puis a nouveau par -v/-q : les destinations
    precedentes sont retirees a chaque appel.

    Args:
        log_level: Niveau minimum de la console
        log_file: Journal JSON (None = console seule)
        rotation_size: Taille declenchant la rotation (ex: "10 MB")
        retention_count: Nombre de journaux tournes conserves
        console_sink: Destination console (sys.stderr par defaut)
    """
    logger.remove()

    logger.add(
        console_sink if console_sink is not None else sys.stderr,
        level=log_level,
        format=_console_format,
        colorize=True,
    )

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe
    )

    logger.debug(f"Journal JSON: {log_file} (rotation {rotation_size})")
