"""
Execution des sous-processus ffmpeg/ffprobe.

Chaque appel est attendu (jamais en tache de fond). Un timeout ou une
annulation de la coroutine appelante tue le processus avant de propager.
"""

import asyncio
from typing import Optional

from loguru import logger

from src.core.errors import ToolError


async def run_tool(command: list[str], timeout: Optional[float] = None) -> str:
    """
    Execute une commande et retourne sa sortie standard decodee.

    Args:
        command: Ligne de commande complete (binaire en premier)
        timeout: Delai maximum en secondes (None = illimite)

    Returns:
        Sortie standard (texte)

    Raises:
        ToolError: Binaire introuvable, timeout ou code de retour non nul
        asyncio.CancelledError: Propagee apres avoir tue le processus
    """
    logger.debug(f"Execution: {' '.join(command)}")

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ToolError(command, message=str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(process)
        raise ToolError(command, message=f"timeout apres {timeout}s")
    except asyncio.CancelledError:
        await _kill(process)
        raise

    if process.returncode != 0:
        output = stderr.decode(errors="replace").strip()
        raise ToolError(
            command,
            returncode=process.returncode,
            output=output,
            message=output,
        )

    return stdout.decode(errors="replace")


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Tue le processus s'il tourne encore et attend sa terminaison."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()
