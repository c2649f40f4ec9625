"""
Tests unitaires pour run_tool avec de vrais sous-processus (/bin/sh).
"""

import asyncio
import shutil

import pytest

from src.adapters.ffmpeg.runner import run_tool
from src.core.errors import ToolError

pytestmark = pytest.mark.skipif(shutil.which("sh") is None, reason="sh requis")


class TestRunTool:
    """Tests pour run_tool."""

    @pytest.mark.asyncio
    async def test_returns_stdout(self) -> None:
        assert await run_tool(["sh", "-c", "echo 42.5"]) == "42.5\n"

    @pytest.mark.asyncio
    async def test_non_zero_exit(self) -> None:
        with pytest.raises(ToolError) as exc_info:
            await run_tool(["sh", "-c", "echo bad input >&2; exit 3"])
        assert exc_info.value.returncode == 3
        assert exc_info.value.output == "bad input"

    @pytest.mark.asyncio
    async def test_missing_binary(self) -> None:
        with pytest.raises(ToolError) as exc_info:
            await run_tool(["telestock-no-such-binary"])
        assert exc_info.value.returncode is None

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        with pytest.raises(ToolError) as exc_info:
            await run_tool(["sh", "-c", "sleep 5"], timeout=0.1)
        assert "timeout" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        """Annuler l'appelant tue le processus et propage CancelledError."""
        task = asyncio.create_task(run_tool(["sh", "-c", "sleep 5"]))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
