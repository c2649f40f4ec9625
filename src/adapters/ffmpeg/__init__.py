"""Adaptateur ffprobe/ffmpeg (sous-processus)."""

from src.adapters.ffmpeg.runner import run_tool
from src.adapters.ffmpeg.toolkit import FFmpegToolkit

__all__ = ["FFmpegToolkit", "run_tool"]
