"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.inspect_commands import preview, probe, scan
from src.adapters.cli.commands.upload_commands import run

__all__ = [
    "preview",
    "probe",
    "run",
    "scan",
]
