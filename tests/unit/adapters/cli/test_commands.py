"""
Tests unitaires pour les commandes CLI.

Un vrai Container est utilise, avec la configuration, l'outil media et le
transport remplaces (override dependency-injector).

Tests couvrant:
- scan: liste des fichiers, legendes et noms invalides
- run: lot complet, code de sortie selon les echecs
- render_summary: tableau recapitulatif
"""

from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from dependency_injector import providers
from typer.testing import CliRunner

from src.adapters.cli.commands import run, scan
from src.adapters.cli.progress_display import render_summary
from src.config import Settings
from src.container import Container
from src.core.entities import SourceFile
from src.services.pipeline import BatchSummary, FileOutcome
from tests.fixtures.fakes import FakeMediaToolkit, FakeTransport

runner = CliRunner()


def _app(command) -> typer.Typer:
    app = typer.Typer()
    app.command()(command)
    return app


@pytest.fixture
def container(test_settings: Settings, fake_transport: FakeTransport):
    """Container reel, adaptateurs externes remplaces par des faux."""
    instance = Container()
    instance.config.override(providers.Object(test_settings))
    instance.media_toolkit.override(providers.Object(FakeMediaToolkit()))
    instance.transport.override(providers.Object(fake_transport))
    with patch("src.adapters.cli.helpers.Container", return_value=instance):
        yield instance


class TestScan:
    """Tests pour la commande scan."""

    def test_lists_files(self, container, test_settings: Settings) -> None:
        (test_settings.source_dir / "travel_sunset_beach.jpg").write_bytes(b"x")
        (test_settings.source_dir / "broken.jpg").write_bytes(b"x")

        result = runner.invoke(_app(scan), [])

        assert result.exit_code == 0
        assert "travel_sunset_beach.jpg" in result.output
        assert "#travel" in result.output
        assert "1 nom(s) de fichier invalide(s)" in result.output

    def test_missing_source_dir(self, container, test_settings: Settings) -> None:
        test_settings.source_dir.rmdir()
        result = runner.invoke(_app(scan), [])
        assert result.exit_code == 1


class TestRun:
    """Tests pour la commande run."""

    def test_delivers_batch(
        self, container, test_settings: Settings, fake_transport: FakeTransport
    ) -> None:
        (test_settings.source_dir / "travel_sunset_beach.jpg").write_bytes(b"x" * 10)
        (test_settings.source_dir / "cats_nap.mp4").write_bytes(b"x" * 10)

        result = runner.invoke(_app(run), [])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in test_settings.done_dir.iterdir()) == [
            "cats_nap_msgid_12345.mp4",
            "cats_nap_preview_msgid_12345.jpg",
            "travel_sunset_beach_msgid_12345.jpg",
        ]
        assert len(fake_transport.albums) == 1
        assert len(fake_transport.singles) == 1
        assert fake_transport.closed

    def test_failures_exit_code(
        self, container, test_settings: Settings, fake_transport: FakeTransport
    ) -> None:
        (test_settings.source_dir / "notes_todo.pdf").write_bytes(b"x")
        fake_transport.fail_names = {"notes_todo.pdf"}

        result = runner.invoke(_app(run), [])

        assert result.exit_code == 1
        assert "ECHEC" in result.output
        assert (test_settings.source_dir / "notes_todo.pdf").exists()

    def test_max_size_override(
        self, container, test_settings: Settings, fake_transport: FakeTransport
    ) -> None:
        """--max-size remplace la limite configuree pour ce lot."""
        (test_settings.source_dir / "trip_long.mkv").write_bytes(b"x" * 3000)

        result = runner.invoke(_app(run), ["--max-size", "1K"])

        assert result.exit_code == 0, result.output
        assert test_settings.max_size == 1024

    def test_invalid_max_size(self, container) -> None:
        result = runner.invoke(_app(run), ["--max-size", "big"])
        assert result.exit_code == 1

    def test_bot_not_configured(self, container, test_settings: Settings) -> None:
        test_settings.bot_token = None
        result = runner.invoke(_app(run), [])
        assert result.exit_code == 1
        assert "Bot non configure" in result.output


def test_render_summary_caption() -> None:
    summary = BatchSummary(
        outcomes=[
            FileOutcome(source=SourceFile(Path("a_b.jpg"), 1), delivery_id=1),
            FileOutcome(source=SourceFile(Path("c_d.jpg"), 1), error="refuse"),
        ],
        cancelled=True,
    )
    table = render_summary(summary)
    assert table.row_count == 2
    assert table.caption == "2 traite(s), 1 reussi(s), 1 echoue(s) - lot annule"
