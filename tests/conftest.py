"""
Fixtures pytest partagees pour les tests TeleStock.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock de IFileSystem
- Outil media et transport factices
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.config import Settings
from src.core.ports.file_system import IFileSystem
from src.services.context import PipelineContext
from tests.fixtures.fakes import FakeMediaToolkit, FakeTransport


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Le mock implemente toutes les methodes de IFileSystem.
    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = True
    mock.list_files.return_value = []
    mock.atomic_move.return_value = True
    mock.get_size.return_value = 500 * 1024 * 1024  # 500 MB par defaut
    return mock


@pytest.fixture
def fake_toolkit() -> FakeMediaToolkit:
    """Outil media factice (video 1920x1080, 120 s, 8 Mbit/s, audio AAC)."""
    return FakeMediaToolkit()


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Transport factice retournant l'identifiant 12345."""
    return FakeTransport()


@pytest.fixture
def pipeline_context() -> PipelineContext:
    """Contexte d'execution neuf (registre vide, pas d'annulation)."""
    return PipelineContext()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour creer une structure de repertoires
    isolee pour chaque test.
    """
    source_dir = tmp_path / "inbox"
    done_dir = tmp_path / "done"
    temp_dir = tmp_path / "tmp"
    source_dir.mkdir(parents=True)

    return Settings(
        source_dir=source_dir,
        done_dir=done_dir,
        temp_dir=temp_dir,
        max_size="2G",
        bot_token="123:abc",
        storage_chat_id=-100123,
        log_file=tmp_path / "test.log",
    )
