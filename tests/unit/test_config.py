"""
Tests unitaires pour Settings (pydantic-settings).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config import Settings


class TestSettings:
    """Tests de chargement et validation de la configuration."""

    def test_max_size_accepts_human_readable(self, tmp_path: Path) -> None:
        """max_size accepte "1.5G"."""
        settings = Settings(max_size="1.5G", log_file=tmp_path / "t.log")
        assert settings.max_size == int(1.5 * 1024**3)

    def test_max_size_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Les variables TELESTOCK_ surchargent les valeurs par defaut."""
        monkeypatch.setenv("TELESTOCK_MAX_SIZE", "500M")
        monkeypatch.setenv("TELESTOCK_UPLOAD_CONCURRENCY", "3")
        settings = Settings(log_file=tmp_path / "t.log")
        assert settings.max_size == 500 * 1024**2
        assert settings.upload_concurrency == 3

    def test_invalid_max_size(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_size="2X")

    def test_concurrency_bounds(self) -> None:
        """upload_concurrency est borne entre 1 et 10."""
        with pytest.raises(ValidationError):
            Settings(upload_concurrency=11)

    def test_paths_are_expanded(self) -> None:
        settings = Settings(source_dir="~/inbox")
        assert settings.source_dir == Path("~/inbox").expanduser()

    def test_telegram_enabled(self) -> None:
        assert not Settings(bot_token=None).telegram_enabled
        assert Settings(bot_token="1:a", storage_chat_id=-100).telegram_enabled

    def test_staging_defaults_to_storage(self) -> None:
        """Sans chat de transit, les envois passent par le chat de stockage."""
        settings = Settings(storage_chat_id=-100)
        assert settings.effective_staging_chat_id == -100
        settings = Settings(storage_chat_id=-100, staging_chat_id=-200)
        assert settings.effective_staging_chat_id == -200
