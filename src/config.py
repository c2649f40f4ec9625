"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe TELESTOCK_,
et peut optionnellement être fournie via un fichier .env.

Le jeton du bot est optionnel pour les commandes locales (scan, probe, preview) ;
il est requis pour la commande run.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.constants import PREVIEW_COLUMNS, PREVIEW_JPEG_QUALITY, PREVIEW_ROWS
from src.utils.helpers import parse_size

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe TELESTOCK_.
    Exemple : TELESTOCK_MAX_SIZE=2G

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="TELESTOCK_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    source_dir: Path = Field(default=Path("~/telestock/inbox"))
    done_dir: Path = Field(default=Path("~/telestock/done"))
    temp_dir: Optional[Path] = Field(default=None)
    keep_temp: bool = Field(default=False)

    # Taille maximale d'un élément envoyé (octets, 0 = pas de limite)
    max_size: int = Field(default=2 * 1024**3, ge=0)

    # Telegram (API Bot)
    bot_token: Optional[str] = Field(default=None)
    storage_chat_id: int = Field(default=0)
    staging_chat_id: Optional[int] = Field(default=None)
    api_base_url: str = Field(default="https://api.telegram.org")

    # Envoi
    upload_concurrency: int = Field(default=4, ge=1, le=10)
    upload_timeout: float = Field(default=600.0, gt=0)
    api_max_attempts: int = Field(default=5, ge=1)
    api_max_wait: float = Field(default=60.0, ge=0)

    # Planche contact
    preview_columns: int = Field(default=PREVIEW_COLUMNS, ge=1)
    preview_rows: int = Field(default=PREVIEW_ROWS, ge=1)
    preview_quality: int = Field(default=PREVIEW_JPEG_QUALITY, ge=1, le=100)

    # Outils externes
    ffmpeg_path: str = Field(default="ffmpeg")
    ffprobe_path: str = Field(default="ffprobe")
    probe_timeout: float = Field(default=30.0, gt=0)
    ffmpeg_timeout: Optional[float] = Field(default=None)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/telestock.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("source_dir", "done_dir", "temp_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("max_size", mode="before")
    @classmethod
    def parse_max_size(cls, v: str | int) -> int:
        """Accepte une taille lisible ("2G", "500M", "1.5G") ou un nombre d'octets."""
        return parse_size(v)

    @property
    def telegram_enabled(self) -> bool:
        """Vérifie si le bot Telegram est configuré."""
        return bool(self.bot_token) and self.storage_chat_id != 0

    @property
    def effective_staging_chat_id(self) -> int:
        """Chat de transit des envois (le chat de stockage par défaut)."""
        return self.staging_chat_id if self.staging_chat_id is not None else self.storage_chat_id
