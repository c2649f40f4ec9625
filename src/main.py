"""
Point d'entrée CLI de TeleStock.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import preview, probe, run, scan
from .config import Settings
from .container import Container
from .logging_config import configure_logging
from .utils.helpers import format_size

app = typer.Typer(
    name="telestock",
    help="Envoi de medias vers Telegram avec planche contact et decoupage",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """TeleStock - Envoi de medias vers Telegram."""
    if quiet:
        state["quiet"] = True
    else:
        state["verbose"] = verbose
    _apply_verbosity()


# Monter les commandes depuis adapters/cli/commands
app.command()(run)
app.command()(scan)
app.command()(probe)
app.command()(preview)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration TeleStock")
    typer.echo(f"Source : {config.source_dir}")
    typer.echo(f"Terminés : {config.done_dir}")
    typer.echo(f"Temporaire : {config.temp_dir or 'système'}")
    typer.echo(
        f"Taille max : {format_size(config.max_size) if config.max_size else 'illimitée'}"
    )
    typer.echo(f"Bot Telegram : {'configuré' if config.telegram_enabled else 'non configuré'}")
    typer.echo(f"Chat de stockage : {config.storage_chat_id}")
    typer.echo(f"Envois simultanés : {config.upload_concurrency}")
    typer.echo(f"Planche contact : {config.preview_columns}x{config.preview_rows}")
    typer.echo(f"ffmpeg : {config.ffmpeg_path} / ffprobe : {config.ffprobe_path}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"TeleStock v{__version__}")


def _apply_verbosity() -> None:
    """Reconfigure la sortie console selon -v / -q."""
    settings = container.config()
    if state["quiet"]:
        level = "ERROR"
    elif state["verbose"] >= 1:
        level = "DEBUG"
    else:
        level = settings.log_level
    configure_logging(
        log_level=level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de TeleStock", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
