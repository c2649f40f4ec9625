"""Transport de messagerie via l'API Bot Telegram."""

from src.adapters.telegram.bot_transport import TelegramBotTransport
from src.adapters.telegram.retry import RateLimitError, with_retry

__all__ = ["TelegramBotTransport", "RateLimitError", "with_retry"]
