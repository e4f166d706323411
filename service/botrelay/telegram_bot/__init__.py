"""
Telegram bots served by botrelay.

ARCHITECTURE: Stateless webhook adapters
- AI router: slash command -> one Workers AI call -> one reply
- Logo bot: 1-2 letters -> Pillow render -> one photo

Updates are parsed with python-telegram-bot, replies are sent with a
small httpx-based Bot API client.
"""

from .router import CommandRouter, split_command
from .logo_bot import LogoBot
from .telegram_api import TelegramClient
from .updates import InboundUpdate, parse_update, to_inbound

__all__ = [
    "CommandRouter",
    "split_command",
    "LogoBot",
    "TelegramClient",
    "InboundUpdate",
    "parse_update",
    "to_inbound",
]
