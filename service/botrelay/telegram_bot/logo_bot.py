"""
Logo bot: replies to 1-2 letters with a rendered logo photo.

Unlike the AI router, send failures are not caught here; they propagate
to the webhook endpoint.
"""

import asyncio
import random
from typing import Optional

from botrelay.services.logo import pick_gradient, render_logo
from .logging_config import bot_logger as logger
from .telegram_api import TelegramClient

LOGO_PROMPT = "Please send 1-2 letters to generate a beautiful logo."


def logo_text(text: str) -> str:
    """First two characters of the trimmed message, uppercased."""
    return text.strip()[:2].upper()


class LogoBot:

    def __init__(
        self,
        telegram: TelegramClient,
        font_path: str = "DejaVuSans-Bold.ttf",
        rng: Optional[random.Random] = None,
    ):
        self.telegram = telegram
        self.font_path = font_path
        self.rng = rng or random.Random()

    async def handle_text(self, chat_id: int, text: str) -> None:
        letters = logo_text(text)
        if not letters:
            await self.telegram.send_message(chat_id, LOGO_PROMPT)
            return

        gradient = pick_gradient(self.rng)
        logger.info(f"Rendering logo '{letters}' with gradient {gradient} for chat_id={chat_id}")
        # Render in a worker thread
        image = await asyncio.to_thread(render_logo, letters, gradient=gradient, font_path=self.font_path)
        await self.telegram.send_photo(chat_id, image, filename="logo.png")
