"""
Inbound webhook update parsing.

Webhook bodies are parsed with python-telegram-bot's Update.de_json and
then flattened into the few fields the bots actually read.
"""

from dataclasses import dataclass
from typing import Optional

from telegram import Update


class InvalidUpdateError(ValueError):
    """Webhook body is not a Telegram update we can parse."""


@dataclass(frozen=True)
class InboundUpdate:
    """What a handler needs from one webhook delivery."""

    chat_id: int
    text: str = ""
    photo_file_id: Optional[str] = None
    audio_file_id: Optional[str] = None


def parse_update(data: dict) -> Optional[Update]:
    """
    Parse a webhook JSON body into a telegram.Update.

    Returns None when the body is not a dict.
    Raises InvalidUpdateError when required Telegram fields are missing.
    """
    if not isinstance(data, dict):
        return None
    try:
        return Update.de_json(data, None)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise InvalidUpdateError(f"Malformed update: {e}") from e


def to_inbound(update: Update) -> Optional[InboundUpdate]:
    """
    Flatten a message or callback-query update.

    Text comes from the message text, else its caption (photos and voice
    notes carry the command there), else the callback data. Attachments
    are only read from a direct message. Returns None for any other kind
    of update (edited messages, channel posts, ...).
    """
    message = update.message
    if message is not None:
        photo_file_id = message.photo[-1].file_id if message.photo else None

        audio_file_id = None
        if message.voice:
            audio_file_id = message.voice.file_id
        elif message.audio:
            audio_file_id = message.audio.file_id

        return InboundUpdate(
            chat_id=message.chat.id,
            text=message.text or message.caption or "",
            photo_file_id=photo_file_id,
            audio_file_id=audio_file_id,
        )

    query = update.callback_query
    if query is not None and query.message is not None:
        return InboundUpdate(
            chat_id=query.message.chat.id,
            text=query.data or "",
        )

    return None
