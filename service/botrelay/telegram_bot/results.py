"""
Handler result types.

Every command handler returns Success(reply) or Failure(kind, message).
The router sends exactly one reply per update; failures are rendered by
failure_reply() so the user-facing error text lives in one place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from telegram import InlineKeyboardMarkup


@dataclass(frozen=True)
class TextReply:
    text: str
    keyboard: Optional[InlineKeyboardMarkup] = None


@dataclass(frozen=True)
class PhotoReply:
    photo: bytes
    caption: Optional[str] = None
    filename: str = "image.png"


Reply = Union[TextReply, PhotoReply]


class FailureKind(str, Enum):
    INFERENCE = "inference"
    MESSAGING = "messaging"


@dataclass(frozen=True)
class Success:
    reply: Reply


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


HandlerResult = Union[Success, Failure]


def reply_text(text: str, keyboard: Optional[InlineKeyboardMarkup] = None) -> Success:
    return Success(TextReply(text, keyboard))


def failure_reply(failure: Failure) -> TextReply:
    """The only user-facing rendering of an upstream failure."""
    return TextReply(f"An error occurred: {failure.message}")
