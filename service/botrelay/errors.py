"""
Exceptions raised by the outbound API clients.

Handlers let these propagate; the command router catches them at its
boundary and turns them into a user-facing error reply.
"""

from typing import Optional


class BotRelayError(Exception):
    """Base class for upstream failures."""


class TelegramAPIError(BotRelayError):
    """Telegram Bot API rejected a call (ok=false or HTTP error)."""

    def __init__(self, method: str, description: str, error_code: Optional[int] = None):
        self.method = method
        self.description = description
        self.error_code = error_code
        super().__init__(f"Telegram {method} failed: {description}")


class InferenceError(BotRelayError):
    """Workers AI returned an error envelope or an unusable response."""

    def __init__(self, model: str, message: str):
        self.model = model
        super().__init__(f"{model}: {message}")
