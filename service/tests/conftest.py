"""
Shared fakes and Telegram payload builders.
"""

from typing import Any, Optional

import pytest

from botrelay.errors import InferenceError
from botrelay.telegram_bot.router import CommandRouter


class FakeTelegram:
    """Records outbound Bot API calls instead of sending them."""

    def __init__(self, files: Optional[dict[str, bytes]] = None, fail_with: Optional[Exception] = None):
        self.files = files or {}
        self.fail_with = fail_with
        self.messages: list[dict[str, Any]] = []
        self.photos: list[dict[str, Any]] = []
        self.fetched: list[str] = []

    @property
    def sent(self) -> list[dict[str, Any]]:
        return self.messages + self.photos

    async def send_message(self, chat_id, text, reply_markup=None, parse_mode=None):
        self.messages.append({"chat_id": chat_id, "text": text, "reply_markup": reply_markup})
        return {"message_id": len(self.messages)}

    async def send_photo(self, chat_id, photo, caption=None, filename="image.png"):
        self.photos.append({"chat_id": chat_id, "photo": photo, "caption": caption, "filename": filename})
        return {"message_id": len(self.photos)}

    async def fetch_file_bytes(self, file_id):
        self.fetched.append(file_id)
        if self.fail_with:
            raise self.fail_with
        return self.files.get(file_id, b"file-bytes")


class FakeInference:
    """Returns canned results per model, or raises."""

    def __init__(self, results: Optional[dict[str, Any]] = None, error: Optional[str] = None):
        self.results = results or {}
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    async def run(self, model, inputs):
        self.calls.append((model, inputs))
        if self.error:
            raise InferenceError(model, self.error)
        return self.results.get(model, {})


@pytest.fixture
def telegram():
    return FakeTelegram()


@pytest.fixture
def inference():
    return FakeInference()


@pytest.fixture
def router(telegram, inference):
    return CommandRouter(telegram, inference)


def make_message(
    text: Optional[str] = "hello",
    chat_id: int = 12345,
    photo: bool = False,
    voice: bool = False,
    audio: bool = False,
    caption: Optional[str] = None,
) -> dict[str, Any]:
    message: dict[str, Any] = {
        "message_id": 1,
        "date": 1700000000,
        "chat": {"id": chat_id, "type": "private"},
        "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
    }
    if text is not None:
        message["text"] = text
    if caption is not None:
        message["caption"] = caption
    if photo:
        message["photo"] = [
            {"file_id": "photo-small", "file_unique_id": "ps", "width": 90, "height": 90},
            {"file_id": "photo-large", "file_unique_id": "pl", "width": 1280, "height": 1280},
        ]
    if voice:
        message["voice"] = {"file_id": "voice-1", "file_unique_id": "v1", "duration": 3}
    if audio:
        message["audio"] = {"file_id": "audio-1", "file_unique_id": "a1", "duration": 30}
    return message


def make_update(update_id: int = 1, **kwargs) -> dict[str, Any]:
    return {"update_id": update_id, "message": make_message(**kwargs)}


def make_callback_update(data: str, chat_id: int = 12345, update_id: int = 2) -> dict[str, Any]:
    return {
        "update_id": update_id,
        "callback_query": {
            "id": "cb-1",
            "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
            "chat_instance": "ci-1",
            "message": make_message(text="Choose a category:", chat_id=chat_id),
            "data": data,
        },
    }
