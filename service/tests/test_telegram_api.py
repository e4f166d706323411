"""
Tests for the Telegram Bot API client.

Outbound HTTP is served by httpx.MockTransport.
"""

import json

import httpx
import pytest
from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from botrelay.errors import TelegramAPIError
from botrelay.telegram_bot.telegram_api import TelegramClient


def make_client(handler, token: str = "123:ABC") -> TelegramClient:
    return TelegramClient(token, transport=httpx.MockTransport(handler))


class TestSendMessage:

    @pytest.mark.asyncio
    async def test_posts_json_payload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": 7}})

        result = await make_client(handler).send_message(12345, "hi there")

        assert result == {"message_id": 7}
        request = requests[0]
        assert request.method == "POST"
        assert request.url.host == "api.telegram.org"
        assert request.url.path == "/bot123:ABC/sendMessage"
        assert json.loads(request.content) == {"chat_id": 12345, "text": "hi there"}

    @pytest.mark.asyncio
    async def test_serializes_inline_keyboard(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True, "result": {}})

        markup = InlineKeyboardMarkup([[InlineKeyboardButton("EN → ES", callback_data="/translate en es")]])
        await make_client(handler).send_message(1, "Choose", reply_markup=markup, parse_mode="HTML")

        assert bodies[0]["reply_markup"] == {
            "inline_keyboard": [[{"text": "EN → ES", "callback_data": "/translate en es"}]]
        }
        assert bodies[0]["parse_mode"] == "HTML"

    @pytest.mark.asyncio
    async def test_api_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={
                "ok": False, "error_code": 400, "description": "Bad Request: chat not found",
            })

        with pytest.raises(TelegramAPIError) as exc:
            await make_client(handler).send_message(1, "hi")

        assert exc.value.method == "sendMessage"
        assert exc.value.error_code == 400
        assert "chat not found" in str(exc.value)

    @pytest.mark.asyncio
    async def test_non_json_error_raises_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(httpx.HTTPStatusError):
            await make_client(handler).send_message(1, "hi")


class TestSendPhoto:

    @pytest.mark.asyncio
    async def test_uploads_multipart(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

        await make_client(handler).send_photo(99, b"PNGBYTES", caption="a fox", filename="logo.png")

        request = requests[0]
        assert request.url.path.endswith("/sendPhoto")
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="chat_id"' in body and b"99" in body
        assert b'name="caption"' in body and b"a fox" in body
        assert b'filename="logo.png"' in body
        assert b"PNGBYTES" in body

    @pytest.mark.asyncio
    async def test_no_caption_field_when_empty(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return httpx.Response(200, json={"ok": True, "result": {}})

        await make_client(handler).send_photo(1, b"IMG")

        assert b'name="caption"' not in bodies[0]


class TestFiles:

    @pytest.mark.asyncio
    async def test_fetch_file_bytes(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path.endswith("/getFile"):
                assert request.url.params["file_id"] == "abc"
                return httpx.Response(200, json={"ok": True, "result": {"file_path": "photos/file_1.jpg"}})
            return httpx.Response(200, content=b"JPEGDATA")

        data = await make_client(handler).fetch_file_bytes("abc")

        assert data == b"JPEGDATA"
        assert seen[1] == "/file/bot123:ABC/photos/file_1.jpg"

    @pytest.mark.asyncio
    async def test_get_file_without_path(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "result": {"file_id": "abc"}})

        with pytest.raises(TelegramAPIError):
            await make_client(handler).get_file("abc")

    @pytest.mark.asyncio
    async def test_download_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        with pytest.raises(httpx.HTTPStatusError):
            await make_client(handler).download_file("photos/missing.jpg")

    def test_custom_api_url(self):
        client = TelegramClient("t", api_url="http://localhost:8081/")
        assert client.file_url("voice/a.oga") == "http://localhost:8081/file/bott/voice/a.oga"


class TestUnexpectedBodies:

    @pytest.mark.parametrize("body", [None, [1, 2]])
    @pytest.mark.asyncio
    async def test_send_message_non_object_body(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(TelegramAPIError) as exc:
            await make_client(handler).send_message(1, "hi")

        assert "unexpected response body" in str(exc.value)

    @pytest.mark.parametrize("result", [None, ["photos/file_1.jpg"], "photos/file_1.jpg"])
    @pytest.mark.asyncio
    async def test_get_file_non_object_result(self, result):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "result": result})

        with pytest.raises(TelegramAPIError):
            await make_client(handler).get_file("abc")
