"""
Telegram Bot API client.

Thin wrapper around the handful of Bot API methods the bots need:
sendMessage, sendPhoto, getFile and file downloads.
"""

import httpx
from typing import Any, Optional

from telegram import InlineKeyboardMarkup

from botrelay.errors import TelegramAPIError


class TelegramClient:
    """
    Sends messages and fetches files for one bot token.

    A fresh httpx.AsyncClient is opened per call; pass `transport` to
    route requests somewhere other than the network (tests).
    """

    def __init__(
        self,
        bot_token: str,
        api_url: str = "https://api.telegram.org",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._bot_token = bot_token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _method_url(self, method: str) -> str:
        return f"{self._api_url}/bot{self._bot_token}/{method}"

    def file_url(self, file_path: str) -> str:
        """URL for downloading a file returned by getFile."""
        return f"{self._api_url}/file/bot{self._bot_token}/{file_path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    @staticmethod
    def _unwrap(method: str, response: httpx.Response) -> Any:
        try:
            data = response.json()
        except ValueError:
            response.raise_for_status()
            raise TelegramAPIError(method, "response is not JSON")

        if not isinstance(data, dict):
            raise TelegramAPIError(method, "unexpected response body")

        if not data.get("ok"):
            raise TelegramAPIError(
                method,
                data.get("description") or f"HTTP {response.status_code}",
                data.get("error_code"),
            )
        return data.get("result")

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: Optional[InlineKeyboardMarkup] = None,
        parse_mode: Optional[str] = None,
    ) -> dict:
        """
        Send message to Telegram chat.

        Args:
            chat_id: Telegram chat ID
            text: Message text
            reply_markup: Optional inline keyboard
            parse_mode: Optional parse mode (Markdown, HTML)

        Returns:
            The sent Message as a dict
        """
        payload: dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
        }

        if reply_markup is not None:
            payload["reply_markup"] = reply_markup.to_dict()

        if parse_mode:
            payload["parse_mode"] = parse_mode

        async with self._client() as client:
            response = await client.post(self._method_url("sendMessage"), json=payload)
            return self._unwrap("sendMessage", response)

    async def send_photo(
        self,
        chat_id: int,
        photo: bytes,
        caption: Optional[str] = None,
        filename: str = "image.png",
    ) -> dict:
        """
        Upload a photo as multipart/form-data.

        Args:
            chat_id: Telegram chat ID
            photo: Encoded image bytes (PNG or JPEG)
            caption: Optional caption shown under the photo
            filename: Name reported for the uploaded file
        """
        data = {"chat_id": str(chat_id)}
        if caption:
            data["caption"] = caption

        files = {"photo": (filename, photo, "image/png")}

        async with self._client() as client:
            response = await client.post(self._method_url("sendPhoto"), data=data, files=files)
            return self._unwrap("sendPhoto", response)

    async def get_file(self, file_id: str) -> str:
        """
        Resolve a file_id to its file_path on the Telegram file server.
        """
        async with self._client() as client:
            response = await client.get(self._method_url("getFile"), params={"file_id": file_id})
            result = self._unwrap("getFile", response)

        file_path = result.get("file_path") if isinstance(result, dict) else None
        if not file_path:
            raise TelegramAPIError("getFile", f"no file_path for file_id={file_id}")
        return file_path

    async def download_file(self, file_path: str) -> bytes:
        """Download raw file content."""
        async with self._client() as client:
            response = await client.get(self.file_url(file_path))
            response.raise_for_status()
            return response.content

    async def fetch_file_bytes(self, file_id: str) -> bytes:
        """getFile followed by the download."""
        file_path = await self.get_file(file_id)
        return await self.download_file(file_path)
