"""
Cloudflare Workers AI client.

Runs a named model via the REST endpoint
POST {base}/accounts/{account_id}/ai/run/{model}.

Structured inputs are sent as JSON, binary inputs (images, audio) as the
raw request body. Text-to-image models answer with image bytes instead of
the usual JSON envelope.
"""

import httpx
from typing import Any, Optional, Union

from botrelay.errors import InferenceError

ModelInput = Union[dict, bytes]


class WorkersAIClient:

    def __init__(
        self,
        account_id: str,
        api_token: str,
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._account_id = account_id
        self._api_token = api_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def model_url(self, model: str) -> str:
        return f"{self._base_url}/accounts/{self._account_id}/ai/run/{model}"

    async def run(self, model: str, inputs: ModelInput) -> Any:
        """
        Run a model and return its result.

        Args:
            model: Model identifier, e.g. "@cf/meta/llama-2-7b-chat-int8"
            inputs: JSON-serialisable dict, or raw bytes for image/audio models

        Returns:
            The envelope's `result` (usually a dict), or bytes for image output

        Raises:
            InferenceError: on HTTP errors or success=false envelopes
        """
        headers = {"Authorization": f"Bearer {self._api_token}"}
        request_kwargs: dict[str, Any] = {"headers": headers}
        if isinstance(inputs, (bytes, bytearray)):
            headers["Content-Type"] = "application/octet-stream"
            request_kwargs["content"] = bytes(inputs)
        else:
            request_kwargs["json"] = inputs

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.model_url(model), **request_kwargs)
            except httpx.HTTPError as e:
                raise InferenceError(model, f"request failed: {e}") from e

        content_type = response.headers.get("content-type", "")
        if response.is_success and content_type.startswith("image/"):
            return response.content

        try:
            envelope = response.json()
        except ValueError:
            raise InferenceError(model, f"HTTP {response.status_code}: unexpected {content_type or 'empty'} response")

        if not isinstance(envelope, dict):
            raise InferenceError(model, "unexpected response body")

        if not response.is_success or not envelope.get("success", False):
            raise InferenceError(model, _error_text(envelope, response.status_code))

        return envelope.get("result")


def _error_text(envelope: Any, status_code: int) -> str:
    """Pull the first error message out of a Cloudflare envelope."""
    if isinstance(envelope, dict):
        errors = envelope.get("errors") or []
        messages = [e.get("message", "") for e in errors if isinstance(e, dict)]
        messages = [m for m in messages if m]
        if messages:
            return "; ".join(messages)
    return f"HTTP {status_code}"
