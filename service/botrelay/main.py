import json
from typing import Optional

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from botrelay import __version__
from botrelay.config import Settings, get_settings
from botrelay.services.inference import WorkersAIClient
from botrelay.telegram_bot.logging_config import setup_logging
from botrelay.telegram_bot.logo_bot import LogoBot
from botrelay.telegram_bot.router import CommandRouter
from botrelay.telegram_bot.telegram_api import TelegramClient
from botrelay.telegram_bot.updates import InvalidUpdateError, parse_update, to_inbound


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str


def build_router(settings: Settings) -> CommandRouter:
    telegram = TelegramClient(
        settings.telegram_bot_token,
        api_url=settings.telegram_api_url,
        timeout=settings.http_timeout_seconds,
    )
    inference = WorkersAIClient(
        settings.cloudflare_account_id,
        settings.cloudflare_api_token,
        base_url=settings.workers_ai_base_url,
        timeout=settings.http_timeout_seconds,
    )
    return CommandRouter(telegram, inference)


def build_logo_bot(settings: Settings) -> LogoBot:
    telegram = TelegramClient(
        settings.effective_logo_bot_token,
        api_url=settings.telegram_api_url,
        timeout=settings.http_timeout_seconds,
    )
    return LogoBot(telegram, font_path=settings.logo_font_path)


async def _read_json(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON body")


def create_app(
    settings: Optional[Settings] = None,
    router: Optional[CommandRouter] = None,
    logo_bot: Optional[LogoBot] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Run with: uvicorn botrelay.main:create_app --factory
    """
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level)
    router = router or build_router(settings)
    logo_bot = logo_bot or build_logo_bot(settings)

    app = FastAPI(
        title="botrelay",
        description="Telegram webhooks for Workers AI commands and letter logos",
        version=__version__,
    )

    def verify_secret(token: Optional[str]) -> None:
        # Verify secret token if configured
        if settings.telegram_webhook_secret and token != settings.telegram_webhook_secret:
            raise HTTPException(status_code=403, detail="Invalid secret token")

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            environment=settings.environment,
            version=__version__,
        )

    @app.get("/ai/webhook", response_class=PlainTextResponse)
    async def ai_webhook_ack():
        return "OK"

    @app.post("/ai/webhook", response_class=PlainTextResponse)
    async def ai_webhook(
        request: Request,
        x_telegram_bot_api_secret_token: str = Header(None),
    ):
        """
        Webhook endpoint for the AI router bot.

        Dispatch runs inside the request; the 200 goes out after the reply
        has been sent.
        """
        verify_secret(x_telegram_bot_api_secret_token)
        update_data = await _read_json(request)

        try:
            update = parse_update(update_data)
        except InvalidUpdateError as e:
            logger.warning(f"Rejected update: {e}")
            raise HTTPException(status_code=400, detail="Malformed update")

        inbound = to_inbound(update) if update else None
        if inbound is None:
            return "OK"

        await router.handle_update(inbound)
        return "OK"

    @app.get("/logo/webhook", response_class=PlainTextResponse)
    async def logo_webhook_ack():
        return PlainTextResponse("Send a POST request to this endpoint.", status_code=405)

    @app.post("/logo/webhook", response_class=PlainTextResponse)
    async def logo_webhook(
        request: Request,
        x_telegram_bot_api_secret_token: str = Header(None),
    ):
        """Webhook endpoint for the logo bot."""
        verify_secret(x_telegram_bot_api_secret_token)
        update_data = await _read_json(request)

        try:
            update = parse_update(update_data)
        except InvalidUpdateError as e:
            logger.warning(f"Rejected update: {e}")
            raise HTTPException(status_code=400, detail="Malformed update")

        message = update.message if update else None
        if message is None or not message.text:
            return PlainTextResponse("No message text found.", status_code=400)

        await logo_bot.handle_text(message.chat.id, message.text)
        return "OK"

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
