from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Telegram
    telegram_bot_token: str
    logo_bot_token: str = ""  # Optional: separate bot for the logo webhook
    telegram_api_url: str = "https://api.telegram.org"
    telegram_webhook_secret: str = ""  # Optional: for webhook verification

    # Cloudflare Workers AI
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    workers_ai_base_url: str = "https://api.cloudflare.com/client/v4"

    # Outbound HTTP
    http_timeout_seconds: float = 60.0

    # Logo rendering
    logo_font_path: str = "DejaVuSans-Bold.ttf"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def effective_logo_bot_token(self) -> str:
        return self.logo_bot_token or self.telegram_bot_token


@lru_cache()
def get_settings() -> Settings:
    return Settings()
