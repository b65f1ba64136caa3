from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from src.core.env_manager import EnvManager


class Settings(BaseSettings):
    ASYNC_DATABASE_URL: str = EnvManager.get_env_variable(
        "ASYNC_DATABASE_URL", "sqlite+aiosqlite:///database.db"
    )

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "Blogify")
    PROJECT_INFO: str = EnvManager.get_env_variable(
        "PROJECT_INFO", "Blog posts with Markdown rendering and AI-assisted writing"
    )
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "1.0.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "UTC")
    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = EnvManager.get_env_variable("CORS_ORIGINS", "*")

    OPENROUTER_API_KEY: str = EnvManager.get_env_variable("OPENROUTER_API_KEY", "")
    OPENROUTER_BASE_URL: str = EnvManager.get_env_variable(
        "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
    )
    AI_MODEL: str = EnvManager.get_env_variable("AI_MODEL", "gpt-3.5-turbo")
    AI_TIMEOUT: float = float(EnvManager.get_env_variable("AI_TIMEOUT", "30"))

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def ai_configured(self) -> bool:
        return bool(self.OPENROUTER_API_KEY)


settings = Settings()
