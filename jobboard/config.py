from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API
    api_base_url: str = "http://localhost:5002/api"
    request_timeout_seconds: float = 30.0

    # Session
    token_path: Path = Path.home() / ".jobboard" / "token"

    # Job search
    search_page_size: int = 10
    search_debounce_seconds: float = 0.5

    # Notifications
    notification_polling: bool = True
    notification_poll_seconds: int = 30

    # App
    environment: str = "development"
    log_level: str = "INFO"

    @model_validator(mode="after")
    def validate_api_base_url(self) -> "Settings":
        """Ensure bearer tokens only travel over HTTPS outside development."""
        if self.environment != "development" and not self.api_base_url.startswith("https://"):
            raise ValueError(
                f"API_BASE_URL must use https:// in {self.environment} environment "
                f"(got {self.api_base_url})"
            )
        if self.search_page_size < 1:
            raise ValueError("SEARCH_PAGE_SIZE must be at least 1")
        return self

    class Config:
        env_prefix = "JOBBOARD_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
