from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    session_secret_key: str  # HMAC key for signing auth-token cookies
    environment: Literal["development", "production", "test"] = "development"
    session_leeway_seconds: int = 0  # Clock skew tolerance when checking token expiry
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "UIGEN_",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        """Secure cookies are only issued in production."""
        return self.environment == "production"
