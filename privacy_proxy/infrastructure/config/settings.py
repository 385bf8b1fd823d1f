from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Core app settings
    app_name: str = Field(default="Privacy Proxy")
    environment: str = Field(default="local", alias="PRIVACY_PROXY_ENVIRONMENT")  # local, dev, prod

    # Proxy configuration file; the CLI argument takes precedence
    config_path: Optional[str] = Field(default=None, alias="PRIVACY_PROXY_CONFIG")

    # Listener and upstream
    listen_host: str = Field(default="0.0.0.0", alias="PRIVACY_PROXY_LISTEN_HOST")
    upstream_timeout_seconds: float = Field(default=30.0, alias="PRIVACY_PROXY_UPSTREAM_TIMEOUT")

    # Event logging
    log_level: str = Field(default="INFO", alias="PRIVACY_PROXY_LOG_LEVEL")

    class Config:
        # # Use env variables only, no .env by default (load_dotenv runs at startup)
        env_file = None
        case_sensitive = True
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    # # Cached settings instance for reuse
    return Settings()  # type: ignore[call-arg]
