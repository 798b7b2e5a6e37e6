"""
Application configuration
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Repository Lookup Relay"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Upstream (GitHub REST API)
    UPSTREAM_BASE_URL: str = "https://api.github.com"
    UPSTREAM_USER_AGENT: str = "my-github-api-client"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # Diagnostics
    DIAGNOSTICS_STRICT: bool = False
    DIAGNOSTICS_REDACT_HEADERS: List[str] = [
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
    ]
    DISCONNECT_POLL_INTERVAL: float = 0.5

    # Logging
    LOG_FORMAT: str = "text"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
