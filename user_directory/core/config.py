# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration: all env-driven.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "user-directory")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8000"))

    # Hosted collection the forwarding layer relays to
    REMOTE_COLLECTION_URL: str = os.getenv(
        "REMOTE_COLLECTION_URL",
        "https://695ba32b1d8041d5eeb7b9fe.mockapi.io/api/v1/users",
    ).rstrip("/")
    # Collection the client library talks to (remote store or the forwarding layer)
    DIRECTORY_API_URL: str = os.getenv("DIRECTORY_API_URL", REMOTE_COLLECTION_URL).rstrip("/")
    REMOTE_TIMEOUT: float = float(os.getenv("REMOTE_TIMEOUT", "10.0"))

    VALIDATION_DEBOUNCE_SECONDS: float = float(os.getenv("VALIDATION_DEBOUNCE_SECONDS", "0.5"))
    NOTIFICATION_TTL_SECONDS: float = float(os.getenv("NOTIFICATION_TTL_SECONDS", "3.0"))
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "5"))
    DEFAULT_AVATAR_URL: str = os.getenv(
        "DEFAULT_AVATAR_URL",
        "https://cloudflare-ipfs.com/ipfs/Qmd3W5DuhgHirLHGVixi6V76LhCkZUz6pnFt5AJBiyvHye/avatar/1.jpg",
    )

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
