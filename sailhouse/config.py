"""
Configuration settings for the Sailhouse SDK.

The client itself never reads the environment. Applications (and the
``sailhouse`` CLI) that want environment-driven configuration load these
settings and hand them to ``SailhouseClient.from_settings``.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.sailhouse.dev"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """
    Sailhouse client configuration loaded from ``SAILHOUSE_*`` environment
    variables or a ``.env`` file.
    """
    model_config = SettingsConfigDict(
        env_prefix="SAILHOUSE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Credential, sent verbatim in the Authorization header
    token: Optional[str] = None

    # API settings
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT  # seconds
