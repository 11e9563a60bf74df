"""
Gateway configuration.

Loaded once at process start from the environment (and .env), then passed
to the clients and services that need it. Never mutated afterwards.
"""

import os
import sys
from typing import Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from infra.ota import DEFAULT_OTA_ENDPOINT


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class GatewayConfig(BaseModel):
    """Process-wide, immutable gateway settings."""

    model_config = ConfigDict(frozen=True)

    api_base_url: str = Field(..., description="Upstream hotel-data API base URL")
    ota_api_key: Optional[str] = Field(default=None, description="Bearer credential for the OTA")
    ota_endpoint: str = Field(default=DEFAULT_OTA_ENDPOINT, description="OTA inventory update URL")
    ota_sync_cron: str = Field(default="0 * * * *", description="Crontab for the periodic OTA sync")
    ota_sync_enabled: bool = Field(default=True, description="Run the periodic OTA sync")
    upstream_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    port: int = Field(default=3000, description="Listen port")
    log_level: str = Field(default="INFO", description="loguru level")


def load_config() -> GatewayConfig:
    """Build the config from environment variables.

    Raises:
        ValueError: if API_BASE_URL is not set
    """
    load_dotenv()

    api_base_url = os.getenv("API_BASE_URL")
    if not api_base_url:
        raise ValueError(
            "API_BASE_URL environment variable is required. "
            "Example: API_BASE_URL=http://localhost:4000/api"
        )

    return GatewayConfig(
        api_base_url=api_base_url,
        ota_api_key=os.getenv("OTA_API_KEY") or None,
        ota_endpoint=os.getenv("OTA_ENDPOINT", DEFAULT_OTA_ENDPOINT),
        ota_sync_cron=os.getenv("OTA_SYNC_CRON", "0 * * * *"),
        ota_sync_enabled=_env_bool("OTA_SYNC_ENABLED", "true"),
        upstream_timeout=float(os.getenv("UPSTREAM_TIMEOUT", "30")),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO"):
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level,
    )
