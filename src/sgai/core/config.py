"""Configuration models for core engine components.

The transport, poller and orchestrator never read environment variables
themselves; they receive a `ClientConfig` at construction so tests can
substitute values without touching process-wide state.
"""

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.scrapegraphai.com/v1"


def health_root(base_url: str) -> str:
    """Health endpoint root: the API URL without its trailing version segment."""
    return re.sub(r"/v\d+$", "", base_url.rstrip("/"))


class ClientConfig(BaseModel):
    """Configuration injected into the transport and the job lifecycle engine.

    Attributes:
        base_url: Versioned API root every endpoint path is appended to
        health_url: Root of the health endpoint (not under the versioned base);
            derived from `base_url` when not given
        timeout_s: Budget for one HTTP call, and separately for one polling session
        poll_interval_s: Sleep between two status polls
        debug: Emit request/response trace events
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Versioned API base URL",
    )

    health_url: str = Field(
        default=health_root(DEFAULT_BASE_URL),
        description="Root URL of the health endpoint",
    )

    timeout_s: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds per HTTP request and per polling session",
    )

    poll_interval_s: float = Field(
        default=3.0,
        gt=0,
        description="Interval in seconds between job status polling requests",
    )

    debug: bool = Field(
        default=False,
        description="Trace requests, responses and timings to the debug channel",
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @field_validator("base_url", "health_url")
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def derive_health_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("health_url"):
            base_url = data.get("base_url") or DEFAULT_BASE_URL
            data = {**data, "health_url": health_root(str(base_url))}
        return data

    @classmethod
    def from_app_settings(cls, settings) -> "ClientConfig":
        """Factory method to construct config from an SgaiSettings instance.

        Args:
            settings: SgaiSettings instance from core.settings

        Returns:
            ClientConfig with values from app settings
        """
        return cls(
            base_url=settings.SGAI_API_URL,
            health_url=settings.SGAI_HEALTH_URL,
            timeout_s=settings.SGAI_TIMEOUT_S,
            poll_interval_s=settings.SGAI_POLL_INTERVAL_S,
            debug=settings.SGAI_DEBUG,
        )
