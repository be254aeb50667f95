# Logging adapter for library-wide logging
from sgai.adapters.logging_adapter import LoggingAdapter

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings

from sgai.core.config import DEFAULT_BASE_URL, health_root


# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class SgaiSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
    SGAI_API_KEY: SecretStr | None = None
    SGAI_API_URL: str = DEFAULT_BASE_URL
    # One budget for a single HTTP call and for a whole polling session
    SGAI_TIMEOUT_S: float = 120.0
    SGAI_POLL_INTERVAL_S: float = 3.0
    SGAI_DEBUG: bool = False
    SGAI_LOG_LEVEL: str = "WARNING"

    @field_validator("SGAI_API_URL", mode="before")
    def strip_trailing_slash(cls, value: str) -> str:
        """Ensure SGAI_API_URL has no trailing slash."""
        return str(value).rstrip("/")

    @computed_field
    @property
    def SGAI_HEALTH_URL(self) -> str:
        """Health endpoint root: the API URL without its version segment"""
        return health_root(self.SGAI_API_URL)


app_settings = SgaiSettings()

logger = LoggingAdapter("SGAI", app_settings.SGAI_LOG_LEVEL)
