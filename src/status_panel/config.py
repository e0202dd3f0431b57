"""Environment-based configuration for the status panel."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Status panel configuration.

    All settings can be overridden via environment variables with
    STATUS_PANEL_ prefix. For example:
        STATUS_PANEL_TICK_INTERVAL_MS=50
        STATUS_PANEL_PRIMARY_COLOR=cyan
    """

    # Progress timer
    tick_interval_ms: int = Field(default=100, gt=0)
    tick_step: float = Field(default=0.01, gt=0.0, le=1.0)

    # Gauge colors (any rich color name)
    primary_color: str = "green"
    alternate_color: str = "magenta"

    # Shutdown
    join_timeout: float = Field(default=1.0, ge=0.0)
    key_poll_interval: float = Field(default=0.1, gt=0.0)

    # Logging; the screen is taken over by the UI, so logs only go to a file
    log_file: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = {"env_prefix": "STATUS_PANEL_"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_interval_ms / 1000.0
