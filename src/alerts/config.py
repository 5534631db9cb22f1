"""Runtime settings for the Alerts domain.

Protean infrastructure (databases, brokers, event store) is configured in
``domain.toml``. The knobs below govern delivery behaviour and are read from
``ALERTS_``-prefixed environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AlertSettings(BaseSettings):
    """Delivery, sweep and logging settings."""

    # Upper bound for handling one order write event, multicast included
    dispatch_timeout_seconds: float = Field(default=60.0, gt=0)

    # FCM accepts at most 500 tokens per multicast request
    multicast_batch_size: int = Field(default=500, ge=1, le=500)

    # Liveness sweep
    sweep_schedule: str = "every day 02:00"
    sweep_timezone: str = "UTC"
    sweep_deadline_seconds: float = Field(default=540.0, gt=0)
    probe_timeout_seconds: float = Field(default=10.0, gt=0)
    probe_concurrency: int = Field(default=8, ge=1)
    probe_payload_key: str = "check"
    probe_payload_value: str = "valid"

    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(env_prefix="ALERTS_", extra="ignore")

    @property
    def probe_payload(self) -> dict[str, str]:
        return {self.probe_payload_key: self.probe_payload_value}


@lru_cache(maxsize=1)
def get_settings() -> AlertSettings:
    """Return the process-wide settings object."""
    return AlertSettings()


def reset_settings() -> None:
    """Drop the cached settings so the environment is re-read (useful for testing)."""
    get_settings.cache_clear()
