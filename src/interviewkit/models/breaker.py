"""Circuit breaker configuration."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BreakerConfig(BaseModel):
    """Tuning for a single :class:`~interviewkit.core.circuit_breaker.CircuitBreaker`.

    All durations are in seconds.  The config is frozen: it is set once at
    startup and shared by every call through the breaker.

    Attributes:
        timeout: Upper bound for one call; an overrun counts as a failure.
        error_threshold_percentage: Failure rate over the rolling window at
            or above which the breaker opens.
        reset_timeout: Cool-down spent open before a probe is admitted.
        rolling_window_size: Number of most recent outcomes considered.
        volume_threshold: Minimum outcomes in the window before the failure
            rate may open the breaker.
    """

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=500.0, gt=0.0)
    error_threshold_percentage: float = Field(default=50.0, gt=0.0, le=100.0)
    reset_timeout: float = Field(default=30.0, ge=0.0)
    rolling_window_size: int = Field(default=20, ge=1)
    volume_threshold: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def _check_volume_fits_window(self) -> Self:
        if self.volume_threshold > self.rolling_window_size:
            raise ValueError("volume_threshold must not exceed rolling_window_size")
        return self
