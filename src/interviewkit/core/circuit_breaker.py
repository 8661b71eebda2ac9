"""Circuit breaker for provider fault isolation."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from interviewkit.core.errors import (
    CircuitOpenError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from interviewkit.models.breaker import BreakerConfig
from interviewkit.models.enums import CircuitState

logger = logging.getLogger("interviewkit.circuit_breaker")

T = TypeVar("T")


class CircuitBreaker:
    """Error-rate circuit breaker (closed → open → half-open → closed).

    * **Closed**: calls run, each bounded by the configured timeout.  The
      last *rolling_window_size* outcomes are kept; once at least
      *volume_threshold* of them are recorded and the failure percentage
      reaches *error_threshold_percentage*, the breaker opens.
    * **Open**: calls fail immediately with :class:`CircuitOpenError`.
    * **Half-open**: after *reset_timeout* seconds the next call is
      admitted as the single probe.  Success closes the breaker with an
      empty window; failure reopens it and restarts the cool-down.  Other
      callers are rejected while the probe is in flight.

    One instance guards one provider endpoint and is shared by every
    request.  All state reads and transitions happen under ``self._lock``,
    which is never held across the awaited call.

    The breaker never retries: a failed call is reported to its caller and
    only affects whether *later* calls are admitted.
    """

    def __init__(
        self,
        config: BreakerConfig | None = None,
        *,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._config = config or BreakerConfig()
        self._clock = clock
        self._lock = threading.Lock()

        self._state = CircuitState.CLOSED
        self._outcomes: deque[bool] = deque(maxlen=self._config.rolling_window_size)
        self._opened_at: float = 0.0

        logger.info(
            "CircuitBreaker '%s' initialized: timeout=%.1fs, error_threshold=%.0f%%, "
            "reset_timeout=%.1fs, window=%d, volume_threshold=%d",
            name,
            self._config.timeout,
            self._config.error_threshold_percentage,
            self._config.reset_timeout,
            self._config.rolling_window_size,
            self._config.volume_threshold,
        )

    # -- State queries --

    @property
    def config(self) -> BreakerConfig:
        return self._config

    @property
    def state(self) -> CircuitState:
        """Current state.  An expired cool-down still reads as ``OPEN``
        until a caller is admitted as the probe."""
        with self._lock:
            return self._state

    def stats(self) -> dict[str, Any]:
        """Snapshot of the breaker for diagnostics."""
        with self._lock:
            failures = self._outcomes.count(False)
            return {
                "name": self.name,
                "state": self._state.value,
                "window_size": len(self._outcomes),
                "failures": failures,
                "error_percentage": self._error_percentage(),
            }

    # -- Execution --

    async def execute(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        timeout: float | None = None,
    ) -> T:
        """Run *call* through the breaker.

        Raises:
            CircuitOpenError: The breaker is open, or another caller's probe
                is in flight.  *call* is not invoked.
            UpstreamTimeoutError: *call* ran longer than *timeout* (or the
                configured timeout).
            UpstreamTransportError: *call* raised; the exception is chained.
        """
        is_probe = self._admit()
        limit = timeout if timeout is not None else self._config.timeout
        try:
            async with asyncio.timeout(limit):
                result = await call()
        except TimeoutError as exc:
            self._record(success=False, is_probe=is_probe)
            raise UpstreamTimeoutError(
                f"Call through '{self.name}' timed out after {limit:.1f}s"
            ) from exc
        except asyncio.CancelledError:
            if is_probe:
                self._abandon_probe()
            raise
        except Exception as exc:
            self._record(success=False, is_probe=is_probe)
            raise UpstreamTransportError(
                f"Call through '{self.name}' failed: {type(exc).__name__}"
            ) from exc
        self._record(success=True, is_probe=is_probe)
        return result

    # -- Transitions --

    def _admit(self) -> bool:
        """Decide whether a call may run; return True if it is the probe."""
        with self._lock:
            if self._state is CircuitState.CLOSED:
                return False
            if self._state is CircuitState.OPEN:
                remaining = self._config.reset_timeout - (self._clock() - self._opened_at)
                if remaining <= 0:
                    self._state = CircuitState.HALF_OPEN
                    logger.info("CircuitBreaker '%s': OPEN -> HALF_OPEN (probing)", self.name)
                    return True
                remaining_seconds = remaining
            else:
                remaining_seconds = 0.0
            state = self._state
        logger.warning("CircuitBreaker '%s' is %s, rejecting call", self.name, state)
        raise CircuitOpenError(self.name, remaining_seconds)

    def _record(self, *, success: bool, is_probe: bool) -> None:
        with self._lock:
            if is_probe:
                if success:
                    self._state = CircuitState.CLOSED
                    self._outcomes.clear()
                    logger.info("CircuitBreaker '%s': HALF_OPEN -> CLOSED (recovered)", self.name)
                else:
                    self._trip()
                    logger.warning(
                        "CircuitBreaker '%s': HALF_OPEN -> OPEN (probe failed)", self.name
                    )
                return

            # A call admitted while closed may finish after the breaker opened.
            if self._state is not CircuitState.CLOSED:
                return

            self._outcomes.append(success)
            if success or len(self._outcomes) < self._config.volume_threshold:
                return
            error_percentage = self._error_percentage()
            if error_percentage >= self._config.error_threshold_percentage:
                self._trip()
                logger.warning(
                    "CircuitBreaker '%s': CLOSED -> OPEN (errors=%.0f%% over %d calls, "
                    "threshold=%.0f%%)",
                    self.name,
                    error_percentage,
                    len(self._outcomes),
                    self._config.error_threshold_percentage,
                )

    def _abandon_probe(self) -> None:
        """Return to OPEN without restarting the cool-down."""
        with self._lock:
            if self._state is CircuitState.HALF_OPEN:
                self._state = CircuitState.OPEN
                logger.info("CircuitBreaker '%s': probe cancelled, back to OPEN", self.name)

    def _trip(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()

    def _error_percentage(self) -> float:
        if not self._outcomes:
            return 0.0
        return self._outcomes.count(False) * 100 / len(self._outcomes)
