"""Exception hierarchy for interviewkit.

Every failure the core can produce is one of the classes below.  The HTTP
layer maps :class:`InvalidInputError` to 400 and every other
:class:`PipelineError` to 500.
"""

from __future__ import annotations


class InterviewKitError(Exception):
    """Base exception for all interviewkit errors."""


# -- Circuit breaker --


class BreakerError(InterviewKitError):
    """A call through the circuit breaker did not produce a value."""


class CircuitOpenError(BreakerError):
    """The breaker rejected the call without invoking it.

    Attributes:
        name: Name of the breaker that rejected the call.
        remaining_seconds: Cool-down left before a probe is admitted; ``0.0``
            while another caller's probe is in flight.
    """

    def __init__(self, name: str, remaining_seconds: float) -> None:
        self.name = name
        self.remaining_seconds = remaining_seconds
        super().__init__(
            f"Circuit breaker '{name}' is OPEN. Retry in {remaining_seconds:.1f}s"
        )


class UpstreamTimeoutError(BreakerError):
    """The call exceeded the breaker timeout."""


class UpstreamTransportError(BreakerError):
    """The call raised; the original exception is chained as ``__cause__``."""


# -- Response normalization --


class NormalizeError(InterviewKitError):
    """Provider text could not be turned into a structured result.

    Messages never include the provider text itself.
    """


class NotParsableError(NormalizeError):
    """Provider text is not valid JSON."""


class WrongShapeError(NormalizeError):
    """Provider JSON does not have the shape expected for the task."""


# -- Invocation pipeline --


class PipelineError(InterviewKitError):
    """Base for failures surfaced by the invocation pipeline."""


class InvalidInputError(PipelineError):
    """The caller's request is missing required fields."""


class UpstreamUnavailableError(PipelineError):
    """The provider could not be reached, timed out, or the breaker is open."""


class EmptyUpstreamResponseError(PipelineError):
    """The provider answered without any candidate text."""


class MalformedUpstreamResponseError(PipelineError):
    """The provider text failed parsing or shape validation."""


# -- Provider --


class ProviderError(InterviewKitError):
    """Error from a generative provider HTTP call.

    Attributes:
        retryable: Whether the caller could reasonably retry the request.
        provider: Name of the provider that raised the error.
        status_code: HTTP status code from the provider, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.provider = provider
        self.status_code = status_code
