"""interviewkit - resilient relay between interview clients and a generative provider."""

from interviewkit._version import __version__
from interviewkit.core.circuit_breaker import CircuitBreaker
from interviewkit.core.errors import (
    BreakerError,
    CircuitOpenError,
    EmptyUpstreamResponseError,
    InterviewKitError,
    InvalidInputError,
    MalformedUpstreamResponseError,
    NormalizeError,
    NotParsableError,
    PipelineError,
    ProviderError,
    UpstreamTimeoutError,
    UpstreamTransportError,
    UpstreamUnavailableError,
    WrongShapeError,
)
from interviewkit.core.normalizer import normalize, strip_fence
from interviewkit.core.pipeline import InvocationPipeline, parse_task_input
from interviewkit.core.scoring import normalize_score
from interviewkit.models import (
    AnswerRecord,
    BreakerConfig,
    CircuitState,
    Difficulty,
    GenerateQuestionsInput,
    Question,
    QuestionRef,
    QuestionSet,
    ScoreAnswerInput,
    ScoreResult,
    SummarizeInput,
    SummaryResult,
    TaskKind,
)
from interviewkit.providers import GenerativeProvider, MockGenerativeProvider
from interviewkit.providers.gemini import GeminiClient, GeminiConfig

__all__ = [
    "AnswerRecord",
    "BreakerConfig",
    "BreakerError",
    "CircuitBreaker",
    "CircuitOpenError",
    "CircuitState",
    "Difficulty",
    "EmptyUpstreamResponseError",
    "GeminiClient",
    "GeminiConfig",
    "GenerateQuestionsInput",
    "GenerativeProvider",
    "InterviewKitError",
    "InvalidInputError",
    "InvocationPipeline",
    "MalformedUpstreamResponseError",
    "MockGenerativeProvider",
    "NormalizeError",
    "NotParsableError",
    "PipelineError",
    "ProviderError",
    "Question",
    "QuestionRef",
    "QuestionSet",
    "ScoreAnswerInput",
    "ScoreResult",
    "SummarizeInput",
    "SummaryResult",
    "TaskKind",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
    "UpstreamUnavailableError",
    "WrongShapeError",
    "__version__",
    "normalize",
    "normalize_score",
    "parse_task_input",
    "strip_fence",
]
