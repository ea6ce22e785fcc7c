"""Chat answering over the project catalog."""

from .errors import AssistantError, InvalidInput, UpstreamFailure
from .orchestrator import (
    LOCAL_MODEL_NAME,
    NO_LOCAL_DATA_REPLY,
    SYSTEM_PROMPT,
    AnswerOrchestrator,
    ChatAnswer,
)
from .providers import (
    AzureOpenAIProvider,
    GenerationParams,
    GenerationProvider,
    OpenAIProvider,
    build_provider_from_env,
)
from .settings import Settings, configure_logging

__all__ = [
    "AssistantError",
    "InvalidInput",
    "UpstreamFailure",
    "AnswerOrchestrator",
    "ChatAnswer",
    "LOCAL_MODEL_NAME",
    "NO_LOCAL_DATA_REPLY",
    "SYSTEM_PROMPT",
    "GenerationParams",
    "GenerationProvider",
    "OpenAIProvider",
    "AzureOpenAIProvider",
    "build_provider_from_env",
    "Settings",
    "configure_logging",
]
