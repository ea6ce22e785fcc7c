"""Generation providers backing the chat answers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from openai import AsyncAzureOpenAI, AsyncOpenAI

from .settings import DEFAULT_MODEL, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationParams:
    max_tokens: int = 300
    temperature: float = 0.2


class GenerationProvider(Protocol):
    """Protocol for remote text generation: instructions and context in, text out."""

    model: str

    async def generate(self, system_prompt: str, user_prompt: str, params: GenerationParams) -> str | None:
        ...


def _chat_messages(system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


class _ChatCompletionsProvider(GenerationProvider):
    """One Chat Completions call per request against an OpenAI-compatible client."""

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self.model = model

    async def generate(self, system_prompt: str, user_prompt: str, params: GenerationParams) -> str | None:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=_chat_messages(system_prompt, user_prompt),
            temperature=params.temperature,
            max_tokens=params.max_tokens,
        )
        return response.choices[0].message.content


class OpenAIProvider(_ChatCompletionsProvider):
    """Provider powered by OpenAI Chat Completions."""

    def __init__(self, client: AsyncOpenAI, model: str | None = None) -> None:
        super().__init__(client, model or DEFAULT_MODEL)


class AzureOpenAIProvider(_ChatCompletionsProvider):
    """Provider backed by an Azure OpenAI deployment; the deployment name is the model."""

    def __init__(self, client: AsyncAzureOpenAI, deployment: str) -> None:
        super().__init__(client, deployment)


def build_provider_from_env(settings: Settings | None = None) -> GenerationProvider | None:
    """Instantiate the configured provider, or ``None`` when no credential is set.

    ``None`` selects the local templated answers; it is a supported mode,
    not an error. Clients are built with retries disabled so a failed call
    surfaces immediately.
    """
    settings = settings or Settings.from_env()
    provider = settings.llm_provider

    if provider == "openai":
        if not settings.openai_api_key:
            return None
        client = AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.chat_timeout, max_retries=0)
        return OpenAIProvider(client, model=settings.openai_model)
    if provider == "azure_openai":
        if not all([settings.azure_api_key, settings.azure_endpoint, settings.azure_deployment]):
            return None
        client = AsyncAzureOpenAI(
            api_key=settings.azure_api_key,
            azure_endpoint=settings.azure_endpoint,
            api_version=settings.azure_api_version,
            timeout=settings.chat_timeout,
            max_retries=0,
        )
        return AzureOpenAIProvider(client, deployment=settings.azure_deployment)

    raise ValueError("Unsupported LLM_PROVIDER. Expected one of: openai, azure_openai.")


__all__ = [
    "GenerationParams",
    "GenerationProvider",
    "OpenAIProvider",
    "AzureOpenAIProvider",
    "build_provider_from_env",
]
