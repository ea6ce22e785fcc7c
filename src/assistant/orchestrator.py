"""Answer orchestration: rank the catalog, build context, reply locally or via a provider."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from retrieval import Kpis, ProjectRecord, build_context, build_kpis, field_or, rank

from .errors import InvalidInput, UpstreamFailure
from .providers import GenerationParams, GenerationProvider
from .settings import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

CONTEXT_TOP_K = 4
LOCAL_MODEL_NAME = "local-fallback"
NO_LOCAL_DATA_REPLY = "No hay datos locales para responder."
EMPTY_GENERATION_REPLY = "No pude generar una respuesta."
EMPTY_CONTEXT_PLACEHOLDER = "—"

SYSTEM_PROMPT = (
    "Eres un asistente de COTRAFA SOCIAL. Responde en español, de forma concisa y útil. "
    "Si la pregunta no está clara, pide aclaración breve. "
    "Usa el siguiente contexto de proyectos solo si es relevante. "
    "Nunca inventes datos fuera del contexto y si no aparece, dilo. "
    "Si procede, incluye un mini resumen con Estado, Responsable y Última actualización."
)


@dataclass(frozen=True)
class ChatAnswer:
    reply: str
    kpis: Kpis | None
    used_model: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "reply": self.reply,
            "kpis": self.kpis.to_payload() if self.kpis else None,
            "usedModel": self.used_model,
        }


def build_user_prompt(query: str, context: str) -> str:
    return f"Pregunta: {query}\n\nContexto de proyectos:\n{context or EMPTY_CONTEXT_PLACEHOLDER}"


def local_reply(top: ProjectRecord | None) -> str:
    """Deterministic answer built from the best match when no provider is configured."""
    if top is None:
        return NO_LOCAL_DATA_REPLY
    return (
        f'Según el contexto, el proyecto "{top.name}" está "{top.status}". '
        f"Responsable: {field_or(top.responsible_name())}. "
        f"Última actualización: {field_or(top.last_update)}."
    )


class AnswerOrchestrator:
    """Produces chat answers over a read-only catalog.

    With no provider every answer comes from ``local_reply``. With a provider
    each answer costs exactly one outbound call; failures and timeouts raise
    ``UpstreamFailure`` and never fall back to the local reply.
    """

    def __init__(
        self,
        catalog: Sequence[ProjectRecord],
        provider: GenerationProvider | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        params: GenerationParams | None = None,
    ) -> None:
        self._catalog = catalog
        self._provider = provider
        self._timeout = timeout
        self._params = params or GenerationParams()

    @property
    def used_model(self) -> str:
        return self._provider.model if self._provider else LOCAL_MODEL_NAME

    async def answer(
        self,
        query: Any,
        history: Any = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ChatAnswer:
        """
        Answer a single chat message.

        Args:
            query: The user's message. Must be a non-empty string.
            history: Earlier turns supplied by the caller. Accepted but not consulted.
            cancel_event: When set before the provider responds, the outbound call is
                abandoned and ``asyncio.CancelledError`` propagates.
        """
        if not isinstance(query, str) or not query:
            raise InvalidInput("message must be a non-empty string")

        matches = rank(query, self._catalog, CONTEXT_TOP_K)
        top = matches[0] if matches else None
        kpis = build_kpis(top)

        if self._provider is None:
            logger.debug("Answering locally from %d matches", len(matches))
            return ChatAnswer(reply=local_reply(top), kpis=kpis, used_model=LOCAL_MODEL_NAME)

        user_prompt = build_user_prompt(query, build_context(matches))
        logger.debug("Calling %s with %d matches in context", self._provider.model, len(matches))
        text = await self._generate(self._provider, user_prompt, cancel_event)
        reply = (text or "").strip() or EMPTY_GENERATION_REPLY
        return ChatAnswer(reply=reply, kpis=kpis, used_model=self._provider.model)

    async def _generate(
        self,
        provider: GenerationProvider,
        user_prompt: str,
        cancel_event: asyncio.Event | None,
    ) -> str | None:
        generation = asyncio.ensure_future(provider.generate(SYSTEM_PROMPT, user_prompt, self._params))
        waiters: set[asyncio.Future] = {generation}
        cancelled: asyncio.Future | None = None
        if cancel_event is not None:
            cancelled = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancelled)

        try:
            done, _ = await asyncio.wait(waiters, timeout=self._timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                if not waiter.done():
                    waiter.cancel()

        if cancelled is not None and cancelled in done:
            logger.info("Chat request cancelled before %s responded", provider.model)
            raise asyncio.CancelledError()
        if generation not in done:
            raise UpstreamFailure(f"{provider.model} did not respond within {self._timeout}s")
        try:
            return generation.result()
        except Exception as exc:
            raise UpstreamFailure(f"{provider.model} request failed: {exc}") from exc


__all__ = [
    "AnswerOrchestrator",
    "ChatAnswer",
    "CONTEXT_TOP_K",
    "LOCAL_MODEL_NAME",
    "NO_LOCAL_DATA_REPLY",
    "EMPTY_GENERATION_REPLY",
    "SYSTEM_PROMPT",
    "build_user_prompt",
    "local_reply",
]
