"""
FastAPI application exposing the project catalog and the chat endpoint.

Routes:
- GET /health: liveness probe
- GET /api/projects: the catalog exactly as loaded
- POST /api/chat: answer a message from the catalog, locally or via the configured provider
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from assistant import (
    AnswerOrchestrator,
    AssistantError,
    GenerationProvider,
    InvalidInput,
    Settings,
    build_provider_from_env,
    configure_logging,
)
from retrieval import Catalog, load_catalog

logger = logging.getLogger(__name__)

INVALID_MESSAGE_ERROR = "Mensaje inválido"
CHAT_FAILURE_ERROR = "Fallo interno de chat"
BODY_TOO_LARGE_ERROR = "Cuerpo de la solicitud demasiado grande"
MAX_BODY_BYTES = 1024 * 1024

_FROM_ENV: Any = object()


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, strict=True)
    history: Any = None


def parse_chat_request(body: bytes) -> ChatRequest:
    try:
        return ChatRequest.model_validate_json(body or b"{}")
    except ValidationError as exc:
        raise InvalidInput(f"invalid chat request: {exc.error_count()} error(s)") from exc


def create_app(
    settings: Settings | None = None,
    catalog: Catalog | None = None,
    provider: GenerationProvider | None = _FROM_ENV,
) -> FastAPI:
    """Build the application. Explicit arguments take precedence over the environment."""
    settings = settings or Settings.from_env()
    catalog = catalog if catalog is not None else load_catalog(settings.projects_path)
    if provider is _FROM_ENV:
        provider = build_provider_from_env(settings)
    orchestrator = AnswerOrchestrator(catalog, provider, timeout=settings.chat_timeout)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        configure_logging(settings.log_level)
        if provider is None:
            logger.info("No generation credential configured, answering with %s", orchestrator.used_model)
        else:
            logger.info("Answering with %s", orchestrator.used_model)
        logger.info("Catalog assistant listening on http://%s:%d", settings.host, settings.port)
        yield

    app = FastAPI(title="Catalog Assistant", version="0.1.0", lifespan=lifespan)
    app.state.catalog = catalog
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(_: Request, exc: InvalidInput) -> JSONResponse:
        logger.debug("Rejected chat request: %s", exc)
        return JSONResponse(status_code=400, content={"error": INVALID_MESSAGE_ERROR})

    @app.exception_handler(AssistantError)
    async def assistant_error_handler(_: Request, exc: AssistantError) -> JSONResponse:
        logger.error("Chat request failed: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": CHAT_FAILURE_ERROR})

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/projects")
    async def list_projects() -> dict[str, Any]:
        return {"projects": catalog.as_payload()}

    @app.post("/api/chat")
    async def chat(request: Request) -> JSONResponse:
        declared_length = request.headers.get("content-length")
        if declared_length and declared_length.isdigit() and int(declared_length) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE_ERROR})
        body = await request.body()
        if len(body) > MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE_ERROR})

        chat_request = parse_chat_request(body)
        try:
            answer = await orchestrator.answer(chat_request.message, chat_request.history)
        except AssistantError:
            raise
        except Exception:
            logger.exception("Unexpected failure while answering chat request")
            return JSONResponse(status_code=500, content={"error": CHAT_FAILURE_ERROR})
        return JSONResponse(status_code=200, content=answer.to_payload())

    return app


def main() -> None:
    """Run the HTTP server with uvicorn."""
    settings = Settings.from_env()
    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
