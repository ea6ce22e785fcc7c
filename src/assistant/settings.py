"""Environment-driven configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_AZURE_API_VERSION = "2024-05-01-preview"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    llm_provider: str = "openai"
    openai_api_key: str | None = None
    openai_model: str = DEFAULT_MODEL
    azure_api_key: str | None = None
    azure_endpoint: str | None = None
    azure_deployment: str | None = None
    azure_api_version: str = DEFAULT_AZURE_API_VERSION
    projects_path: str = os.path.join("data", "projects.json")
    chat_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))

    @classmethod
    def from_env(cls) -> "Settings":
        origins = tuple(
            origin.strip() for origin in (os.getenv("CORS_ORIGINS") or "*").split(",") if origin.strip()
        )
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", DEFAULT_PORT),
            llm_provider=(os.getenv("LLM_PROVIDER") or "openai").lower(),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
            azure_api_key=os.getenv("AZURE_OPENAI_API_KEY") or None,
            azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT") or None,
            azure_deployment=os.getenv("AZURE_OPENAI_DEPLOYMENT") or None,
            azure_api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_AZURE_API_VERSION),
            projects_path=os.getenv("PROJECTS_PATH") or os.path.join("data", "projects.json"),
            chat_timeout=_float_env("CHAT_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            cors_origins=origins or ("*",),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["Settings", "configure_logging", "DEFAULT_MODEL", "DEFAULT_PORT", "DEFAULT_TIMEOUT_SECONDS"]
