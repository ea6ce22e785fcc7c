"""HTTP transport for the catalog assistant."""

from .app import ChatRequest, create_app, main

__all__ = ["ChatRequest", "create_app", "main"]
