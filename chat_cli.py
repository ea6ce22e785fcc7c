#!/usr/bin/env python3
"""Chat with the catalog assistant from the terminal."""

from __future__ import annotations

import argparse
import asyncio

from assistant import (
    AnswerOrchestrator,
    ChatAnswer,
    Settings,
    UpstreamFailure,
    build_provider_from_env,
    configure_logging,
)
from retrieval import load_catalog


def _format_kpis(answer: ChatAnswer) -> str | None:
    if answer.kpis is None:
        return None
    kpis = answer.kpis.to_payload()
    return " | ".join(f"{key}: {value if value is not None else 'N/D'}" for key, value in kpis.items())


async def run_chat(orchestrator: AnswerOrchestrator) -> None:
    """Run every turn on one event loop so the provider client keeps a single connection pool."""
    history: list[dict[str, str]] = []

    print(f"Chat with the project catalog ({orchestrator.used_model}). Type 'exit' or 'quit' to leave.\n")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "You: ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting chat.")
            break

        if not user_input:
            continue
        if user_input.lower() in {"exit", "quit"}:
            print("Goodbye.")
            break

        try:
            answer = await orchestrator.answer(user_input, history)
        except UpstreamFailure as exc:
            print(f"Error: {exc}")
            continue
        history.append({"role": "user", "content": user_input})
        history.append({"role": "assistant", "content": answer.reply})

        print(f"AI: {answer.reply}")
        kpi_line = _format_kpis(answer)
        if kpi_line:
            print(f"    [{kpi_line}]")


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask questions about the project catalog.")
    parser.add_argument(
        "--catalog",
        default=None,
        help="Path to the projects JSON file (default: PROJECTS_PATH or data/projects.json).",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Answer with local templates even if a generation credential is configured.",
    )
    args = parser.parse_args()

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    catalog = load_catalog(args.catalog or settings.projects_path)
    provider = None if args.local else build_provider_from_env(settings)

    try:
        asyncio.run(run_chat(AnswerOrchestrator(catalog, provider, timeout=settings.chat_timeout)))
    except KeyboardInterrupt:
        print("\nExiting chat.")


if __name__ == "__main__":
    main()
