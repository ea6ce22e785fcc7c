import asyncio

import chat_cli
from assistant import AnswerOrchestrator, GenerationParams
from retrieval import ProjectRecord
from retrieval.models import Responsible


class LoopRecordingProvider:
    """Provider that, like a pooled HTTP client, only works on the loop it first ran on."""

    model = "stub-model"

    def __init__(self, replies):
        self.replies = list(replies)
        self.loops: list[asyncio.AbstractEventLoop] = []

    async def generate(self, system_prompt: str, user_prompt: str, params: GenerationParams):
        loop = asyncio.get_running_loop()
        if self.loops and self.loops[0] is not loop:
            raise RuntimeError("Event loop is closed")
        self.loops.append(loop)
        return self.replies.pop(0)


def feed_input(monkeypatch, lines):
    inputs = iter(lines)
    monkeypatch.setattr("builtins.input", lambda _prompt: next(inputs))


def test_run_chat_prints_local_reply_and_kpis(monkeypatch, capsys):
    catalog = [ProjectRecord(name="Alpha", status="active", responsible=Responsible(name="Ana"), progress=40)]
    feed_input(monkeypatch, ["", "Alpha", "exit"])

    asyncio.run(chat_cli.run_chat(AnswerOrchestrator(catalog)))

    output = capsys.readouterr().out
    assert "local-fallback" in output
    assert 'AI: Según el contexto, el proyecto "Alpha" está "active".' in output
    assert "status: active | progress: 40 | docs: 0 | lastUpdate: N/D" in output
    assert "Goodbye." in output


def test_run_chat_keeps_one_loop_across_provider_turns(monkeypatch, capsys):
    catalog = [ProjectRecord(name="Alpha", status="active")]
    provider = LoopRecordingProvider(["Primera respuesta", "Segunda respuesta"])
    feed_input(monkeypatch, ["Alpha", "¿Y el responsable?", "quit"])

    asyncio.run(chat_cli.run_chat(AnswerOrchestrator(catalog, provider)))

    output = capsys.readouterr().out
    assert "AI: Primera respuesta" in output
    assert "AI: Segunda respuesta" in output
    assert "Error:" not in output
    assert len(provider.loops) == 2


def test_run_chat_reports_upstream_failure_and_continues(monkeypatch, capsys):
    class FailingOnceProvider(LoopRecordingProvider):
        async def generate(self, system_prompt, user_prompt, params):
            if not self.loops:
                self.loops.append(asyncio.get_running_loop())
                raise ConnectionError("network down")
            return await super().generate(system_prompt, user_prompt, params)

    provider = FailingOnceProvider(["Recuperado"])
    feed_input(monkeypatch, ["Alpha", "Alpha", "exit"])

    asyncio.run(chat_cli.run_chat(AnswerOrchestrator([ProjectRecord(name="Alpha")], provider)))

    output = capsys.readouterr().out
    assert "Error: stub-model request failed: network down" in output
    assert "AI: Recuperado" in output


def test_run_chat_exits_on_eof(monkeypatch, capsys):
    def raise_eof(_prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    asyncio.run(chat_cli.run_chat(AnswerOrchestrator([])))

    assert "Exiting chat." in capsys.readouterr().out
