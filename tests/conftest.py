from __future__ import annotations

import logging
from typing import Any

import pytest

from alfie_assistant.application.orchestrator import DialogueOrchestrator, TurnContext
from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.config.settings import Settings, get_settings
from alfie_assistant.infra.jobs_memory import InMemoryJobQueue


class RecordingSink:
    """Sink de resposta que guarda (texto, quick_replies) de cada chamada."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Any] | None]] = []

    def __call__(self, text: str, quick_replies: list[Any] | None = None) -> None:
        self.calls.append((text, quick_replies))

    @property
    def last_text(self) -> str:
        return self.calls[-1][0]

    @property
    def last_labels(self) -> list[str]:
        return [qr.label for qr in self.calls[-1][1] or []]

    @property
    def last_choices(self) -> list[str | None]:
        return [qr.choice for qr in self.calls[-1][1] or []]


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """A factory instala o handler JSON no root; cada teste volta ao estado anterior."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        environment="development",
        session_store_backend="memory",
        jobs_backend="memory",
        question_budget=5,
        default_tone="brand_default",
        studio_base_url="https://studio.test",
        feature_flags={},
    )


@pytest.fixture()
def session() -> ConversationSession:
    return ConversationSession(session_id="sess-0001-abcd", brand_id="brand-1")


@pytest.fixture()
def queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()


@pytest.fixture()
def orchestrator(queue: InMemoryJobQueue, settings: Settings) -> DialogueOrchestrator:
    return DialogueOrchestrator(dispatcher=queue, asset_search=queue, settings=settings)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def run_turn(orchestrator: DialogueOrchestrator, session: ConversationSession, sink: RecordingSink):
    """Executa um turno sobre a sessão compartilhada do teste."""

    async def _run(text: str, choice: str | None = None) -> RecordingSink:
        context = TurnContext(session=session, reply=sink, brand_id="brand-1", choice=choice)
        await orchestrator.handle_turn(text, context)
        return sink

    return _run
