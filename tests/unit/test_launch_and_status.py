"""Testes de envio do brief e da consulta de status."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from alfie_assistant.application.launch import launch_brief
from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.application.status import answer_status, job_link
from alfie_assistant.domain.brief import Brief, BriefDraft
from alfie_assistant.domain.enums import CreationKind, Intent, Objective, Slot, Stage, VisualStyle
from alfie_assistant.domain.jobs import Asset, JobOrder
from alfie_assistant.infra.jobs_contract import AssetSearchError


def _brief() -> Brief:
    return Brief(
        kind=CreationKind.IMAGE,
        objective=Objective.AWARENESS,
        format="4:5",
        style=VisualStyle.VIBRANT,
        prompt="Un visuel de marque",
        brand_id="brand-1",
    )


def _confirm_session() -> ConversationSession:
    brief = _brief()
    return ConversationSession(
        session_id="s-launch-0001",
        brand_id="brand-1",
        stage=Stage.CONFIRM.value,
        draft=BriefDraft(**brief.model_dump(exclude={"version"})),
        brief=brief,
        last_intent=Intent.CREATE_IMAGE,
        pending_slots=[Slot.PROMPT],
    )


class TestLaunchBrief:
    """Sucesso limpa o rascunho; falha preserva tudo."""

    @pytest.mark.asyncio
    async def test_success_clears_session(self, caplog) -> None:
        session = _confirm_session()
        dispatcher = AsyncMock()
        dispatcher.enqueue.return_value = JobOrder(order_id="o-1", job_id="j-1", queue_size=0)

        with caplog.at_level(logging.INFO):
            outcome = await launch_brief(session, session.brief, dispatcher)

        dispatcher.enqueue.assert_awaited_once()
        assert outcome.order is not None
        assert "o-1" in outcome.message
        assert "file" not in outcome.message
        assert session.last_order_id == "o-1"
        assert session.last_queue_size == 0
        assert session.draft == BriefDraft()
        assert session.brief is None
        assert session.pending_slots == []
        assert session.last_intent is None
        assert session.stage == Stage.IDLE

        latency = [r for r in caplog.records if r.message == "component_latency"]
        assert latency and latency[-1].component == "job_dispatch"
        assert latency[-1].kind == "image"
        assert latency[-1].outcome == "ok"

    @pytest.mark.asyncio
    async def test_queue_note_when_queue_not_empty(self) -> None:
        session = _confirm_session()
        dispatcher = AsyncMock()
        dispatcher.enqueue.return_value = JobOrder(order_id="o-2", job_id="j-2", queue_size=3)

        outcome = await launch_brief(session, session.brief, dispatcher)

        assert "3 création(s) avant la tienne" in outcome.message

    @pytest.mark.asyncio
    async def test_timeout_keeps_brief_and_reverts_stage(self) -> None:
        session = _confirm_session()
        brief = session.brief
        draft = session.draft
        dispatcher = AsyncMock()
        dispatcher.enqueue.side_effect = asyncio.TimeoutError()

        outcome = await launch_brief(session, brief, dispatcher)

        assert outcome.order is None
        assert "TimeoutError" in outcome.message
        assert [q.choice for q in outcome.quick_replies] == ["launch"]
        assert session.stage == Stage.COLLECTING
        assert session.brief is brief
        assert session.draft is draft
        assert session.last_order_id is None


class TestAnswerStatus:
    """Consulta somente leitura por order id."""

    @pytest.mark.asyncio
    async def test_nothing_in_progress(self) -> None:
        search = AsyncMock()
        session = ConversationSession(session_id="s", brand_id="b")

        message = await answer_status(session, search, "https://studio.test")

        assert "Rien en cours" in message
        search.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_done_lists_unique_urls(self) -> None:
        search = AsyncMock()
        search.search.return_value = [
            Asset(id="1", preview_url="https://cdn/p.png"),
            Asset(id="2", preview_url="https://cdn/p.png"),
            Asset(id="3", download_url="https://cdn/d.mp4"),
            Asset(id="4"),
        ]
        session = ConversationSession(session_id="s", brand_id="b", last_order_id="o-7")

        message = await answer_status(session, search, "https://studio.test")

        search.search.assert_awaited_once_with("b", "o-7")
        assert message.count("https://cdn/p.png") == 1
        assert "https://cdn/d.mp4" in message

    @pytest.mark.asyncio
    async def test_done_lists_preview_then_download(self) -> None:
        search = AsyncMock()
        search.search.return_value = [
            Asset(id="1", preview_url="https://cdn/p.png", download_url="https://cdn/full.png"),
            Asset(id="2", preview_url="https://cdn/q.png", download_url="https://cdn/q.png"),
        ]
        session = ConversationSession(session_id="s", brand_id="b", last_order_id="o-7")

        message = await answer_status(session, search, "https://studio.test")

        assert message.index("https://cdn/p.png") < message.index("https://cdn/full.png")
        assert message.count("https://cdn/q.png") == 1

    @pytest.mark.asyncio
    async def test_queued_gives_deep_link(self) -> None:
        search = AsyncMock()
        search.search.return_value = [Asset(id="1", status="processing")]
        session = ConversationSession(session_id="s", brand_id="b", last_order_id="o-7")

        message = await answer_status(session, search, "https://studio.test/")

        assert "https://studio.test/jobs/o-7" in message

    @pytest.mark.asyncio
    async def test_error_gives_diagnostic(self) -> None:
        search = AsyncMock()
        search.search.side_effect = AssetSearchError("HTTP 500")
        session = ConversationSession(session_id="s", brand_id="b", last_order_id="o-7")

        message = await answer_status(session, search, "https://studio.test")

        assert "HTTP 500" in message

    def test_job_link(self) -> None:
        assert job_link("https://app.test/", "o-1") == "https://app.test/jobs/o-1"
