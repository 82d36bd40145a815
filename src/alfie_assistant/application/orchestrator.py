"""Orquestrador de diálogo: máquina de estados do brief.

Estágios: idle -> collecting -> confirm -> (launch) -> idle.

Ordem de decisão por turno:
1. Pergunta de status (qualquer estágio, somente leitura)
2. "launch" com brief finalizado -> envio para a fila
3. "modify" em confirm -> volta para collecting com todos os slots reabertos
4. Classificação de intenção, gate de capacidade e feature flag
5. Atualização do rascunho, atalhos de prompt, próxima pergunta ou recap

No máximo uma chamada externa e uma resposta por turno; nenhuma exceção
escapa de `handle_turn`.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from alfie_assistant.application import replies
from alfie_assistant.application.draft_manager import update_draft
from alfie_assistant.application.feature_flags import FeatureFlags
from alfie_assistant.application.host_resolver import resolve_host
from alfie_assistant.application.intent_classifier import classify_intent
from alfie_assistant.application.launch import launch_brief
from alfie_assistant.application.prompt_suggestions import suggest_prompt
from alfie_assistant.application.replies import QuickReply
from alfie_assistant.application.session.manager import normalize_stage
from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.application.slot_extraction import is_status_query, resolve_control
from alfie_assistant.application.status import answer_status
from alfie_assistant.application.tone import render
from alfie_assistant.config.settings import get_settings
from alfie_assistant.domain.brief import Brief, BriefValidationError
from alfie_assistant.domain.enums import (
    INTENT_TO_KIND,
    ChoiceId,
    HostVariant,
    Intent,
    Slot,
    Stage,
)
from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol, JobDispatcherProtocol
from alfie_assistant.observability.correlation import session_scope
from alfie_assistant.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)

INTRO_FLAG = "intro_shown"

ReplySink = Callable[..., Awaitable[None] | None]


@dataclass(slots=True)
class TurnContext:
    """Tudo que um turno precisa além do texto do usuário.

    `reply(text, quick_replies=None)` pode ser síncrono ou assíncrono.
    """

    session: ConversationSession
    reply: ReplySink
    brand_id: str | None = None
    user_id: str | None = None
    request_metadata: Mapping[str, Any] = field(default_factory=dict)
    choice: str | None = None


class _Responder:
    """Aplica o tom e garante no máximo uma resposta por turno."""

    def __init__(self, sink: ReplySink, tone: str) -> None:
        self._sink = sink
        self._tone = tone
        self.sent = False

    async def send(
        self,
        template: str,
        quick_replies: list[QuickReply] | None = None,
        values: Mapping[str, str] | None = None,
    ) -> None:
        if self.sent:
            logger.warning("reply_already_sent")
            return
        self.sent = True
        result = self._sink(render(template, self._tone, values), quick_replies=quick_replies or None)
        if inspect.isawaitable(result):
            await result


class DialogueOrchestrator:
    """Conduz um turno de conversa sobre uma ConversationSession viva."""

    def __init__(
        self,
        dispatcher: JobDispatcherProtocol,
        asset_search: AssetSearchProtocol,
        feature_flags: FeatureFlags | None = None,
        settings: Any | None = None,
        question_budget: int | None = None,
        studio_base_url: str | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._dispatcher = dispatcher
        self._asset_search = asset_search
        self._flags = feature_flags or FeatureFlags(settings.feature_flags)
        self._budget = question_budget if question_budget is not None else settings.question_budget
        self._studio_base_url = studio_base_url or settings.studio_base_url

    async def handle_turn(self, text: str, context: TurnContext) -> None:
        """Processa um turno; falhas inesperadas viram pedido de desculpas."""
        session = context.session
        responder = _Responder(context.reply, session.tone)
        with session_scope(session.session_id):
            try:
                await self._run_turn(text or "", context, responder)
            except Exception as e:
                logger.error("turn_failed", extra={"error": type(e).__name__})
                if not responder.sent:
                    try:
                        await responder.send(replies.TURN_FAILED)
                    except Exception as reply_error:
                        logger.error("reply_failed", extra={"error": type(reply_error).__name__})
            finally:
                session.touch()

    async def _run_turn(self, text: str, context: TurnContext, responder: _Responder) -> None:
        session = context.session
        if context.brand_id:
            session.brand_id = context.brand_id
        if context.user_id:
            session.user_id = context.user_id
        host = resolve_host(context.request_metadata) if context.request_metadata else session.host
        session.host = host

        stage = normalize_stage(session)

        if is_status_query(text, context.choice):
            message = await answer_status(session, self._asset_search, self._studio_base_url)
            session.stage = stage.value
            self._log_turn(session, "status")
            await responder.send(message)
            return

        control = resolve_control(text, context.choice)

        if control == ChoiceId.LAUNCH and session.brief is not None:
            outcome = await launch_brief(session, session.brief, self._dispatcher)
            self._log_turn(session, "launch")
            await responder.send(outcome.message, outcome.quick_replies)
            return

        if control == ChoiceId.MODIFY and stage == Stage.CONFIRM:
            session.brief = None
            session.pending_slots = list(Slot)
            session.stage = Stage.COLLECTING.value
            self._log_turn(session, "modify")
            await responder.send(replies.MODIFY_ASK)
            return

        intent = classify_intent(text, session.last_intent)
        kind = INTENT_TO_KIND.get(intent) or session.draft.kind

        if kind is None:
            session.last_intent = intent
            session.stage = stage.value
            self._log_turn(session, "capabilities", intent)
            await responder.send(self._capability_message(session, host), replies.START_QUICK_REPLIES)
            return

        if not self._flags.is_enabled(kind):
            session.stage = stage.value
            self._log_turn(session, "feature_disabled", intent)
            await responder.send(replies.FEATURE_DISABLED.format(kind=replies.KIND_LABELS[kind]))
            return

        session.last_intent = intent
        await self._collect(text, context, intent, control, responder)

    async def _collect(
        self,
        text: str,
        context: TurnContext,
        intent: Intent,
        control: ChoiceId | None,
        responder: _Responder,
    ) -> None:
        session = context.session
        prompt_open = not session.draft.is_filled(Slot.PROMPT) or Slot.PROMPT in session.pending_slots

        draft = update_draft(text, session, intent, context.choice)

        if control == ChoiceId.SUGGEST_PROMPT and prompt_open:
            draft = draft.with_updates(prompt=suggest_prompt(draft.kind, draft.objective, draft.format))
        elif control == ChoiceId.OWN_PROMPT and not draft.is_filled(Slot.PROMPT):
            session.draft = draft
            session.pending_slots = [Slot.PROMPT]
            session.stage = Stage.COLLECTING.value
            self._log_turn(session, "own_prompt", intent)
            await responder.send(replies.OWN_PROMPT_ASK)
            return

        session.draft = draft
        missing = draft.missing_slots()

        if missing and session.question_count < self._budget:
            slot = missing[0]
            session.question_count += 1
            session.pending_slots = [slot]
            session.stage = Stage.COLLECTING.value
            self._log_turn(session, f"ask_{slot.value}", intent)
            await responder.send(
                replies.slot_question(slot, draft.kind),
                replies.slot_quick_replies(slot, draft.kind),
            )
            return

        if missing:
            session.pending_slots = list(missing)
            session.stage = Stage.COLLECTING.value
            self._log_turn(session, "missing_details", intent)
            await responder.send(replies.missing_details(missing))
            return

        try:
            brief = Brief.from_draft(draft)
        except BriefValidationError as e:
            log_fallback(logger, "brief_validation", reason=type(e).__name__)
            session.brief = None
            session.pending_slots = []
            session.stage = Stage.COLLECTING.value
            await responder.send(replies.VALIDATION_FAILED)
            return

        session.brief = brief
        session.question_count = 0
        session.pending_slots = []
        session.stage = Stage.CONFIRM.value
        self._log_turn(session, "recap", intent)
        await responder.send(
            replies.recap(brief), list(replies.CONFIRM_QUICK_REPLIES), replies.recap_values(brief)
        )

    def _capability_message(self, session: ConversationSession, host: HostVariant) -> str:
        if not session.ensure_flag(INTRO_FLAG):
            return replies.INTRO[host]
        return replies.CAPABILITIES[host]

    def _log_turn(self, session: ConversationSession, action: str, intent: Intent | None = None) -> None:
        logger.info(
            "turn_handled",
            extra={
                "action": action,
                "stage": session.stage,
                "intent": intent.value if intent else None,
                "question_count": session.question_count,
            },
        )
