"""Envio do brief finalizado para a fila de geração.

Um brief gera no máximo um job: em caso de sucesso o rascunho e o brief são
limpos; em caso de falha ficam intactos e o usuário reenvia "launch".
Sem retry interno.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from alfie_assistant.application import replies
from alfie_assistant.application.replies import QuickReply
from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.domain.brief import Brief, BriefDraft
from alfie_assistant.domain.enums import Stage
from alfie_assistant.domain.jobs import JobOrder
from alfie_assistant.domain.protocols.jobs import JobDispatcherProtocol
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.observability.timing import timed
from alfie_assistant.utils.ids import short_id

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LaunchOutcome:
    """Resultado de uma tentativa de envio (texto ainda sem tom aplicado)."""

    message: str
    quick_replies: list[QuickReply] = field(default_factory=list)
    order: JobOrder | None = None


def launch_message(order: JobOrder) -> str:
    message = replies.LAUNCHED.format(order_id=order.order_id)
    if order.queue_size:
        message += replies.QUEUE_NOTE.format(queue_size=order.queue_size)
    return message


async def launch_brief(
    session: ConversationSession,
    brief: Brief,
    dispatcher: JobDispatcherProtocol,
) -> LaunchOutcome:
    """Enfileira o brief e atualiza a sessão conforme o resultado.

    Nunca lança: qualquer falha do dispatcher (inclusive timeout) vira
    mensagem com diagnóstico curto e estágio `collecting`.
    """
    try:
        with timed("job_dispatch", kind=brief.kind.value):
            order = await dispatcher.enqueue(brief)
    except Exception as e:
        logger.warning("job_dispatch_failed", extra={"error": type(e).__name__})
        session.stage = Stage.COLLECTING.value
        session.pending_slots = []
        return LaunchOutcome(
            message=replies.DISPATCH_FAILED.format(diagnostic=replies.short_diagnostic(e)),
            quick_replies=list(replies.RETRY_QUICK_REPLIES),
        )

    session.last_order_id = order.order_id
    session.last_queue_size = order.queue_size
    session.draft = BriefDraft()
    session.brief = None
    session.pending_slots = []
    session.last_intent = None
    session.stage = Stage.IDLE.value

    logger.info(
        "brief_launched",
        extra={
            "order_id": short_id(order.order_id),
            "queue_size": order.queue_size,
        },
    )
    return LaunchOutcome(
        message=launch_message(order),
        quick_replies=list(replies.STATUS_QUICK_REPLIES),
        order=order,
    )
