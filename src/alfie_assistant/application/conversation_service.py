"""ConversationService: ponto de entrada de um turno para a camada de transporte.

Responsabilidades:
- carregar a sessão (ou criar uma nova quando ausente/expirada)
- serializar turnos por session_id (um turno em voo por sessão)
- rodar o orquestrador dentro de um correlation id
- persistir a sessão e devolver as respostas coletadas
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from alfie_assistant.application.host_resolver import resolve_host
from alfie_assistant.application.orchestrator import DialogueOrchestrator, TurnContext
from alfie_assistant.application.replies import QuickReply
from alfie_assistant.application.session.manager import SessionManager
from alfie_assistant.observability.correlation import correlation_scope
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.utils.ids import short_id

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OutboundReply:
    text: str
    quick_replies: list[QuickReply] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Resultado de um turno: id da sessão (pode ser novo) e respostas."""

    session_id: str
    replies: list[OutboundReply] = field(default_factory=list)


class ConversationService:
    """Executa turnos de conversa com serialização por sessão."""

    def __init__(self, session_manager: SessionManager, orchestrator: DialogueOrchestrator) -> None:
        self._sessions = session_manager
        self._orchestrator = orchestrator
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, session_id: str | None) -> asyncio.Lock:
        if not session_id:
            return asyncio.Lock()
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    async def handle_message(
        self,
        text: str,
        *,
        brand_id: str,
        session_id: str | None = None,
        request_metadata: Mapping[str, Any] | None = None,
        user_id: str | None = None,
        choice: str | None = None,
        correlation_id: str | None = None,
    ) -> TurnResult:
        """Processa uma mensagem do usuário e devolve as respostas do turno."""
        metadata = dict(request_metadata or {})
        outbox: list[OutboundReply] = []

        def collect(message: str, quick_replies: list[QuickReply] | None = None) -> None:
            outbox.append(OutboundReply(message, list(quick_replies or [])))

        with correlation_scope(correlation_id):
            lock = self._lock_for(session_id)
            async with lock:
                session = self._sessions.get(session_id)
                if session is None:
                    if session_id:
                        logger.info("session_expired_or_missing", extra={"session_id": short_id(session_id)})
                    session = self._sessions.create(resolve_host(metadata), brand_id, user_id)

                context = TurnContext(
                    session=session,
                    reply=collect,
                    brand_id=brand_id,
                    user_id=user_id,
                    request_metadata=metadata,
                    choice=choice,
                )
                await self._orchestrator.handle_turn(text, context)
                self._sessions.save(session)

        return TurnResult(session_id=session.session_id, replies=outbox)
