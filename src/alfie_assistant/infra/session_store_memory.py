"""Implementação de SessionStore em memória (dev/testes, instância única).

- Expiração preguiçosa: checada a cada leitura
- Limite de entradas: ao exceder `max_entries`, expirados saem primeiro e
  depois a sessão usada há mais tempo (LRU)
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from alfie_assistant.infra.session_contract import SessionStore
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.utils.ids import short_id

if TYPE_CHECKING:
    from alfie_assistant.application.session import ConversationSession

logger: logging.Logger = get_logger(__name__)


def _utc_timestamp() -> float:
    return datetime.now(tz=UTC).timestamp()


class InMemorySessionStore(SessionStore):
    """Armazenamento em memória (não usar com múltiplas instâncias)."""

    def __init__(
        self,
        max_entries: int = 10000,
        clock: Callable[[], float] = _utc_timestamp,
    ) -> None:
        self._sessions: OrderedDict[str, tuple[ConversationSession, float]] = OrderedDict()
        self._max_entries = max_entries
        self._clock = clock

    def save(self, session: ConversationSession, ttl_seconds: int = 7200) -> None:
        expire_at = self._clock() + ttl_seconds
        self._sessions[session.session_id] = (session, expire_at)
        self._sessions.move_to_end(session.session_id)
        self._evict_if_needed()
        logger.debug(
            "Session saved (in-memory)",
            extra={"session_id": short_id(session.session_id), "ttl_seconds": ttl_seconds},
        )

    def load(self, session_id: str) -> ConversationSession | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            logger.debug(
                "Session not found (in-memory)",
                extra={"session_id": short_id(session_id)},
            )
            return None

        session, expire_at = entry
        if self._clock() >= expire_at:
            del self._sessions[session_id]
            logger.debug(
                "Session expired (in-memory)",
                extra={"session_id": short_id(session_id)},
            )
            return None

        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        if session_id in self._sessions:
            del self._sessions[session_id]
            logger.debug(
                "Session deleted (in-memory)",
                extra={"session_id": short_id(session_id)},
            )
            return True
        return False

    def exists(self, session_id: str) -> bool:
        return self.load(session_id) is not None

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_if_needed(self) -> None:
        if len(self._sessions) <= self._max_entries:
            return

        now = self._clock()
        expired = [sid for sid, (_, expire_at) in self._sessions.items() if now >= expire_at]
        for sid in expired:
            del self._sessions[sid]

        evicted = 0
        while len(self._sessions) > self._max_entries:
            self._sessions.popitem(last=False)
            evicted += 1

        logger.info(
            "session_store_evicted",
            extra={"expired": len(expired), "lru_evicted": evicted},
        )
