"""Implementação de SessionStore usando Redis (TTL nativo via SETEX)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from alfie_assistant.infra.session_contract import SessionStore, SessionStoreError
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.utils.ids import short_id

if TYPE_CHECKING:
    from alfie_assistant.application.session import ConversationSession

logger: logging.Logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    """Armazenamento em Redis para ambientes com múltiplas instâncias."""

    def __init__(self, redis_client: Any, key_prefix: str = "alfie:session:") -> None:
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    def save(self, session: ConversationSession, ttl_seconds: int = 7200) -> None:
        payload = session.model_dump_json()

        try:
            self._redis.setex(self._key(session.session_id), ttl_seconds, payload)
            logger.debug(
                "Session saved (Redis)",
                extra={"session_id": short_id(session.session_id), "ttl_seconds": ttl_seconds},
            )
        except Exception as e:
            logger.error(
                "Failed to save session to Redis",
                extra={"session_id": short_id(session.session_id), "error": type(e).__name__},
            )
            raise SessionStoreError(f"Redis save failed: {type(e).__name__}") from e

    def load(self, session_id: str) -> ConversationSession | None:
        try:
            payload = self._redis.get(self._key(session_id))
            if not payload:
                logger.debug(
                    "Session not found (Redis)", extra={"session_id": short_id(session_id)}
                )
                return None

            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")

            from alfie_assistant.application.session import ConversationSession

            return ConversationSession.model_validate_json(payload)
        except Exception as e:
            logger.error(
                "Failed to load session from Redis",
                extra={"session_id": short_id(session_id), "error": type(e).__name__},
            )
            return None

    def delete(self, session_id: str) -> bool:
        try:
            deleted = self._redis.delete(self._key(session_id))
            return bool(deleted)
        except Exception as e:
            logger.error(
                "Failed to delete session from Redis",
                extra={"session_id": short_id(session_id), "error": type(e).__name__},
            )
            return False

    def exists(self, session_id: str) -> bool:
        try:
            return bool(self._redis.exists(self._key(session_id)))
        except Exception as e:
            logger.error(
                "Failed to check session existence in Redis",
                extra={"session_id": short_id(session_id), "error": type(e).__name__},
            )
            return False
