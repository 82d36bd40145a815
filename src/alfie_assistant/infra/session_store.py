"""Factory de SessionStore conforme backend configurado."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from alfie_assistant.infra.session_contract import SessionStore, SessionStoreError
from alfie_assistant.infra.session_store_memory import InMemorySessionStore
from alfie_assistant.infra.session_store_redis import RedisSessionStore
from alfie_assistant.observability.logging import get_logger

if TYPE_CHECKING:
    from alfie_assistant.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


def _create_redis_client(redis_url: str) -> Any:
    """Cria cliente Redis a partir da URL."""
    import redis

    return redis.from_url(redis_url, decode_responses=True)


def create_session_store(settings: Settings, client: Any | None = None) -> SessionStore:
    """Cria o SessionStore do backend configurado.

    Args:
        settings: Settings com SESSION_STORE_BACKEND / REDIS_URL
        client: Cliente Redis já construído (opcional, útil em testes)

    Raises:
        SessionStoreError: backend inválido ou sem configuração mínima
    """
    backend = settings.session_store_backend.lower()

    if backend == "memory":
        logger.info("session_store_backend", extra={"backend": "memory"})
        return InMemorySessionStore(max_entries=settings.session_max_entries)

    if backend == "redis":
        if client is None:
            if not settings.redis_url:
                raise SessionStoreError("session_store_backend=redis requer REDIS_URL")
            client = _create_redis_client(settings.redis_url)
        logger.info("session_store_backend", extra={"backend": "redis"})
        return RedisSessionStore(client)

    raise SessionStoreError(f"session_store_backend desconhecido: {backend}")
