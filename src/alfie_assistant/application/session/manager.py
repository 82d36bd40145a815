"""SessionManager: create/get/save de ConversationSession sobre um SessionStore.

Centraliza criação, carga (com normalização de estágio) e persistência com o
TTL configurado. Falhas de persistência são logadas; o turno já respondeu.
"""

from __future__ import annotations

import logging
from typing import Any

from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.config.settings import get_settings
from alfie_assistant.domain.enums import HostVariant, Stage, TonePack
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.utils.ids import new_session_id, short_id

_module_logger = get_logger(__name__)


def normalize_stage(
    session: ConversationSession,
    logger: logging.Logger | None = None,
) -> Stage:
    """Garante que `session.stage` seja um `Stage` válido.

    Estágio ausente ou desconhecido equivale a `idle`; a normalização é gravada
    na sessão e emite log estruturado `invalid_stage_normalized`.
    """
    try:
        return Stage(session.stage)
    except ValueError:
        (logger or _module_logger).warning(
            "invalid_stage_normalized",
            extra={
                "event": "invalid_stage_normalized",
                "invalid_stage_value": str(session.stage),
                "normalized_to": Stage.IDLE.value,
                "session_id": short_id(session.session_id),
            },
        )
        session.stage = Stage.IDLE.value
        return Stage.IDLE


class SessionManager:
    """Gerencia ciclo de vida de sessão (create, get, save)."""

    def __init__(
        self,
        session_store: Any,
        logger: logging.Logger | None = None,
        settings: Any | None = None,
    ) -> None:
        self._sessions = session_store
        self._logger = logger or _module_logger
        self._settings = settings or get_settings()

    def create(
        self,
        host: HostVariant,
        brand_id: str,
        user_id: str | None = None,
        tone: TonePack | str | None = None,
    ) -> ConversationSession:
        """Cria sessão nova em `idle` (não persiste até o primeiro save)."""
        session = ConversationSession(
            session_id=new_session_id(),
            host=host,
            brand_id=brand_id,
            user_id=user_id,
            tone=self._resolve_tone(tone),
        )
        self._logger.info(
            "New session created",
            extra={"session_id": short_id(session.session_id), "host": host.value},
        )
        return session

    def get(self, session_id: str | None) -> ConversationSession | None:
        """Carrega sessão ativa (None se ausente ou expirada)."""
        if not session_id:
            return None
        session = self._sessions.load(session_id)
        if session is None:
            return None
        normalize_stage(session, self._logger)
        self._logger.debug("Session loaded", extra={"session_id": short_id(session_id)})
        return session

    def save(self, session: ConversationSession) -> None:
        """Persiste sessão com o TTL configurado, logando falhas."""
        session.touch()
        try:
            self._sessions.save(session, ttl_seconds=self._settings.session_ttl_seconds)
        except Exception as e:
            self._logger.error(
                "Failed to save session",
                extra={"session_id": short_id(session.session_id), "error": type(e).__name__},
            )

    def _resolve_tone(self, tone: TonePack | str | None) -> TonePack:
        candidate = tone or self._settings.default_tone
        try:
            return TonePack(candidate)
        except ValueError:
            self._logger.warning("unknown_tone_ignored", extra={"tone": str(candidate)})
            return TonePack.BRAND_DEFAULT
