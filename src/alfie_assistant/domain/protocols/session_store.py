"""Protocolo de domínio para persistência de sessão."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alfie_assistant.application.session import ConversationSession


class SessionStoreProtocol(ABC):
    """Contrato mínimo síncrono para armazenamento de ConversationSession."""

    @abstractmethod
    def save(self, session: ConversationSession, ttl_seconds: int = 7200) -> None: ...

    @abstractmethod
    def load(self, session_id: str) -> ConversationSession | None: ...

    @abstractmethod
    def delete(self, session_id: str) -> bool: ...

    @abstractmethod
    def exists(self, session_id: str) -> bool: ...
