"""Contrato de persistência de sessão (SessionStore).

Separado para manter SRP e permitir reuso entre implementações.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from alfie_assistant.domain.protocols.session_store import SessionStoreProtocol

if TYPE_CHECKING:
    from alfie_assistant.application.session import ConversationSession


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""

    pass


class SessionStore(SessionStoreProtocol):
    """Contrato abstrato para armazenamento de ConversationSession.

    Responsabilidades:
    - Persistir sessão com TTL
    - Nunca devolver sessão expirada
    - Garantir isolamento entre sessões
    """

    @abstractmethod
    def save(self, session: ConversationSession, ttl_seconds: int = 7200) -> None:
        """Persiste a sessão com TTL.

        Raises:
            SessionStoreError: Em caso de falha de persistência
        """
        ...

    @abstractmethod
    def load(self, session_id: str) -> ConversationSession | None:
        """Carrega sessão por ID (None se ausente ou expirada)."""
        ...

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove sessão do armazenamento."""
        ...

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """Verifica se sessão existe e não expirou."""
        ...
