"""Package `session`: ciclo de vida e persistência da conversa.

Exports principais:
- ConversationSession: modelo de estado da conversa (de session/models.py)
- SessionManager: create/get/save sobre um SessionStore (de session/manager.py)
"""

from __future__ import annotations

from alfie_assistant.application.session.models import ConversationSession

__all__ = ["ConversationSession", "SessionManager"]


def __getattr__(name: str):
    """Lazy import do manager (evita import circular com infra)."""
    if name == "SessionManager":
        from alfie_assistant.application.session.manager import SessionManager

        return SessionManager
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
