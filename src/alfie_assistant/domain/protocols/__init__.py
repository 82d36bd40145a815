"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol, JobDispatcherProtocol
from alfie_assistant.domain.protocols.session_store import SessionStoreProtocol

__all__ = [
    "SessionStoreProtocol",
    "JobDispatcherProtocol",
    "AssetSearchProtocol",
]
