"""Contexto de log por turno de conversa (ContextVar, seguro em async).

- correlation_id: um por turno (ou herdado da camada de transporte)
- session_id: prefixo truncado da sessão em atendimento
"""

from __future__ import annotations

import contextlib
import uuid
from collections.abc import Generator
from contextvars import ContextVar

from alfie_assistant.utils.ids import short_id

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_session_id: ContextVar[str | None] = ContextVar("session_id", default=None)


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


def get_session_id() -> str | None:
    """Retorna o session_id truncado do turno corrente (ou None)."""

    return _session_id.get()


@contextlib.contextmanager
def correlation_scope(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Define um correlation_id durante o bloco e restaura o anterior ao sair.

    Usage:
        with correlation_scope() as cid:
            await service.handle_message(text, brand_id=brand_id)
    """
    value = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


@contextlib.contextmanager
def session_scope(session_id: str | None) -> Generator[str | None, None, None]:
    """Marca os logs do bloco com a sessão atendida (já truncada)."""
    token = _session_id.set(short_id(session_id))
    try:
        yield _session_id.get()
    finally:
        _session_id.reset(token)
