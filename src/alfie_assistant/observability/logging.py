"""Logging estruturado (JSON) do assistente.

Cada registro recebe service, correlation_id e session_id do turno corrente.
Campos que carregam texto do usuário ou segredos são mascarados antes de
sair do processo.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from alfie_assistant.observability.correlation import get_correlation_id, get_session_id

REDACTED = "[redacted]"

# Texto livre do usuário e credenciais nunca vão para o log
REDACTED_FIELDS: frozenset[str] = frozenset({"text", "prompt", "user_text", "token", "jobs_api_token"})

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s %(session_id)s %(service)s"


class CorrelationIdFilter(logging.Filter):
    """Insere contexto do turno no record e mascara campos sensíveis.

    Valores passados explicitamente via `extra` têm prioridade sobre o contexto.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        if not getattr(record, "session_id", None):
            record.session_id = get_session_id()
        record.service = self._service_name

        for name in REDACTED_FIELDS.intersection(record.__dict__):
            setattr(record, name, REDACTED)
        return True


def configure_logging(level: str, service_name: str) -> None:
    """Instala o handler JSON no root logger (substitui handlers anteriores)."""

    formatter = JsonFormatter(
        LOG_FORMAT,
        rename_fields={"levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho de fallback foi usado.

    `reason` é o nome do tipo de erro (ex.: "BriefValidationError"), nunca a
    mensagem: mensagens de validação podem repetir o texto do usuário.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("Fallback applied for %s", component, extra=extra)
