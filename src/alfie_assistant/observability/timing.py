"""Latência das chamadas externas de um turno (fila de jobs, busca de assets)."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Generator
from typing import Any

from alfie_assistant.observability.logging import get_logger

logger = get_logger(__name__)

# Acima disso a chamada externa é registrada como lenta (WARNING)
DEFAULT_SLOW_MS = 5000.0


@contextlib.contextmanager
def timed(
    component: str, *, slow_ms: float = DEFAULT_SLOW_MS, **fields: Any
) -> Generator[None, None, None]:
    """Mede o bloco e registra `component_latency` com o desfecho.

    `fields` são identificadores já seguros para log (ids truncados, tipo de
    criação). O registro sai mesmo quando o bloco lança; nesse caso leva
    `outcome="error"` e o tipo da exceção.

    Usage:
        with timed("job_dispatch", kind=brief.kind.value):
            order = await dispatcher.enqueue(brief)
    """
    start = time.perf_counter()
    extra: dict[str, Any] = {"component": component, **fields, "outcome": "ok"}
    try:
        yield
    except Exception as e:
        extra["outcome"] = "error"
        extra["error"] = type(e).__name__
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        extra["elapsed_ms"] = elapsed_ms
        level = logging.WARNING if elapsed_ms > slow_ms else logging.INFO
        logger.log(level, "component_latency", extra=extra)
