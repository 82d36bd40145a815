"""Cliente HTTP assíncrono para a API de jobs, com timeout e logging.

- Timeout sempre aplicado
- Retry com backoff exponencial apenas se configurado (padrão: 0 tentativas extras)
- Logging estruturado sem tokens nem payloads
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import httpx

from alfie_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_TOKEN_PATTERN = re.compile(r"(token|key)=[^&]+")


def _sanitize_url(url: str) -> str:
    """Remove tokens da URL para logging seguro."""
    return _TOKEN_PATTERN.sub(r"\1=***", url)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem expor informações sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _is_retryable_status(status_code: int) -> bool:
    """Determina se status HTTP permite retry (429 ou 5xx)."""
    return status_code == 429 or 500 <= status_code < 600


def _calculate_backoff(attempt: int, base_seconds: float, max_seconds: float) -> float:
    """Calcula tempo de espera com backoff exponencial."""
    return min((2**attempt) * base_seconds, max_seconds)


def _to_http_error(exc: Exception, method: str, url: str, attempt: int) -> HttpError:
    """Converte exceções do httpx em HttpError (timeout e conexão são retentáveis)."""
    if isinstance(exc, httpx.TimeoutException):
        logger.warning(
            "Timeout em requisição HTTP",
            extra={"method": method, "url": _sanitize_url(url), "attempt": attempt + 1},
        )
        return HttpError("Timeout", is_retryable=True)

    if isinstance(exc, httpx.TransportError):
        logger.warning(
            "Erro de conexão HTTP",
            extra={
                "method": method,
                "url": _sanitize_url(url),
                "attempt": attempt + 1,
                "error_type": type(exc).__name__,
            },
        )
        return HttpError("Erro de conexão", is_retryable=True)

    logger.error(
        "Erro inesperado em requisição HTTP",
        extra={"method": method, "url": _sanitize_url(url), "error_type": type(exc).__name__},
    )
    return HttpError(f"Erro inesperado: {type(exc).__name__}")


class HttpClient:
    """Cliente HTTP assíncrono.

    Uso típico:
        async with HttpClient(config) as client:
            response = await client.post(url, json=payload)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retorna cliente httpx (lazy loading)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Fecha o cliente e libera recursos."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Executa requisição; retry apenas para falhas retentáveis e se configurado.

        Raises:
            HttpError: Se a requisição (e eventuais retries) falhar
        """
        client = await self._get_client()
        cfg = self._config
        last_error: HttpError | None = None

        for attempt in range(cfg.max_retries + 1):
            try:
                response = await client.request(method, url, **kwargs)
            except Exception as exc:
                last_error = _to_http_error(exc, method, url, attempt)
                if not last_error.is_retryable:
                    raise last_error from exc
            else:
                if response.is_success:
                    logger.debug(
                        "Requisição HTTP bem-sucedida",
                        extra={
                            "method": method,
                            "url": _sanitize_url(url),
                            "status_code": response.status_code,
                        },
                    )
                    return response

                retryable = _is_retryable_status(response.status_code)
                logger.warning(
                    "Requisição HTTP falhou",
                    extra={
                        "method": method,
                        "url": _sanitize_url(url),
                        "status_code": response.status_code,
                        "retryable": retryable,
                    },
                )
                last_error = HttpError(
                    f"HTTP {response.status_code}",
                    status_code=response.status_code,
                    is_retryable=retryable,
                )
                if not retryable:
                    raise last_error

            if attempt < cfg.max_retries:
                backoff = _calculate_backoff(
                    attempt, cfg.backoff_base_seconds, cfg.backoff_max_seconds
                )
                logger.info(
                    "Aguardando backoff antes de retry",
                    extra={"backoff_seconds": backoff, "next_attempt": attempt + 2},
                )
                await asyncio.sleep(backoff)

        raise last_error or HttpError("Falha após todos os retries")

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Executa GET."""
        return await self._request("GET", url, **kwargs)

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Executa POST."""
        return await self._request("POST", url, json=json, **kwargs)
