"""Factory do dispatcher de jobs e da busca de assets conforme settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol, JobDispatcherProtocol
from alfie_assistant.infra.http import HttpClient, HttpClientConfig
from alfie_assistant.infra.jobs_http import HttpAssetSearch, HttpJobDispatcher
from alfie_assistant.infra.jobs_memory import InMemoryJobQueue
from alfie_assistant.observability.logging import get_logger

if TYPE_CHECKING:
    from alfie_assistant.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


def create_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    """Cria HttpClient configurado para a API de jobs."""
    headers = {"User-Agent": f"{settings.service_name}/{settings.version}"}
    if settings.jobs_api_token:
        headers["Authorization"] = f"Bearer {settings.jobs_api_token}"

    config = HttpClientConfig(
        timeout_seconds=settings.jobs_request_timeout_seconds,
        max_retries=settings.jobs_max_retries,
        backoff_base_seconds=settings.jobs_retry_backoff_seconds,
        default_headers=headers,
    )
    logger.info(
        "Cliente HTTP criado",
        extra={"timeout_seconds": config.timeout_seconds, "max_retries": config.max_retries},
    )
    return HttpClient(config, transport=transport)


def create_job_backends(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[JobDispatcherProtocol, AssetSearchProtocol]:
    """Retorna (dispatcher, asset_search) do backend configurado.

    Raises:
        ValueError: backend desconhecido ou http sem JOBS_API_BASE_URL
    """
    backend = settings.jobs_backend.lower()

    if backend == "memory":
        queue = InMemoryJobQueue()
        logger.info("jobs_backend", extra={"backend": "memory"})
        return queue, queue

    if backend == "http":
        if not settings.jobs_api_base_url:
            raise ValueError("jobs_backend=http requer JOBS_API_BASE_URL configurado")
        client = create_http_client(settings, transport=transport)
        logger.info("jobs_backend", extra={"backend": "http"})
        return (
            HttpJobDispatcher(client, settings.jobs_api_base_url),
            HttpAssetSearch(client, settings.jobs_api_base_url),
        )

    raise ValueError(f"jobs_backend desconhecido: {backend}")
