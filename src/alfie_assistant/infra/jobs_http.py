"""Adapters HTTP para a API de jobs (enqueue) e de assets (search)."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from alfie_assistant.domain.brief import Brief
from alfie_assistant.domain.jobs import Asset, JobOrder
from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol, JobDispatcherProtocol
from alfie_assistant.infra.http import HttpClient, HttpError
from alfie_assistant.infra.jobs_contract import AssetSearchError, JobDispatchError
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.utils.ids import short_id

logger: logging.Logger = get_logger(__name__)

# A API aceita camelCase e snake_case na resposta
_ORDER_ALIASES = {"orderId": "order_id", "jobId": "job_id", "queueSize": "queue_size"}
_ASSET_ALIASES = {
    "orderId": "order_id",
    "previewUrl": "preview_url",
    "downloadUrl": "download_url",
}


def _normalize_keys(data: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    return {aliases.get(key, key): value for key, value in data.items()}


class HttpJobDispatcher(JobDispatcherProtocol):
    """Enfileira Brief via `POST {base_url}/jobs`."""

    def __init__(self, client: HttpClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def enqueue(self, brief: Brief) -> JobOrder:
        try:
            response = await self._client.post(f"{self._base_url}/jobs", json=brief.to_payload())
        except HttpError as e:
            raise JobDispatchError(str(e)) from e

        try:
            body = response.json()
            if not isinstance(body, dict):
                raise TypeError("job response is not an object")
            order = JobOrder.model_validate(_normalize_keys(body, _ORDER_ALIASES))
        except (ValueError, TypeError, ValidationError) as e:
            logger.error("job_response_invalid", extra={"error_type": type(e).__name__})
            raise JobDispatchError("réponse invalide de la file") from e

        logger.info(
            "job_enqueued",
            extra={
                "order_id": short_id(order.order_id),
                "kind": brief.kind.value,
                "queue_size": order.queue_size,
            },
        )
        return order


class HttpAssetSearch(AssetSearchProtocol):
    """Busca assets via `GET {base_url}/assets?brand_id=&order_id=`."""

    def __init__(self, client: HttpClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def search(self, brand_id: str, order_id: str | None = None) -> list[Asset]:
        params = {"brand_id": brand_id}
        if order_id:
            params["order_id"] = order_id

        try:
            response = await self._client.get(f"{self._base_url}/assets", params=params)
        except HttpError as e:
            raise AssetSearchError(str(e)) from e

        try:
            body = response.json()
            items = body.get("assets", []) if isinstance(body, dict) else body
            if not isinstance(items, list):
                raise TypeError("assets is not a list")
            return [
                Asset.model_validate(_normalize_keys(item, _ASSET_ALIASES)) for item in items
            ]
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.error("asset_response_invalid", extra={"error_type": type(e).__name__})
            raise AssetSearchError("réponse invalide de la recherche") from e
