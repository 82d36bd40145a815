"""Fila de jobs e busca de assets em memória (dev/teste).

⚠️ NÃO use em produção: pedidos somem no restart e nada é gerado de fato.
"""

from __future__ import annotations

import logging

from alfie_assistant.domain.brief import Brief
from alfie_assistant.domain.jobs import Asset, JobOrder
from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol, JobDispatcherProtocol
from alfie_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class InMemoryJobQueue(JobDispatcherProtocol, AssetSearchProtocol):
    """Fila e catálogo de assets compartilhando o mesmo estado."""

    def __init__(self) -> None:
        self._counter = 0
        self.orders: dict[str, tuple[Brief, JobOrder]] = {}
        self._assets: dict[str, list[Asset]] = {}

    async def enqueue(self, brief: Brief) -> JobOrder:
        self._counter += 1
        pending = sum(1 for order_id in self.orders if not self._assets.get(order_id))
        order = JobOrder(
            order_id=f"order-{self._counter}",
            job_id=f"job-{self._counter}",
            queue_size=pending,
        )
        self.orders[order.order_id] = (brief, order)
        logger.debug("enqueued_in_memory", extra={"order_id": order.order_id})
        return order

    async def search(self, brand_id: str, order_id: str | None = None) -> list[Asset]:
        results: list[Asset] = []
        for oid, (brief, _) in self.orders.items():
            if brief.brand_id != brand_id:
                continue
            if order_id and oid != order_id:
                continue
            results.extend(self._assets.get(oid, []))
        return results

    def complete(self, order_id: str, *assets: Asset) -> None:
        """Simula o worker entregando assets para um pedido."""
        self._assets.setdefault(order_id, []).extend(assets)
