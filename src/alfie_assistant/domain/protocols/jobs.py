"""Protocolos das dependências externas de geração (fila e busca de assets)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from alfie_assistant.domain.brief import Brief
from alfie_assistant.domain.jobs import Asset, JobOrder


class JobDispatcherProtocol(ABC):
    """Enfileira um Brief finalizado."""

    @abstractmethod
    async def enqueue(self, brief: Brief) -> JobOrder:
        """Retorna o pedido criado; levanta JobDispatchError em falha."""
        ...


class AssetSearchProtocol(ABC):
    """Consulta assets de uma marca (opcionalmente de um pedido)."""

    @abstractmethod
    async def search(self, brand_id: str, order_id: str | None = None) -> list[Asset]:
        """Retorna assets encontrados; levanta AssetSearchError em falha."""
        ...
