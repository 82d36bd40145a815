"""Modelos da fronteira com a fila de geração e a busca de assets."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class JobOrder(BaseModel):
    """Pedido aceito pela fila. O status nunca é cacheado aqui."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    order_id: str = Field(min_length=1)
    job_id: str = Field(min_length=1)
    queue_size: int | None = Field(default=None, ge=0)


class Asset(BaseModel):
    """Asset produzido por um pedido (urls opcionais até ficar pronto)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    order_id: str | None = None
    status: str | None = None
    preview_url: str | None = None
    download_url: str | None = None

    def best_url(self) -> str | None:
        """URL preferida para o usuário (preview antes de download)."""
        return self.preview_url or self.download_url

    def urls(self) -> list[str]:
        """Preview e download, nessa ordem, sem repetição."""
        found = [url for url in (self.preview_url, self.download_url) if url]
        return list(dict.fromkeys(found))
