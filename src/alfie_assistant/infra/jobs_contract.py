"""Erros das integrações de geração (fila de jobs e busca de assets)."""

from __future__ import annotations


class JobDispatchError(Exception):
    """Falha ao enfileirar um Brief (mensagem curta, segura para o usuário)."""

    pass


class AssetSearchError(Exception):
    """Falha ao consultar assets de um pedido."""

    pass
