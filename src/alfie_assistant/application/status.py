"""Resposta a "statut ?" a partir do último pedido da sessão.

Somente leitura: não altera estágio, rascunho, brief nem contadores.
"""

from __future__ import annotations

import logging

from alfie_assistant.application import replies
from alfie_assistant.application.session.models import ConversationSession
from alfie_assistant.domain.protocols.jobs import AssetSearchProtocol
from alfie_assistant.observability.logging import get_logger
from alfie_assistant.observability.timing import timed
from alfie_assistant.utils.ids import short_id

logger: logging.Logger = get_logger(__name__)


def job_link(studio_base_url: str, order_id: str) -> str:
    return f"{studio_base_url.rstrip('/')}/jobs/{order_id}"


async def answer_status(
    session: ConversationSession,
    asset_search: AssetSearchProtocol,
    studio_base_url: str,
) -> str:
    """Mensagem de status (sem tom aplicado); nunca lança."""
    order_id = session.last_order_id
    if not order_id:
        return replies.STATUS_NONE

    try:
        with timed("asset_search", order_id=short_id(order_id)):
            assets = await asset_search.search(session.brand_id, order_id)
    except Exception as e:
        logger.warning(
            "status_query_failed",
            extra={"order_id": short_id(order_id), "error": type(e).__name__},
        )
        return replies.STATUS_FAILED.format(diagnostic=replies.short_diagnostic(e))

    urls: list[str] = []
    for asset in assets:
        for url in asset.urls():
            if url not in urls:
                urls.append(url)

    logger.info(
        "status_answered",
        extra={"order_id": short_id(order_id), "assets": len(assets), "ready": bool(urls)},
    )
    if urls:
        return replies.STATUS_DONE.format(urls="\n".join(urls))
    return replies.STATUS_QUEUED.format(link=job_link(studio_base_url, order_id))
