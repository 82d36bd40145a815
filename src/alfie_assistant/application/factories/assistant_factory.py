"""Factory para construção do ConversationService.

Responsabilidades:
- Instalar logging JSON e validar settings (falha cedo em config inválida)
- Conhecer infra e settings
- Escolher backends de sessão e de jobs conforme configuração
- Retornar um `ConversationService` pronto para uso

Não conter lógica de diálogo.
"""

from __future__ import annotations

from typing import Any

import httpx

from alfie_assistant.application.conversation_service import ConversationService
from alfie_assistant.application.feature_flags import FeatureFlags
from alfie_assistant.application.orchestrator import DialogueOrchestrator
from alfie_assistant.application.session.manager import SessionManager
from alfie_assistant.config.settings import Settings, get_settings
from alfie_assistant.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_conversation_service(
    settings: Settings | None = None,
    *,
    session_store: Any | None = None,
    dispatcher: Any | None = None,
    asset_search: Any | None = None,
    redis_client: Any | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logs: bool = True,
) -> ConversationService:
    """Constrói o serviço de conversa a partir das settings.

    Parâmetros explícitos têm prioridade; o que faltar é criado pelas
    factories de infra conforme `session_store_backend` e `jobs_backend`.

    Raises:
        ValueError: se `Settings.validate_all()` reportar erros.
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.log_level, settings.service_name)

    config_errors = settings.validate_all()
    if config_errors:
        raise ValueError(
            f"Configuração inválida para '{settings.environment}': {'; '.join(config_errors)}"
        )

    # Import infra factories apenas aqui
    from alfie_assistant.infra import create_job_backends, create_session_store

    if session_store is None:
        session_store = create_session_store(settings, client=redis_client)
        logger.debug("factory: created session_store via create_session_store")

    if dispatcher is None or asset_search is None:
        default_dispatcher, default_search = create_job_backends(settings, transport=transport)
        dispatcher = dispatcher or default_dispatcher
        asset_search = asset_search or default_search

    orchestrator = DialogueOrchestrator(
        dispatcher=dispatcher,
        asset_search=asset_search,
        feature_flags=FeatureFlags(settings.feature_flags),
        settings=settings,
    )
    session_manager = SessionManager(session_store=session_store, logger=logger, settings=settings)

    logger.info(
        "conversation_service_built",
        extra={
            "session_store_backend": settings.session_store_backend,
            "jobs_backend": settings.jobs_backend,
            "environment": settings.environment,
        },
    )
    return ConversationService(session_manager=session_manager, orchestrator=orchestrator)
