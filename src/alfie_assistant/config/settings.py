"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (ou arquivo .env em dev).
Nunca hardcode tokens ou valores sensíveis.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from alfie_assistant.observability.logging import get_logger

# Teto de perguntas por brief antes de desistir de perguntar
DEFAULT_QUESTION_BUDGET: int = 5


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "alfie_assistant"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Sessão de conversa (volátil, com TTL)
    session_store_backend: str = "memory"  # memory | redis
    session_ttl_seconds: int = 7200  # 2h de inatividade
    session_max_entries: int = 10000  # Limite do backend em memória (LRU)
    redis_url: str | None = None

    # Fila de geração / busca de assets
    jobs_backend: str = "memory"  # memory | http
    jobs_api_base_url: str | None = None
    jobs_api_token: str | None = None  # Bearer token (nunca logar)
    jobs_request_timeout_seconds: float = 15.0
    jobs_max_retries: int = 0  # Retry de dispatch é sempre iniciado pelo usuário
    jobs_retry_backoff_seconds: float = 1.0

    # Deep link de acompanhamento de pedido
    studio_base_url: str = "https://app.alfie-designer.com"

    # Diálogo
    question_budget: int = DEFAULT_QUESTION_BUDGET
    default_tone: str = "brand_default"

    # Feature flags por tipo de criação (ausente = habilitado)
    feature_flags: dict[str, bool] = {}

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    def validate_session_store_config(self) -> list[str]:
        """Valida backend de session store por ambiente.

        Em staging/prod, memory é proibido (instâncias múltiplas não compartilham estado).
        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        backend = self.session_store_backend.lower()

        valid_backends = {"memory", "redis"}
        if backend not in valid_backends:
            errors.append(
                f"SESSION_STORE_BACKEND '{backend}' inválido. Valores válidos: {valid_backends}"
            )

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append(
                "SESSION_STORE_BACKEND=memory é proibido em staging/production. "
                "Use 'redis' para compartilhar sessões entre instâncias."
            )

        if backend == "redis" and not self.redis_url:
            errors.append("SESSION_STORE_BACKEND=redis requer REDIS_URL configurado")

        if self.session_ttl_seconds <= 0:
            errors.append("SESSION_TTL_SECONDS deve ser > 0")

        if self.session_max_entries <= 0:
            errors.append("SESSION_MAX_ENTRIES deve ser > 0")

        return errors

    def validate_jobs_config(self) -> list[str]:
        """Valida configuração do dispatcher de jobs e da busca de assets."""
        errors: list[str] = []
        backend = self.jobs_backend.lower()

        if backend not in {"memory", "http"}:
            errors.append("JOBS_BACKEND inválido: use memory | http")

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append("JOBS_BACKEND=memory é proibido em staging/production")

        if backend == "http":
            if not self.jobs_api_base_url:
                errors.append("JOBS_BACKEND=http requer JOBS_API_BASE_URL configurado")
            elif (self.is_staging or self.is_production) and self.jobs_api_base_url.startswith(
                "http://"
            ):
                errors.append("JOBS_API_BASE_URL deve usar https em staging/production")

        if self.jobs_max_retries < 0:
            errors.append("JOBS_MAX_RETRIES deve ser >= 0")

        return errors

    def validate_dialogue_config(self) -> list[str]:
        """Valida parâmetros do diálogo (teto de perguntas, tom padrão)."""
        from alfie_assistant.domain.enums import TonePack

        errors: list[str] = []
        if self.question_budget < 1:
            errors.append("QUESTION_BUDGET deve ser >= 1")
        if self.default_tone not in {t.value for t in TonePack}:
            errors.append(f"DEFAULT_TONE '{self.default_tone}' desconhecido")
        return errors

    def validate_all(self) -> list[str]:
        """Agrega todas as validações de startup."""
        return (
            self.validate_session_store_config()
            + self.validate_jobs_config()
            + self.validate_dialogue_config()
        )

    def model_post_init(self, __context: Any) -> None:
        """Registra o ambiente carregado (sem valores sensíveis)."""
        logger: logging.Logger = get_logger(__name__)
        logger.debug(
            "Settings loaded",
            extra={
                "environment": self.environment,
                "session_store_backend": self.session_store_backend,
                "jobs_backend": self.jobs_backend,
            },
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
