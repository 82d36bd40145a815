"""Camada de infraestrutura: adapters para serviços externos.

Este módulo exporta as factories principais:

- Session: InMemorySessionStore, RedisSessionStore, create_session_store
- Jobs: HttpJobDispatcher, HttpAssetSearch, InMemoryJobQueue, create_job_backends
- HTTP: HttpClient

Uso típico:
    from alfie_assistant.infra import create_job_backends, create_session_store

Infraestrutura não decide regra de diálogo; erros sobem tipados para a
camada de aplicação, que os converte em resposta ao usuário.
"""

from alfie_assistant.infra.http import HttpClient, HttpClientConfig, HttpError
from alfie_assistant.infra.jobs_contract import AssetSearchError, JobDispatchError
from alfie_assistant.infra.jobs_factory import create_http_client, create_job_backends
from alfie_assistant.infra.jobs_http import HttpAssetSearch, HttpJobDispatcher
from alfie_assistant.infra.jobs_memory import InMemoryJobQueue
from alfie_assistant.infra.session_contract import SessionStore, SessionStoreError
from alfie_assistant.infra.session_store import create_session_store
from alfie_assistant.infra.session_store_memory import InMemorySessionStore
from alfie_assistant.infra.session_store_redis import RedisSessionStore

__all__ = [
    # Session
    "SessionStore",
    "SessionStoreError",
    "InMemorySessionStore",
    "RedisSessionStore",
    "create_session_store",
    # Jobs
    "JobDispatchError",
    "AssetSearchError",
    "HttpJobDispatcher",
    "HttpAssetSearch",
    "InMemoryJobQueue",
    "create_job_backends",
    # HTTP
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "create_http_client",
]
