"""Testes de Settings e das validações de startup."""

from __future__ import annotations

import pytest

from alfie_assistant.config import DEFAULT_QUESTION_BUDGET, Settings, get_settings


class TestSettingsDefaults:
    """Valores padrão seguros para desenvolvimento."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("ENVIRONMENT", "SESSION_STORE_BACKEND", "JOBS_BACKEND", "QUESTION_BUDGET"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings()

        assert settings.session_store_backend == "memory"
        assert settings.session_ttl_seconds == 7200
        assert settings.jobs_max_retries == 0
        assert settings.question_budget == DEFAULT_QUESTION_BUDGET == 5
        assert settings.feature_flags == {}
        assert settings.is_development
        assert settings.validate_all() == []

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUESTION_BUDGET", "3")
        monkeypatch.setenv("FEATURE_FLAGS", '{"video": false}')
        monkeypatch.setenv("JOBS_BACKEND", "http")
        monkeypatch.setenv("JOBS_API_BASE_URL", "https://jobs.test")

        settings = get_settings()

        assert settings.question_budget == 3
        assert settings.feature_flags == {"video": False}
        assert settings.jobs_backend == "http"
        assert get_settings() is settings


class TestSettingsValidation:
    """Cada validate_* devolve lista de erros."""

    def test_memory_forbidden_in_production(self) -> None:
        settings = Settings(
            environment="production",
            session_store_backend="memory",
            jobs_backend="memory",
        )

        assert settings.is_production
        assert any("memory" in e for e in settings.validate_session_store_config())
        assert any("memory" in e for e in settings.validate_jobs_config())

    def test_redis_requires_url(self) -> None:
        settings = Settings(session_store_backend="redis", redis_url=None)
        assert any("REDIS_URL" in e for e in settings.validate_session_store_config())

    def test_http_jobs_require_base_url(self) -> None:
        settings = Settings(jobs_backend="http", jobs_api_base_url=None)
        assert any("JOBS_API_BASE_URL" in e for e in settings.validate_jobs_config())

    def test_https_required_outside_development(self) -> None:
        settings = Settings(
            environment="staging",
            session_store_backend="redis",
            redis_url="redis://cache:6379/0",
            jobs_backend="http",
            jobs_api_base_url="http://jobs.internal",
        )
        assert any("https" in e for e in settings.validate_jobs_config())

    def test_dialogue_validation(self) -> None:
        settings = Settings(question_budget=0, default_tone="pirate")
        errors = settings.validate_dialogue_config()

        assert any("QUESTION_BUDGET" in e for e in errors)
        assert any("DEFAULT_TONE" in e for e in errors)
