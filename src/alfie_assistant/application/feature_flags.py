"""Feature flags por tipo de criação (padrão: habilitado)."""

from __future__ import annotations

from collections.abc import Mapping

from alfie_assistant.domain.enums import CreationKind


class FeatureFlags:
    """Lookup de flags; chave ausente ou irreconhecível vale como habilitada."""

    def __init__(self, flags: Mapping[str, bool] | None = None) -> None:
        self._flags = {str(k).strip().lower(): bool(v) for k, v in (flags or {}).items()}

    def is_enabled(self, kind: CreationKind | str | None) -> bool:
        if kind is None:
            return True
        key = kind.value if isinstance(kind, CreationKind) else str(kind).strip().lower()
        return self._flags.get(key, True)
