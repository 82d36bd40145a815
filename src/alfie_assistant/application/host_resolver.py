"""Resolve a variante de produto (designer | editorial) a partir do request.

Puro e total: qualquer metadado ausente ou desconhecido resulta em `designer`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from alfie_assistant.domain.enums import HostVariant

HOST_HEADER = "x-alfie-host"


def _parse_variant(value: Any) -> HostVariant | None:
    if not isinstance(value, str):
        return None
    try:
        return HostVariant(value.strip().lower())
    except ValueError:
        return None


def _lower_keys(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    return {str(k).lower(): v for k, v in value.items()}


def resolve_host(metadata: Mapping[str, Any] | None) -> HostVariant:
    """Mapeia metadados do request para uma HostVariant.

    Ordem de precedência:
    1. `host_variant` explícito
    2. header `x-alfie-host`
    3. query param `host`
    4. hostname ou path contendo "editorial"
    """
    if not metadata:
        return HostVariant.DESIGNER

    explicit = _parse_variant(metadata.get("host_variant"))
    if explicit:
        return explicit

    header = _parse_variant(_lower_keys(metadata.get("headers")).get(HOST_HEADER))
    if header:
        return header

    query = _parse_variant(_lower_keys(metadata.get("query")).get("host"))
    if query:
        return query

    for key in ("hostname", "path"):
        value = metadata.get(key)
        if isinstance(value, str) and "editorial" in value.lower():
            return HostVariant.EDITORIAL

    return HostVariant.DESIGNER
