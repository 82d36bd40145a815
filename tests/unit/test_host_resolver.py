"""Testes de resolução da variante de produto."""

from __future__ import annotations

import pytest

from alfie_assistant.application.host_resolver import HOST_HEADER, resolve_host
from alfie_assistant.domain.enums import HostVariant


class TestResolveHost:
    """Precedência: explícito > header > query > hostname/path."""

    def test_defaults_to_designer(self) -> None:
        assert resolve_host(None) == HostVariant.DESIGNER
        assert resolve_host({}) == HostVariant.DESIGNER

    def test_explicit_key_wins(self) -> None:
        metadata = {
            "host_variant": "designer",
            "headers": {HOST_HEADER: "editorial"},
            "hostname": "editorial.alfie.app",
        }
        assert resolve_host(metadata) == HostVariant.DESIGNER

    def test_header_is_case_insensitive(self) -> None:
        assert resolve_host({"headers": {"X-Alfie-Host": "Editorial"}}) == HostVariant.EDITORIAL

    def test_header_before_query(self) -> None:
        metadata = {"headers": {HOST_HEADER: "designer"}, "query": {"host": "editorial"}}
        assert resolve_host(metadata) == HostVariant.DESIGNER

    def test_query_param(self) -> None:
        assert resolve_host({"query": {"host": "editorial"}}) == HostVariant.EDITORIAL

    @pytest.mark.parametrize(
        "metadata",
        [{"hostname": "editorial.alfie.app"}, {"path": "/apps/editorial/chat"}],
    )
    def test_hostname_or_path(self, metadata) -> None:
        assert resolve_host(metadata) == HostVariant.EDITORIAL

    @pytest.mark.parametrize(
        "metadata",
        [
            {"host_variant": "studio"},
            {"headers": "not-a-mapping"},
            {"query": {"host": 42}},
            {"hostname": None},
        ],
    )
    def test_unrecognized_values_fall_back(self, metadata) -> None:
        assert resolve_host(metadata) == HostVariant.DESIGNER
