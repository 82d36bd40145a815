"""Configurações centralizadas do alfie_assistant.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- DEFAULT_QUESTION_BUDGET: teto padrão de perguntas por brief

Uso típico:
    from alfie_assistant.config import get_settings
"""

from alfie_assistant.config.settings import (
    DEFAULT_QUESTION_BUDGET,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_QUESTION_BUDGET",
]
