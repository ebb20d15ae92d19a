"""Configurações centralizadas do evstate.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente (EVSTATE_*)
- get_settings: função cacheada para obter instância única

Uso típico:
    from evstate.config import get_settings
"""

from evstate.config.settings import (
    VALID_ERROR_HANDLER_MODES,
    VALID_LOG_FORMATS,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "VALID_ERROR_HANDLER_MODES",
    "VALID_LOG_FORMATS",
]
