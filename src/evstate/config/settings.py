"""Configurações da engine via variáveis de ambiente (prefixo EVSTATE_)."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_FORMATS = frozenset({"json", "text"})
VALID_ERROR_HANDLER_MODES = frozenset({"raise", "log"})


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="EVSTATE_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "evstate"
    environment: str = "development"

    # Observabilidade
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # Engine FSM
    strict_initial_state: bool = False  # Rejeita estado inicial fora da tabela
    error_handler_mode: str = "raise"  # raise | log

    def validate_logging_config(self) -> list[str]:
        """Valida formato e nível de log.

        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.log_format.lower() not in VALID_LOG_FORMATS:
            errors.append(
                f"EVSTATE_LOG_FORMAT '{self.log_format}' inválido. "
                f"Valores válidos: {sorted(VALID_LOG_FORMATS)}"
            )
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"EVSTATE_LOG_LEVEL '{self.log_level}' inválido")
        return errors

    def validate_engine_config(self) -> list[str]:
        """Valida modo do error handler padrão."""
        errors: list[str] = []
        if self.error_handler_mode.lower() not in VALID_ERROR_HANDLER_MODES:
            errors.append(
                f"EVSTATE_ERROR_HANDLER_MODE '{self.error_handler_mode}' inválido. "
                f"Valores válidos: {sorted(VALID_ERROR_HANDLER_MODES)}"
            )
        return errors

    def validate_all(self) -> list[str]:
        """Agrega todas as validações."""
        return self.validate_logging_config() + self.validate_engine_config()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    Testes devem chamar `get_settings.cache_clear()` após alterar o ambiente.
    """
    return Settings()
