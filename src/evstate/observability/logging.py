"""Configuração de logging estruturado (JSON ou texto)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(service)s] %(message)s"


class ServiceNameFilter(logging.Filter):
    """Insere service no record de log.

    Importante: nunca adicionar payloads de handlers nos logs.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.service = self._service_name
        return True


def configure_logging(level: str, service_name: str, log_format: str = "json") -> None:
    """Configura logging com campos padrão do serviço.

    log_format: "json" (python-json-logger) ou "text" (formatter simples).
    """

    formatter: logging.Formatter
    if log_format == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        formatter = JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ServiceNameFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service."""

    return logging.getLogger(name)


def log_rejected_transition(
    logger: logging.Logger,
    message: str,
    current_state: object | None = None,
) -> None:
    """Log observável de transição rejeitada pela engine.

    Args:
        logger: Logger instance
        message: Mensagem gerada pela engine (ex: "Invalid state requested: x")
        current_state: Estado atual no momento da rejeição (quando conhecido)

    Exemplo:
        log_rejected_transition(logger, "Invalid state requested: nope", "draft")
    """
    extra: dict[str, object] = {
        "transition_rejected": True,
    }
    if current_state is not None:
        extra["current_state"] = str(current_state)

    logger.warning(message, extra=extra)
