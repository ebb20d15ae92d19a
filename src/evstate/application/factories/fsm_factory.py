"""Factory para construção de FSM a partir das Settings.

Responsabilidades:
- Conhecer settings
- Aplicar strict_initial_state e error_handler_mode
- Retornar uma instância de `FSM`

Não conter lógica de transição.
"""

from __future__ import annotations

from evstate.application.fsm_engine import FSM, ErrorHandler
from evstate.config.settings import Settings, get_settings
from evstate.domain.transitions import StateName, TransitionTable
from evstate.observability.logging import get_logger, log_rejected_transition

logger = get_logger(__name__)


def build_fsm(
    transitions: TransitionTable,
    initial_state: StateName,
    *,
    settings: Settings | None = None,
    error_handler: ErrorHandler | None = None,
) -> FSM:
    """Constrói e retorna `FSM` usando settings.

    `error_handler` explícito tem prioridade; quando ausente, o modo
    configurado decide: "log" registra um handler que loga a rejeição,
    "raise" não registra nada (dispatch inválido levanta NoErrorHandlerError).

    Raises:
        ValueError: settings com error_handler_mode inválido
    """
    settings = settings or get_settings()

    errors = settings.validate_engine_config()
    if errors:
        raise ValueError("; ".join(errors))

    fsm = FSM(transitions, initial_state, strict=settings.strict_initial_state)

    if error_handler is not None:
        fsm.set_error_handler(error_handler)
    elif settings.error_handler_mode.lower() == "log":
        fsm.set_error_handler(
            lambda message: log_rejected_transition(logger, message, fsm.current_state)
        )

    logger.debug(
        "factory: built FSM",
        extra={
            "known_states": len(fsm.known_states),
            "strict": settings.strict_initial_state,
            "error_handler_mode": settings.error_handler_mode,
        },
    )
    return fsm
