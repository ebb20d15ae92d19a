"""Engine FSM orientada a eventos — validação + dispatch de handlers.

- Estado vive na engine, nunca no payload entregue aos handlers
- Handlers ANY executam antes dos handlers do estado destino
- current_state só muda depois que todos os handlers retornam sem erro
- Transição inválida vai para o error handler (ou NoErrorHandlerError)
- Exceção de handler propaga sem modificação; sem rollback de side effects
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from evstate.domain.errors import NoErrorHandlerError, UnknownStateError
from evstate.domain.transitions import (
    ANY,
    StateName,
    TransitionTable,
    Wildcard,
    known_states_of,
    targets_of,
    validate_transition,
)
from evstate.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

Handler = Callable[..., Any]
ErrorHandler = Callable[[str], Any]


def _same_handler(existing: Handler, handler: Handler) -> bool:
    """Comparação por identidade.

    Bound methods são recriados a cada acesso (`obj.m is obj.m` é False),
    então comparamos a função e a instância subjacentes.
    """
    if existing is handler:
        return True
    if inspect.ismethod(existing) and inspect.ismethod(handler):
        return existing.__func__ is handler.__func__ and existing.__self__ is handler.__self__
    return False


def _discard_awaitable(result: Any) -> None:
    # Coroutine nunca aguardada: fecha para não emitir RuntimeWarning
    close = getattr(result, "close", None)
    if callable(close):
        close()


class FSM:
    """Máquina de estados finitos com handlers por estado destino."""

    ANY = ANY

    def __init__(
        self,
        transitions: TransitionTable,
        initial_state: StateName,
        *,
        strict: bool = False,
    ) -> None:
        """Inicializa FSM.

        Args:
            transitions: estado → sequência de estados alcançáveis (None = terminal)
            initial_state: estado corrente inicial
            strict: se True, rejeita initial_state fora da tabela
        """
        self._allowed_transitions = transitions
        self._known_states = known_states_of(transitions)
        self._error_handler: ErrorHandler | None = None

        if strict and initial_state not in self._known_states:
            raise UnknownStateError(
                f"Unable to start from unknown state {initial_state}!", initial_state
            )
        self._current_state = initial_state

        self._handlers: dict[StateName | Wildcard, list[Handler]] = {ANY: []}
        for state_name in self._known_states:
            self._handlers[state_name] = []

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    @property
    def current_state(self) -> StateName:
        return self._current_state

    @property
    def known_states(self) -> tuple[StateName, ...]:
        return self._known_states

    @property
    def error_handler(self) -> ErrorHandler | None:
        return self._error_handler

    def is_valid(self, state: StateName) -> bool:
        """Verifica se `state` é um estado conhecido."""
        return state in self._known_states

    def can_transition_to(self, state: StateName) -> bool:
        """Verifica se `state` é alcançável a partir do estado corrente."""
        return state in targets_of(self._allowed_transitions, self._current_state)

    def allowed_transitions(self) -> tuple[StateName, ...]:
        """Destinos diretos do estado corrente (vazio se terminal)."""
        return targets_of(self._allowed_transitions, self._current_state)

    def handlers_for(self, state: StateName | Wildcard) -> tuple[Handler, ...]:
        """Cópia dos handlers registrados para `state` (ou ANY)."""
        return tuple(self._handlers.get(state, ()))

    # ------------------------------------------------------------------
    # Registro
    # ------------------------------------------------------------------

    def register(self, state: StateName | Wildcard, handler: Handler) -> FSM:
        """Adiciona handler para o estado (ou ANY). Retorna self para chaining.

        Raises:
            UnknownStateError: estado não-ANY fora da tabela
        """
        if state is not ANY and not self.is_valid(state):
            raise UnknownStateError(
                f"Unable to hook up handler to unknown state {state}!", state
            )

        self._handlers.setdefault(state, []).append(handler)
        logger.debug(
            "FSM handler registered",
            extra={"state": str(state), "handlers_count": len(self._handlers[state])},
        )
        return self

    def unregister(self, state: StateName | Wildcard, handler: Handler) -> FSM:
        """Remove todas as ocorrências de handler. No-op se ausente.

        Raises:
            UnknownStateError: estado não-ANY fora da tabela
        """
        if state is not ANY and not self.is_valid(state):
            raise UnknownStateError(
                f"Unable to remove handler from unknown state {state}!", state
            )

        existing = self._handlers.get(state, [])
        self._handlers[state] = [h for h in existing if not _same_handler(h, handler)]
        logger.debug(
            "FSM handler unregistered",
            extra={
                "state": str(state),
                "removed": len(existing) - len(self._handlers[state]),
            },
        )
        return self

    def set_error_handler(self, handler: ErrorHandler) -> FSM:
        """Define (ou substitui) o error handler. Recebe a mensagem de erro."""
        self._error_handler = handler
        return self

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, state: StateName, *args: Any, **kwargs: Any) -> FSM | bool:
        """Transiciona para `state` executando os handlers registrados.

        Args:
            state: estado destino
            *args, **kwargs: repassados a cada handler

        Returns:
            self em caso de sucesso; False se a transição foi rejeitada
            e tratada pelo error handler

        Raises:
            NoErrorHandlerError: transição inválida sem error handler
            TypeError: handler retornou awaitable (use adispatch); estado não muda
            Exception: qualquer erro levantado por um handler (sem alteração)
        """
        if not self._accepts(state):
            return False

        for handler in self._pending_handlers(state):
            try:
                result = handler(*args, **kwargs)
                if inspect.isawaitable(result):
                    _discard_awaitable(result)
                    raise TypeError(
                        f"Handler {handler!r} returned an awaitable; use adispatch() "
                        "for asynchronous handlers"
                    )
            except Exception as exc:
                self._log_handler_failure(state, exc)
                raise

        self._commit(state)
        return self

    async def adispatch(self, state: StateName, *args: Any, **kwargs: Any) -> FSM | bool:
        """Versão assíncrona de dispatch.

        Handlers são chamados em ordem; se o retorno for awaitable, é
        aguardado antes do próximo handler. Handlers síncronos funcionam
        sem alteração. Mesmas regras de validação e atualização de estado.
        """
        if not self._accepts(state):
            return False

        for handler in self._pending_handlers(state):
            try:
                result = handler(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                self._log_handler_failure(state, exc)
                raise

        self._commit(state)
        return self

    def _accepts(self, state: StateName) -> bool:
        is_valid, error = validate_transition(
            self._allowed_transitions, self._current_state, state, self._known_states
        )
        if not is_valid:
            self._handle_error(error)
        return is_valid

    def _pending_handlers(self, state: StateName) -> list[Handler]:
        # Snapshot: handlers (des)registrados durante o dispatch não afetam esta rodada
        return [*self._handlers[ANY], *self._handlers.get(state, [])]

    def _commit(self, state: StateName) -> None:
        previous = self._current_state
        self._current_state = state
        logger.debug(
            "FSM transition applied",
            extra={"from_state": str(previous), "to_state": str(state)},
        )

    def _log_handler_failure(self, state: StateName, exc: Exception) -> None:
        logger.warning(
            "FSM handler failed",
            extra={
                "current_state": str(self._current_state),
                "target_state": str(state),
                "error": type(exc).__name__,
            },
        )

    def _handle_error(self, message: str) -> None:
        logger.debug(
            "FSM transition invalid",
            extra={
                "current_state": str(self._current_state),
                "error": message,
                "has_error_handler": self._error_handler is not None,
            },
        )
        if self._error_handler is None:
            raise NoErrorHandlerError(message)

        self._error_handler(message)

    def __repr__(self) -> str:
        return f"FSM(current_state={self._current_state!r}, known_states={len(self._known_states)})"
