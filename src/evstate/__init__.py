"""evstate — máquinas de estados finitos orientadas a eventos.

Exporta:
- FSM: engine de validação + dispatch de handlers
- ANY: chave curinga (handlers de toda transição)
- build_fsm: factory configurada via Settings
- Erros: FSMError, UnknownStateError, NoErrorHandlerError
"""

from evstate.application.factories.fsm_factory import build_fsm
from evstate.application.fsm_engine import FSM
from evstate.domain.errors import FSMError, NoErrorHandlerError, UnknownStateError
from evstate.domain.transitions import ANY, validate_transition

__all__ = [
    "FSM",
    "ANY",
    "build_fsm",
    "validate_transition",
    "FSMError",
    "UnknownStateError",
    "NoErrorHandlerError",
]
