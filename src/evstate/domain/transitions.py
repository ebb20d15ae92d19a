"""Tabela de transições e validação pura.

- TRANSITIONS[state] = sequência de estados alcançáveis a partir de state
- None (ou sequência vazia) marca estado terminal
- Validação pura: sem side effects, nunca lança exceção
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from enum import Enum
from typing import TypeAlias

StateName: TypeAlias = Hashable
TransitionTable: TypeAlias = Mapping[StateName, Sequence[StateName] | None]


class Wildcard(Enum):
    """Chave reservada do registro de handlers.

    Membro de Enum (não StrEnum): nunca é igual a um nome de estado real,
    nem mesmo à string "anyStateChange".
    """

    ANY = "anyStateChange"

    def __repr__(self) -> str:
        return "ANY"


ANY = Wildcard.ANY
"""Handlers registrados em ANY disparam em toda transição bem-sucedida."""


def known_states_of(table: TransitionTable) -> tuple[StateName, ...]:
    """Retorna os estados conhecidos (chaves da tabela), na ordem da tabela."""
    return tuple(table)


def targets_of(table: TransitionTable, state: StateName) -> tuple[StateName, ...]:
    """Retorna os destinos diretos de `state`; vazio se desconhecido ou terminal."""
    try:
        targets = table.get(state)
    except TypeError:
        # state não-hashable nunca é chave da tabela
        return ()
    return tuple(targets) if targets else ()


def is_terminal(table: TransitionTable, state: StateName) -> bool:
    """True se `state` é conhecido e não possui transições de saída."""
    return state in known_states_of(table) and not targets_of(table, state)


def validate_transition(
    table: TransitionTable,
    current: StateName,
    target: StateName,
    known_states: Sequence[StateName] | None = None,
) -> tuple[bool, str]:
    """Valida se `current` → `target` é permitido pela tabela.

    `known_states` permite validar contra um snapshot dos estados conhecidos
    (a engine usa o conjunto fixado na construção); padrão: chaves da tabela.

    Retorna:
    - (True, ""): transição válida
    - (False, motivo): destino desconhecido ou inalcançável

    As mensagens são as mesmas entregues ao error handler da engine.
    """
    if known_states is None:
        known_states = known_states_of(table)

    if target not in known_states:
        return False, f"Invalid state requested: {target}"

    if target not in targets_of(table, current):
        return False, f"Invalid transition from {current} requested: {target}"

    return True, ""
