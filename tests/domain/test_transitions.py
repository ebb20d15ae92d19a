"""Testes da validação pura de transições."""

from __future__ import annotations

from evstate.domain.transitions import (
    ANY,
    Wildcard,
    is_terminal,
    known_states_of,
    targets_of,
    validate_transition,
)

TABLE = {
    "a": ["b", "c"],
    "b": ["a"],
    "c": [],
    "d": None,
}


class TestTableQueries:
    """Consultas sobre a tabela."""

    def test_known_states_in_table_order(self) -> None:
        assert known_states_of(TABLE) == ("a", "b", "c", "d")

    def test_targets_of(self) -> None:
        assert targets_of(TABLE, "a") == ("b", "c")
        assert targets_of(TABLE, "c") == ()
        assert targets_of(TABLE, "d") == ()
        assert targets_of(TABLE, "missing") == ()

    def test_targets_of_unhashable_state(self) -> None:
        assert targets_of(TABLE, ["a"]) == ()

    def test_is_terminal(self) -> None:
        """Lista vazia e None marcam terminais; desconhecido não é terminal."""
        assert is_terminal(TABLE, "c") is True
        assert is_terminal(TABLE, "d") is True
        assert is_terminal(TABLE, "a") is False
        assert is_terminal(TABLE, "missing") is False


class TestValidateTransition:
    """validate_transition nunca lança exceção."""

    def test_valid(self) -> None:
        assert validate_transition(TABLE, "a", "c") == (True, "")

    def test_unknown_target(self) -> None:
        assert validate_transition(TABLE, "a", "zzz") == (
            False,
            "Invalid state requested: zzz",
        )

    def test_unreachable_target(self) -> None:
        assert validate_transition(TABLE, "b", "c") == (
            False,
            "Invalid transition from b requested: c",
        )

    def test_from_terminal(self) -> None:
        ok, error = validate_transition(TABLE, "d", "a")
        assert ok is False
        assert error == "Invalid transition from d requested: a"


class TestWildcard:
    def test_any_never_equals_state_name(self) -> None:
        assert ANY is Wildcard.ANY
        assert ANY != "anyStateChange"
        assert ANY.value == "anyStateChange"
        assert repr(ANY) == "ANY"


class TestValidateAgainstSnapshot:
    def test_known_states_override_table_keys(self) -> None:
        """Destino ausente do snapshot é desconhecido mesmo presente na tabela."""
        assert validate_transition(TABLE, "a", "b", known_states=("a",)) == (
            False,
            "Invalid state requested: b",
        )
        assert validate_transition(TABLE, "a", "b", known_states=("a", "b")) == (True, "")
