"""Erros da engine FSM.

Hierarquia única com raiz em FSMError:
- UnknownStateError: registro/remoção de handler em estado desconhecido
- NoErrorHandlerError: transição inválida sem error handler configurado

Exceções levantadas pelos próprios handlers NÃO são encapsuladas aqui;
propagam sem modificação para quem chamou dispatch.
"""

from __future__ import annotations

from typing import Any


class FSMError(Exception):
    """Erro base da engine FSM."""


class UnknownStateError(FSMError):
    """Estado fora do conjunto de estados conhecidos da tabela."""

    def __init__(self, message: str, state: Any) -> None:
        super().__init__(message)
        self.state = state


class NoErrorHandlerError(FSMError):
    """Transição inválida solicitada sem error handler configurado.

    `message` preserva a mensagem original (a mesma que o error handler
    receberia), sem o prefixo.
    """

    def __init__(self, message: str) -> None:
        super().__init__(f"No error handlers present: {message}")
        self.message = message
