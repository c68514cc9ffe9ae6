"""correlation_id por webhook, propagado para todos os logs.

O valor vem do header `x-correlation-id` quando a Veriff (ou um proxy) o
envia; caso contrário um UUID v4 é gerado. Fica em um ContextVar, então
tasks criadas durante o request herdam o mesmo id.

Uso:
    with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as correlation_id:
        ...
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

CORRELATION_ID_HEADER = "x-correlation-id"
_MAX_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual ("" fora de um webhook)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; valores vazios viram um UUID novo.

    Valores maiores que 128 caracteres são truncados para não inflar os logs.
    """
    value = (correlation_id or "").strip()[:_MAX_LENGTH] or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define o correlation_id durante o bloco e restaura o anterior ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
