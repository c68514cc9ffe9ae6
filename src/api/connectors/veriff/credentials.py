"""Pool de credenciais da Veriff com rotação em falha."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class CredentialPair:
    """Par (public key, shared secret) de uma integração Veriff."""

    public_key: str
    shared_secret: str = field(repr=False)


class CredentialPool:
    """Sequência ordenada de credenciais com um cursor "ativo".

    `rotate()` avança o cursor uma posição e volta ao início depois do
    último par. Nenhum par é removido: um par que falhou volta a ser usado
    após um ciclo completo. O cursor é protegido por lock; chamadas em voo
    que já capturaram o par anterior continuam válidas.
    """

    def __init__(self, pairs: Iterable[CredentialPair]) -> None:
        self._pairs = tuple(pairs)
        if not self._pairs:
            raise ValueError("CredentialPool exige ao menos um par de credenciais")
        self._active_index = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, api_keys: Iterable[tuple[str, str]]) -> CredentialPool:
        """Cria o pool a partir de pares (apiKey, sharedSecretKey)."""
        return cls(CredentialPair(public_key=key, shared_secret=secret) for key, secret in api_keys)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[CredentialPair]:
        return iter(self._pairs)

    @property
    def active_index(self) -> int:
        with self._lock:
            return self._active_index

    def current(self) -> CredentialPair:
        """Par ativo no momento da chamada."""
        with self._lock:
            return self._pairs[self._active_index]

    def snapshot(self) -> tuple[int, CredentialPair]:
        """Índice e par ativos lidos atomicamente."""
        with self._lock:
            return self._active_index, self._pairs[self._active_index]

    def rotate(self) -> None:
        """Avança exatamente uma posição (não idempotente)."""
        with self._lock:
            self._active_index = (self._active_index + 1) % len(self._pairs)
