"""Agregação dos dados de uma sessão Veriff.

Dispara as chamadas por sessão em paralelo e embrulha cada resultado em um
`Outcome`. A falha de uma chamada não interrompe as demais e nenhuma exceção
atravessa `aggregate_session`: o registro volta completo mesmo se todos os
campos falharem. Cabe ao chamador decidir que "tudo falhou" significa
"sessão não encontrada".

A mídia por attempt é uma segunda onda (`fetch_attempt_media`), disparada
depois que a lista de attempts é conhecida.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from config.logging import log_degraded_outcome

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

    from api.connectors.veriff.models import Attempt, MediaList
    from app.protocols import VeriffClientProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNAVAILABLE_REASON = "unavailable"


class OutcomeStatus(StrEnum):
    FULFILLED = "fulfilled"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Resultado de uma chamada independente: valor ou motivo da falha."""

    status: OutcomeStatus
    value: T | None = None
    reason: str | None = None

    @classmethod
    def fulfilled(cls, value: T) -> Outcome[T]:
        return cls(status=OutcomeStatus.FULFILLED, value=value)

    @classmethod
    def failed(cls, reason: str) -> Outcome[T]:
        return cls(status=OutcomeStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.FULFILLED


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """Registro agregado de uma sessão (forma fixa, um Outcome por campo).

    A ordem dos campos é a ordem de disparo das chamadas.
    """

    session_id: str
    decision: Outcome[dict[str, Any]]
    person: Outcome[dict[str, Any]]
    media_list: Outcome[MediaList]
    watchlist: Outcome[dict[str, Any]]
    ine_registry: Outcome[dict[str, Any]]
    curp_registry: Outcome[dict[str, Any]]
    attempts: Outcome[list[Attempt]]

    def outcomes(self) -> dict[str, Outcome[Any]]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if item.name != "session_id"
        }

    @property
    def is_empty(self) -> bool:
        """True quando nenhum campo foi obtido."""
        return not any(outcome.ok for outcome in self.outcomes().values())

    @property
    def person_name(self) -> str | None:
        """Nome completo da pessoa, ou None sem primeiro nome."""
        person = self.person.value
        if not isinstance(person, dict):
            return None
        first_name = person.get("firstName")
        if not first_name:
            return None
        last_name = person.get("lastName")
        return f"{first_name} {last_name}" if last_name else str(first_name)

    @property
    def decision_code(self) -> int | None:
        decision = self.decision.value
        verification = decision.get("verification") if isinstance(decision, dict) else None
        code = verification.get("code") if isinstance(verification, dict) else None
        return code if isinstance(code, int) else None

    @property
    def attempt_list(self) -> list[Attempt]:
        return list(self.attempts.value or [])


def to_outcome(result: T | BaseException | None) -> Outcome[T]:
    """Converte um resultado de `asyncio.gather(return_exceptions=True)`."""
    if isinstance(result, BaseException):
        return Outcome.failed(type(result).__name__)
    if result is None:
        return Outcome.failed(UNAVAILABLE_REASON)
    return Outcome.fulfilled(result)


async def settle(*calls: Awaitable[Any]) -> list[Outcome[Any]]:
    """Aguarda todas as chamadas e devolve um Outcome por chamada, na ordem."""
    results = await asyncio.gather(*calls, return_exceptions=True)
    for result in results:
        # Cancelamento do chamador não vira Outcome
        if isinstance(result, asyncio.CancelledError):
            raise result
    return [to_outcome(result) for result in results]


async def aggregate_session(
    client: VeriffClientProtocol,
    session_id: str,
    version: str,
) -> SessionRecord:
    """Busca decisão, pessoa, mídia, watchlist, registries e attempts.

    Args:
        client: Cliente da Station API.
        session_id: Sessão Veriff.
        version: Versão dos registry checks (INE/CURP).

    Returns:
        SessionRecord com um Outcome por campo; nunca levanta exceção.
    """
    outcomes = await settle(
        client.get_session_decision(session_id),
        client.get_session_person(session_id),
        client.get_session_media(session_id),
        client.get_watchlist_screening(session_id),
        client.get_ine_registry(session_id, version),
        client.get_curp_registry(session_id, version),
        client.get_session_attempts(session_id),
    )
    record = SessionRecord(session_id, *outcomes)

    for name, outcome in record.outcomes().items():
        if not outcome.ok:
            log_degraded_outcome(logger, name, outcome.reason, session_id)

    logger.info(
        "session_aggregated",
        extra={
            "session_id": session_id,
            "fulfilled": sum(outcome.ok for outcome in outcomes),
            "total": len(outcomes),
        },
    )
    return record


async def fetch_attempt_media(
    client: VeriffClientProtocol,
    attempts: Iterable[Attempt],
) -> dict[str, Outcome[MediaList]]:
    """Segunda onda: lista de mídia de cada attempt, em paralelo.

    Returns:
        Mapa attempt_id → Outcome, na ordem dos attempts.
    """
    attempt_ids = [attempt.id for attempt in attempts]
    outcomes = await settle(*(client.get_attempt_media(attempt_id) for attempt_id in attempt_ids))
    for attempt_id, outcome in zip(attempt_ids, outcomes, strict=True):
        if not outcome.ok:
            log_degraded_outcome(logger, f"attempt_media:{attempt_id}", outcome.reason)
    return dict(zip(attempt_ids, outcomes, strict=True))
