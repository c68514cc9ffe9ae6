"""Serviços de aplicação.

Orquestração reutilizável pelos use cases (sem IO direto).
"""

from app.services.session_aggregator import (
    Outcome,
    OutcomeStatus,
    SessionRecord,
    aggregate_session,
    fetch_attempt_media,
)

__all__ = [
    "Outcome",
    "OutcomeStatus",
    "SessionRecord",
    "aggregate_session",
    "fetch_attempt_media",
]
