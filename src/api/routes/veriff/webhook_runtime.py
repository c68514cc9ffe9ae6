"""Processamento de webhooks em background (modo async).

Cada task fica registrada com a rota, a sessão e o correlation_id do
webhook que a originou; assim falhas e cancelamentos no shutdown são
logados com a sessão que deixou de ser sincronizada.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 20


@dataclass(frozen=True, slots=True)
class ProcessingJob:
    route: str
    session_id: str
    correlation_id: str

    def log_fields(self) -> dict[str, str]:
        return {
            "route": self.route,
            "session_id": self.session_id,
            "correlation_id": self.correlation_id,
        }


class ProcessingTaskRegistry:
    """Tasks em andamento, com no máximo `max_concurrent` executando ao mesmo tempo.

    As excedentes ficam aguardando o semáforo; o webhook já foi respondido.
    """

    def __init__(self, max_concurrent: int = MAX_CONCURRENT_TASKS) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._jobs: dict[asyncio.Task[None], ProcessingJob] = {}

    def pending_sessions(self) -> list[str]:
        return sorted(job.session_id for job in self._jobs.values())

    def schedule(self, job: ProcessingJob, coroutine: Awaitable[None]) -> asyncio.Task[None]:
        task = asyncio.create_task(self._run(coroutine))
        self._jobs[task] = job
        task.add_done_callback(self._on_done)
        logger.info(
            "webhook_processing_scheduled",
            extra={**job.log_fields(), "mode": "async", "pending_tasks": len(self._jobs)},
        )
        return task

    async def _run(self, coroutine: Awaitable[None]) -> None:
        async with self._semaphore:
            await coroutine

    def _on_done(self, task: asyncio.Task[None]) -> None:
        job = self._jobs.pop(task)
        # Cancelamento é logado pelo drain
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "webhook_processing_task_failed",
                extra={**job.log_fields(), "error_type": type(exc).__name__},
            )

    async def drain(self, timeout_seconds: float) -> list[str]:
        """Aguarda as tasks pendentes e cancela as que passarem do prazo.

        Returns:
            session_ids cujas tasks foram canceladas.
        """
        if not self._jobs:
            return []

        logger.info(
            "webhook_processing_shutdown_wait",
            extra={"pending_tasks": len(self._jobs), "timeout_seconds": timeout_seconds},
        )
        _, overdue = await asyncio.wait(list(self._jobs), timeout=timeout_seconds)
        if not overdue:
            return []

        dropped = sorted(self._jobs[task].session_id for task in overdue)
        for task in overdue:
            task.cancel()
        await asyncio.gather(*overdue, return_exceptions=True)
        logger.warning(
            "webhook_processing_dropped",
            extra={"cancelled_tasks": len(dropped), "session_ids": dropped},
        )
        return dropped


_registry = ProcessingTaskRegistry()


def schedule_processing_task(
    *,
    route: str,
    session_id: str,
    correlation_id: str,
    coroutine: Awaitable[None],
) -> asyncio.Task[None]:
    """Agenda o processamento de um webhook já respondido."""
    return _registry.schedule(
        ProcessingJob(route=route, session_id=session_id, correlation_id=correlation_id),
        coroutine,
    )


async def drain_processing_tasks(timeout_seconds: float = 30.0) -> list[str]:
    """Shutdown: espera o processamento pendente; devolve as sessões descartadas."""
    return await _registry.drain(timeout_seconds)
