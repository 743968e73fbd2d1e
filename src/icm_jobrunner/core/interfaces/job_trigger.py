"""Contratos del runner de jobs.

- `JobTrigger` es lo que consume la orquestación externa (CLI, plugins de build).
- `JobLogger` es el colaborador de logging: cualquier logger con niveles sirve
  (structlog, logging estándar o un doble de test).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from icm_jobrunner.core.domain.models import JobInfo, JobRunResult


@runtime_checkable
class JobTrigger(Protocol):
    """Contrato mínimo para disparar un job y esperar a que termine."""

    def trigger_job(self, job_name: str) -> JobInfo:
        """Dispara el job y devuelve el último `JobInfo` (lanza `JobRunnerError`)."""

        ...

    def run_job(self, job_name: str) -> JobRunResult:
        """Igual que `trigger_job`, pero devuelve un resultado discriminado."""

        ...


class JobLogger(Protocol):
    def debug(self, event: str, *args: Any, **kwargs: Any) -> Any: ...

    def info(self, event: str, *args: Any, **kwargs: Any) -> Any: ...

    def warning(self, event: str, *args: Any, **kwargs: Any) -> Any: ...
