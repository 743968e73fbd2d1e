"""Lanza jobs de Intershop Commerce Management por REST y espera a que terminen."""

from __future__ import annotations

__version__ = "1.0.0"

from icm_jobrunner.core.config import JobRunnerSettings
from icm_jobrunner.core.domain.assertions import AssertionResult
from icm_jobrunner.core.domain.exceptions import (
    CommunicationError,
    ConfigurationError,
    JobRunnerError,
    JobTimeoutError,
    TransportInterrupted,
)
from icm_jobrunner.core.domain.models import (
    JobInfo,
    JobOutcome,
    JobRunResult,
    ProcessInfo,
    Server,
    ServerProtocol,
    User,
)
from icm_jobrunner.core.services.job_runner import JobRunner

__all__ = [
    "AssertionResult",
    "CommunicationError",
    "ConfigurationError",
    "JobInfo",
    "JobOutcome",
    "JobRunResult",
    "JobRunner",
    "JobRunnerError",
    "JobRunnerSettings",
    "JobTimeoutError",
    "ProcessInfo",
    "Server",
    "ServerProtocol",
    "TransportInterrupted",
    "User",
    "__version__",
]
