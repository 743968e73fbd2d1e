"""Configuración centralizada de logging con structlog.

Salida de consola para uso interactivo, líneas JSON para pipelines de CI.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Etiqueta cada entrada con el nombre de la aplicación."""

    event_dict["app"] = "icm_jobrunner"
    return event_dict


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configura el logging estructurado.

    Args:
        log_level: nivel de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: True para líneas JSON, False para el renderer de consola

    Example:
        >>> setup_logging(log_level="DEBUG")
        >>> setup_logging(log_level="INFO", json_logs=True)  # CI
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Devuelve un logger estructurado.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("job_started", job="MyJob")
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
