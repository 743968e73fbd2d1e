"""Taxonomía de errores del runner.

Cada fallo de una operación de trigger llega como uno de estos tipos. Ninguno
se reintenta.
"""

from __future__ import annotations


class JobRunnerError(Exception):
    """Excepción base de todos los errores del runner."""


class ConfigurationError(JobRunnerError):
    """Configuración ausente o inválida (credenciales, nombre del job).

    Se lanza antes de que ninguna petición llegue a la red.
    """


class CommunicationError(JobRunnerError):
    """El servidor respondió algo que no se puede usar.

    Incluye validaciones de respuesta fallidas, JSON malformado y fallos de
    transporte (conexión rechazada, errores TLS, read timeouts).
    """


class JobTimeoutError(JobRunnerError):
    """El job no llegó a un estado final dentro de la espera máxima."""

    def __init__(self, job_name: str, max_wait_ms: int) -> None:
        self.job_name = job_name
        self.max_wait_ms = max_wait_ms
        super().__init__(
            f"Job {job_name} didn't finish within the maximum wait time of {max_wait_ms}ms"
        )


class TransportInterrupted(JobRunnerError):
    """La espera entre dos polls se interrumpió desde fuera.

    No es recuperable: se aborta toda la operación de trigger.
    """
