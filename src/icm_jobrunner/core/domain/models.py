"""Modelos del dominio (Pydantic v2).

- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Todos los modelos son inmutables: cada respuesta del servidor produce una
  instancia nueva.

Nota:
- Estos modelos describen *qué* es un job y *dónde* vive, no *cómo* se dispara.
"""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

DEFAULT_END_STATES: frozenset[str] = frozenset({"READY", "DISABLED"})
RUNNING_STATUS = "RUNNING"


class ServerProtocol(str, Enum):
    """Protocolos soportados para hablar con el servidor ICM."""

    HTTP = "http"
    HTTPS = "https"


class Server(BaseModel):
    """Dirección del servidor ICM (protocolo, host y puerto)."""

    model_config = ConfigDict(frozen=True)

    protocol: ServerProtocol = Field(
        default=ServerProtocol.HTTPS,
        description="Protocolo de transporte (http/https).",
    )
    host: str = Field(
        ...,
        min_length=1,
        description="Nombre de host o IP del servidor.",
    )
    port: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Puerto TCP del servidor web.",
    )

    @property
    def base_url(self) -> str:
        return f"{self.protocol.value}://{self.host}:{self.port}"


class User(BaseModel):
    """Usuario SMC con permisos para lanzar jobs.

    Un nombre o password vacío no se rechaza aquí: se detecta antes de la
    primera petición como error de configuración.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="",
        description="Login del usuario SMC.",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Password del usuario SMC (nunca aparece en repr/logs).",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.name) and bool(self.password.get_secret_value())


class ProcessInfo(BaseModel):
    """Estado del proceso que ejecuta el job (solo existe una vez arrancado)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str = Field(
        ...,
        description="Estado del proceso según el servidor.",
    )
    duration: int = Field(
        ...,
        description="Tiempo transcurrido del proceso (milisegundos).",
    )


class JobInfo(BaseModel):
    """Vista del servidor sobre un job en un momento dado."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(
        ...,
        description="Nombre del job (ver overview del SMC).",
    )
    status: str = Field(
        ...,
        description="Estado del job (p.ej. 'RUNNING', 'READY', 'DISABLED').",
    )
    process: ProcessInfo | None = Field(
        default=None,
        description="Información del proceso, ausente si aún no ha arrancado.",
    )

    @classmethod
    def parse(cls, text: str | bytes) -> "JobInfo":
        """Construye un `JobInfo` desde el cuerpo JSON de una respuesta.

        Lanza `pydantic.ValidationError` si el JSON es inválido o incompleto.
        """

        return cls.model_validate_json(text)

    def render(self) -> str:
        """Serializa a JSON compacto (sin `process` si no existe)."""

        return self.model_dump_json(exclude_none=True)

    def is_end_state(self, end_states: Collection[str] = DEFAULT_END_STATES) -> bool:
        return self.status in end_states


class JobOutcome(str, Enum):
    """Resultado discriminado de una ejecución completa."""

    DONE = "done"
    CONFIGURATION_ERROR = "configuration_error"
    COMMUNICATION_ERROR = "communication_error"
    TIMED_OUT = "timed_out"
    INTERRUPTED = "interrupted"


class JobRunResult(BaseModel):
    """Resultado de `JobRunner.run_job`.

    - `DONE` lleva el último `JobInfo` recibido.
    - El resto de resultados llevan el mensaje del error correspondiente.
    """

    model_config = ConfigDict(frozen=True)

    job_name: str = Field(
        ...,
        description="Job solicitado.",
    )
    outcome: JobOutcome = Field(
        ...,
        description="Estado final de la operación.",
    )
    job_info: JobInfo | None = Field(
        default=None,
        description="Último JobInfo (solo si outcome == DONE).",
    )
    message: str | None = Field(
        default=None,
        description="Mensaje de error (solo si outcome != DONE).",
    )

    @property
    def succeeded(self) -> bool:
        return self.outcome is JobOutcome.DONE
