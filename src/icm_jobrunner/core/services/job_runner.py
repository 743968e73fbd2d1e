"""Lanza jobs ICM por REST y espera a que terminen.

Flujo de una operación:

1. PUT ``{"name": <job>, "status": "RUNNING"}`` al recurso del job.
2. Se valida la respuesta y se parsea a `JobInfo`.
3. Si el job no está ya en un estado final, GET al mismo recurso en cada
   intervalo de polling hasta que lo esté o se supere la espera máxima.

No hay reintentos: la primera llamada fallida aborta toda la operación.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Collection
from typing import Any

import httpx
from pydantic import ValidationError

from icm_jobrunner.adapters.http_client import build_client
from icm_jobrunner.adapters.job_requests import JobRequestBuilder
from icm_jobrunner.core.config import JobRunnerSettings
from icm_jobrunner.core.domain.exceptions import (
    CommunicationError,
    ConfigurationError,
    JobRunnerError,
    JobTimeoutError,
    TransportInterrupted,
)
from icm_jobrunner.core.domain.models import (
    DEFAULT_END_STATES,
    RUNNING_STATUS,
    JobInfo,
    JobOutcome,
    JobRunResult,
    Server,
    User,
)
from icm_jobrunner.core.interfaces.job_trigger import JobLogger
from icm_jobrunner.core.logging_config import get_logger
from icm_jobrunner.core.services.response_validator import assert_response

DEFAULT_POLL_INTERVAL_MS = 15_000
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

_OUTCOMES: tuple[tuple[type[JobRunnerError], JobOutcome], ...] = (
    (ConfigurationError, JobOutcome.CONFIGURATION_ERROR),
    (CommunicationError, JobOutcome.COMMUNICATION_ERROR),
    (JobTimeoutError, JobOutcome.TIMED_OUT),
    (TransportInterrupted, JobOutcome.INTERRUPTED),
)


class JobRunner:
    """Ejecuta jobs ICM a través de la interfaz REST del SMC.

    Args:
        server: servidor web ICM
        domain: dominio ICM del job
        server_group: server group ICM (p.ej. ``BOS``)
        user: usuario SMC con permisos para lanzar el job
        timeout_ms: espera máxima hasta un estado final, desde el inicio del polling
        poll_interval_ms: espera fija antes de cada consulta de estado
        end_states: estados que terminan el polling
        transport: transport httpx opcional (los tests inyectan ``httpx.MockTransport``)
        sleep: sleep bloqueante en segundos
        clock: reloj monotónico en segundos
        logger: logger con niveles; por defecto el logger structlog del módulo
    """

    def __init__(
        self,
        server: Server,
        domain: str,
        server_group: str,
        user: User,
        timeout_ms: int,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        end_states: Collection[str] = DEFAULT_END_STATES,
        http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        insecure_ssl: bool = False,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        logger: JobLogger | None = None,
    ) -> None:
        self._server = server
        self._domain = domain
        self._server_group = server_group
        self._user = user
        self._timeout_ms = timeout_ms
        self._poll_interval_ms = poll_interval_ms
        self._end_states = frozenset(end_states)
        self._http_timeout_seconds = http_timeout_seconds
        self._insecure_ssl = insecure_ssl
        self._transport = transport
        self._sleep = sleep
        self._clock = clock
        self._logger: Any = logger or get_logger(__name__)

    @classmethod
    def from_settings(cls, settings: JobRunnerSettings, **kwargs: Any) -> "JobRunner":
        """Crea un runner desde `JobRunnerSettings`; los kwargs tienen prioridad."""

        options: dict[str, Any] = {
            "poll_interval_ms": settings.poll_interval_ms,
            "end_states": settings.end_states,
            "http_timeout_seconds": settings.http_timeout_seconds,
            "insecure_ssl": settings.insecure_ssl,
        }
        options.update(kwargs)
        return cls(
            settings.server(),
            settings.domain,
            settings.server_group,
            settings.user(),
            options.pop("timeout_ms", settings.timeout_ms),
            **options,
        )

    @property
    def insecure_ssl(self) -> bool:
        """Si se acepta cualquier cadena de certificados y cualquier hostname."""

        return self._insecure_ssl

    @insecure_ssl.setter
    def insecure_ssl(self, value: bool) -> None:
        self._insecure_ssl = value

    def enable_insecure_ssl(self) -> None:
        """Acepta certificados autofirmados y hostnames que no coinciden."""

        self.insecure_ssl = True

    def trigger_job(self, job_name: str) -> JobInfo:
        """Lanza `job_name` y bloquea hasta que llega a un estado final.

        Devuelve el último `JobInfo` recibido del servidor.

        Raises:
            ConfigurationError: nombre de job vacío o credenciales incompletas
            CommunicationError: respuesta inesperada o fallo de transporte
            JobTimeoutError: sin estado final dentro de la espera máxima
            TransportInterrupted: se interrumpió la espera entre polls
        """

        if not job_name or not job_name.strip():
            raise ConfigurationError("Job name is not configured.")

        requests = JobRequestBuilder(
            server=self._server,
            domain=self._domain,
            server_group=self._server_group,
            user=self._user,
            job_name=job_name,
        )
        self._logger.debug("job_request_target", job=job_name, url=requests.url)

        with self._open_client() as client:
            payload = JobInfo(name=job_name, status=RUNNING_STATUS)
            response = self._send(client, requests.put(payload))
            assertion = assert_response(response)
            if not assertion.succeeded():
                raise CommunicationError(
                    "Error while communicating with server: " + assertion.summarize("; ")
                )

            job_info = self._parse(response)
            self._logger.info("job_started", job=job_name, status=job_info.status)
            if job_info.is_end_state(self._end_states):
                self._log_finished(job_info)
                return job_info

            return self._poll_job_info(client, requests)

    def run_job(self, job_name: str) -> JobRunResult:
        """Como `trigger_job`, pero cada fallo se devuelve como `JobRunResult`."""

        try:
            job_info = self.trigger_job(job_name)
        except JobRunnerError as exc:
            outcome = next(outcome for kind, outcome in _OUTCOMES if isinstance(exc, kind))
            return JobRunResult(job_name=job_name, outcome=outcome, message=str(exc))
        return JobRunResult(job_name=job_name, outcome=JobOutcome.DONE, job_info=job_info)

    def _open_client(self) -> httpx.Client:
        return build_client(
            timeout_seconds=self._http_timeout_seconds,
            insecure_ssl=self._insecure_ssl,
            transport=self._transport,
            logger=self._logger,
        )

    def _poll_job_info(self, client: httpx.Client, requests: JobRequestBuilder) -> JobInfo:
        """Consulta el recurso del job hasta alcanzar un estado final.

        El tiempo transcurrido se comprueba antes de cada espera y cuenta desde
        el inicio del polling, no desde el trigger.
        """

        job_name = requests.job_name
        self._logger.debug(
            "job_polling_started",
            job=job_name,
            max_wait_ms=self._timeout_ms,
            poll_interval_ms=self._poll_interval_ms,
        )
        start = self._clock()
        previous_status: str | None = None

        while True:
            elapsed_ms = (self._clock() - start) * 1000
            if elapsed_ms > self._timeout_ms:
                raise JobTimeoutError(job_name, self._timeout_ms)

            self._wait(self._poll_interval_ms)
            job_info = self._get_job_info(client, requests)

            self._logger.debug("job_status_polled", url=requests.url, status=job_info.status)
            if job_info.status != previous_status:
                self._logger.info("job_status_changed", job=job_name, status=job_info.status)
                previous_status = job_info.status

            if job_info.is_end_state(self._end_states):
                self._log_finished(job_info)
                return job_info

    def _get_job_info(self, client: httpx.Client, requests: JobRequestBuilder) -> JobInfo:
        response = self._send(client, requests.get())
        assertion = assert_response(response)
        if not assertion.succeeded():
            raise CommunicationError("Retrieving job info failed: " + assertion.summarize("; "))
        return self._parse(response)

    def _wait(self, interval_ms: int) -> None:
        try:
            self._sleep(interval_ms / 1000)
        except KeyboardInterrupt as exc:
            raise TransportInterrupted("Interrupted while waiting for the next status poll") from exc

    def _send(self, client: httpx.Client, request: httpx.Request) -> httpx.Response:
        try:
            return client.send(request)
        except httpx.HTTPError as exc:
            raise CommunicationError(f"{request.method} {request.url} failed: {exc}") from exc

    def _parse(self, response: httpx.Response) -> JobInfo:
        try:
            return JobInfo.parse(response.text)
        except ValidationError as exc:
            details = "; ".join(str(error["msg"]) for error in exc.errors())
            raise CommunicationError(f"Server returned a malformed job info: {details}") from exc

    def _log_finished(self, job_info: JobInfo) -> None:
        self._logger.info("job_finished", job=job_info.name, status=job_info.status)
        if job_info.process is not None:
            self._logger.info(
                "job_process_finished",
                job=job_info.name,
                process_status=job_info.process.status,
                duration_ms=job_info.process.duration,
            )
