"""Constructor de requests para los recursos de jobs ICM.

Cada job vive en
``{protocol}://{host}:{port}/INTERSHOP/rest/{srvGroup}/SMC/-/domains/{domain}/jobs/{job}``.
El mismo builder emite el PUT que lanza el job y los GET que lo consultan.
"""

from __future__ import annotations

import base64
from urllib.parse import quote, quote_plus

import httpx

from icm_jobrunner.core.domain.exceptions import ConfigurationError
from icm_jobrunner.core.domain.models import JobInfo, Server, User

CONTENT_TYPE_JSON = "application/json"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_AUTHORIZATION = "Authorization"


def encode_path_segment(value: str) -> str:
    """Codifica `value` como un único segmento de path.

    El form encoding convierte los espacios en ``+`` y ``+`` en ``%2B``; después
    se reescriben para que un espacio sea ``%20`` y un más siga siendo ``+``.
    """

    return quote_plus(value, safe="").replace("+", "%20").replace("%2B", "+")


def basic_auth_value(user: User) -> str:
    credentials = f"{user.name}:{user.password.get_secret_value()}".encode("utf-8")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


class JobRequestBuilder:
    """Destino autenticado de las requests de un job.

    Lanza `ConfigurationError` al construirse si el usuario no tiene nombre o
    password: nunca se envía nada con credenciales incompletas.
    """

    def __init__(
        self,
        *,
        server: Server,
        domain: str,
        server_group: str,
        user: User,
        job_name: str,
    ) -> None:
        if not user.is_configured:
            raise ConfigurationError("User is not configured.")

        main_path = (
            f"INTERSHOP/rest/{quote(server_group, safe='')}/SMC/-/domains/"
            f"{quote(domain, safe='')}/jobs"
        )
        self._job_name = job_name
        self._url = f"{server.base_url}/{main_path}/{encode_path_segment(job_name)}"
        self._headers = {
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
            HEADER_ACCEPT: CONTENT_TYPE_JSON,
            HEADER_AUTHORIZATION: basic_auth_value(user),
        }

    @property
    def job_name(self) -> str:
        return self._job_name

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def put(self, payload: JobInfo) -> httpx.Request:
        return httpx.Request("PUT", self._url, headers=self._headers, content=payload.render())

    def get(self) -> httpx.Request:
        return httpx.Request("GET", self._url, headers=self._headers)
