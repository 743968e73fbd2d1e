"""Wrapper de httpx.

- Estandariza timeouts, headers por defecto y la política TLS.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from icm_jobrunner import __version__
from icm_jobrunner.core.logging_config import get_logger

USER_AGENT = f"icm-jobrunner/{__version__}"


def build_client(
    *,
    timeout_seconds: float,
    insecure_ssl: bool = False,
    transport: httpx.BaseTransport | None = None,
    logger: Any | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono para una única operación.

    Con `insecure_ssl` se acepta cualquier cadena de certificados y cualquier
    hostname, y cada cliente creado así deja un warning `insecure_ssl_enabled`.
    Sin redirects: el runner solo habla con el recurso del job.
    """

    if insecure_ssl:
        (logger or get_logger(__name__)).warning(
            "insecure_ssl_enabled",
            detail="certificate and hostname verification are disabled",
        )

    return httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=False,
        verify=not insecure_ssl,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )
