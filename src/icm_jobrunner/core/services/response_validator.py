"""Aserciones comunes sobre respuestas REST.

Cada regla se comprueba por separado y se recogen todas las violaciones, así
un único mensaje de error cuenta todo lo que estaba mal en la respuesta.
"""

from __future__ import annotations

import httpx

from icm_jobrunner.core.domain.assertions import AssertionResult


def assert_response_status(
    status_code: int,
    content_type: str | None,
    body: str | None,
    *,
    expected_status: int = 200,
    expected_type: str = "application/json",
    require_content: bool = True,
) -> AssertionResult:
    """Valida status code, content type y body de una respuesta.

    Basta con que el content type empiece por `expected_type` (sin distinguir
    mayúsculas), así que ``application/json;charset=UTF-8`` es válido.
    """

    result = AssertionResult()
    if status_code != expected_status:
        result.add_failure(
            "Call returned status code {}. Expected {}.", status_code, expected_status
        )

    if not content_type or not content_type.strip():
        result.add_failure("Call response is missing a content type. Expected {}.", expected_type)
    elif not content_type.lower().startswith(expected_type.lower()):
        result.add_failure(
            "Call returned wrong content type '{}'. Expected {}.", content_type, expected_type
        )

    if require_content and (body is None or not body.strip()):
        result.add_failure("Call returned no content.")
    return result


def assert_response(
    response: httpx.Response,
    *,
    expected_status: int = 200,
    expected_type: str = "application/json",
    require_content: bool = True,
) -> AssertionResult:
    return assert_response_status(
        response.status_code,
        response.headers.get("Content-Type"),
        response.text,
        expected_status=expected_status,
        expected_type=expected_type,
        require_content=require_content,
    )
