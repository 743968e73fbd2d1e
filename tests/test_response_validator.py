from __future__ import annotations

import httpx

from icm_jobrunner.core.services.response_validator import (
    assert_response,
    assert_response_status,
)


def test_valid_response_succeeds() -> None:
    result = assert_response_status(200, "application/json", '{"name":"X","status":"READY"}')

    assert result.succeeded()


def test_content_type_with_charset_is_accepted_case_insensitively() -> None:
    result = assert_response_status(200, "Application/JSON; charset=UTF-8", "{}")

    assert result.succeeded()


def test_status_500_mentions_actual_and_expected_codes() -> None:
    result = assert_response_status(500, "application/json", "{}")

    assert not result.succeeded()
    assert result.failures == ["Call returned status code 500. Expected 200."]


def test_missing_content_type() -> None:
    result = assert_response_status(200, None, "{}")

    assert result.failures == ["Call response is missing a content type. Expected application/json."]


def test_wrong_content_type() -> None:
    result = assert_response_status(200, "text/html", "<html/>")

    assert result.failures == ["Call returned wrong content type 'text/html'. Expected application/json."]


def test_server_content_type_with_braces_is_reported_verbatim() -> None:
    result = assert_response_status(200, "text/{}", "{}")

    assert result.failures == ["Call returned wrong content type 'text/{}'. Expected application/json."]


def test_blank_body_fails_only_when_content_is_required() -> None:
    assert assert_response_status(200, "application/json", "  ").failures == ["Call returned no content."]
    assert assert_response_status(200, "application/json", "", require_content=False).succeeded()


def test_all_violations_are_accumulated() -> None:
    result = assert_response_status(
        503, "text/plain", "", expected_status=201, expected_type="application/json"
    )

    assert result.summarize("; ") == (
        "Call returned status code 503. Expected 201.; "
        "Call returned wrong content type 'text/plain'. Expected application/json.; "
        "Call returned no content."
    )


def test_assert_response_reads_httpx_response() -> None:
    response = httpx.Response(404, content=b"", headers={"Content-Type": "text/html"})

    result = assert_response(response)

    assert len(result.failures) == 3
    assert result.failures[0] == "Call returned status code 404. Expected 200."
