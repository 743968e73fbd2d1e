from __future__ import annotations

import base64
import json
from urllib.parse import unquote

import pytest
from pydantic import SecretStr

from icm_jobrunner.adapters.job_requests import (
    JobRequestBuilder,
    basic_auth_value,
    encode_path_segment,
)
from icm_jobrunner.core.domain.exceptions import ConfigurationError
from icm_jobrunner.core.domain.models import JobInfo, Server, ServerProtocol, User


def _builder(server: Server, user: User, job_name: str = "MyJob") -> JobRequestBuilder:
    return JobRequestBuilder(
        server=server,
        domain="inSPIRED-inTRONICS-Site",
        server_group="BOS",
        user=user,
        job_name=job_name,
    )


@pytest.mark.parametrize(
    "job_name",
    [
        "Rebuild Search Indexes",
        "Import+Export",
        "a + b",
        "slash/in/name",
        "query?and#fragment",
        "100% done & more",
        "Ümlaut Jöb",
    ],
)
def test_job_name_round_trips_through_the_path_segment(
    server: Server, user: User, job_name: str
) -> None:
    segment = _builder(server, user, job_name).url.rsplit("/", 1)[-1]

    assert "/" not in segment
    assert " " not in segment
    assert unquote(segment) == job_name


def test_plus_stays_literal_and_space_becomes_percent_20() -> None:
    assert encode_path_segment("a+b c") == "a+b%20c"


def test_url_targets_the_smc_job_resource(server: Server, user: User) -> None:
    builder = _builder(server, user, "My Job")

    assert builder.url == (
        "https://icm.example.com:8443/INTERSHOP/rest/BOS/SMC/-/domains/"
        "inSPIRED-inTRONICS-Site/jobs/My%20Job"
    )


def test_http_protocol_is_used_in_the_url(user: User) -> None:
    server = Server(protocol=ServerProtocol.HTTP, host="localhost", port=8080)

    assert _builder(server, user).url.startswith("http://localhost:8080/INTERSHOP/rest/")


def test_headers_carry_json_and_basic_auth(server: Server, user: User) -> None:
    headers = _builder(server, user).headers

    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"
    token = headers["Authorization"].removeprefix("Basic ")
    assert base64.b64decode(token).decode("utf-8") == "admin:!InterShop00!"


def test_basic_auth_encodes_utf8() -> None:
    value = basic_auth_value(User(name="jörg", password=SecretStr("päss")))

    assert base64.b64decode(value.split(" ", 1)[1]).decode("utf-8") == "jörg:päss"


@pytest.mark.parametrize(
    "user",
    [
        User(name="", password=SecretStr("secret")),
        User(name="admin", password=SecretStr("")),
        User(),
    ],
)
def test_incomplete_credentials_are_a_configuration_error(server: Server, user: User) -> None:
    with pytest.raises(ConfigurationError, match="User is not configured"):
        _builder(server, user)


def test_put_and_get_share_the_same_target(server: Server, user: User) -> None:
    builder = _builder(server, user, "Import+Export")

    put = builder.put(JobInfo(name="Import+Export", status="RUNNING"))
    first_get = builder.get()
    second_get = builder.get()

    assert put.method == "PUT"
    assert first_get.method == second_get.method == "GET"
    assert put.url == first_get.url == second_get.url
    assert put.url.raw_path.decode("ascii").endswith("/jobs/Import+Export")
    assert json.loads(put.content) == {"name": "Import+Export", "status": "RUNNING"}
    assert first_get.headers["Authorization"] == put.headers["Authorization"]
