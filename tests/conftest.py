"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from icm_jobrunner.core.domain.models import Server, ServerProtocol, User
from icm_jobrunner.core.services.job_runner import JobRunner

Handler = Callable[[httpx.Request], httpx.Response]


class FakeClock:
    """Monotonic clock that only moves when `sleep` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, event: str, **kwargs: Any) -> None:
        self.records.append((level, event, kwargs))

    def debug(self, event: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", event, **kwargs)

    def events(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for _level, event, kwargs in self.records if event == name]


class ScriptedServer:
    """Answers the PUT with `trigger` and each GET with the next `polls` entry."""

    def __init__(self, trigger: httpx.Response, polls: Iterable[httpx.Response] = ()) -> None:
        self.trigger = trigger
        self.polls = list(polls)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "PUT":
            return self.trigger
        if not self.polls:
            raise AssertionError("unexpected poll request")
        return self.polls.pop(0)

    @property
    def methods(self) -> list[str]:
        return [request.method for request in self.requests]


def job_response(status: str, *, name: str = "MyJob", process: dict[str, Any] | None = None) -> httpx.Response:
    payload: dict[str, Any] = {"name": name, "status": status}
    if process is not None:
        payload["process"] = process
    return httpx.Response(200, json=payload)


def running_forever(name: str = "MyJob") -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=json.dumps({"name": name, "status": "RUNNING"}).encode("utf-8"),
            headers={"Content-Type": "application/json;charset=UTF-8"},
        )

    return _handler


@pytest.fixture
def server() -> Server:
    return Server(protocol=ServerProtocol.HTTPS, host="icm.example.com", port=8443)


@pytest.fixture
def user() -> User:
    return User(name="admin", password=SecretStr("!InterShop00!"))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_runner(
    server: Server, user: User, clock: FakeClock, recording_logger: RecordingLogger
) -> Callable[..., JobRunner]:
    def _make(handler: Handler, **kwargs: Any) -> JobRunner:
        options: dict[str, Any] = {
            "server": server,
            "domain": "inSPIRED-inTRONICS-Site",
            "server_group": "BOS",
            "user": user,
            "timeout_ms": 600_000,
            "transport": httpx.MockTransport(handler),
            "sleep": clock.sleep,
            "clock": clock,
            "logger": recording_logger,
        }
        options.update(kwargs)
        return JobRunner(**options)

    return _make
