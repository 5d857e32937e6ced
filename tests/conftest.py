import os
from collections.abc import Generator

import pytest
import pytest_httpserver

from httpbridge import Client, Executor, LocalBridge, clear_http_fetch
from httpbridge.config import ENV_PREFIX, Settings


class RecordingBridge:
    """Host function stub that records payloads and answers with a canned one."""

    def __init__(self) -> None:
        self.payloads: list[str] = []
        self.response_json: str | None = None

    def apply(self, payload: str) -> str:
        self.payloads.append(payload)

        if self.response_json is None:
            msg = "response_json must be set on RecordingBridge"
            raise AssertionError(msg)

        return self.response_json


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)

    yield

    clear_http_fetch()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def recording_bridge() -> RecordingBridge:
    return RecordingBridge()


@pytest.fixture
def client(recording_bridge: RecordingBridge, settings: Settings) -> Client:
    return Client(bridge=recording_bridge, settings=settings)


@pytest.fixture
def executor(settings: Settings) -> Executor:
    return Executor(settings=settings)


@pytest.fixture
def httpserver_client(
    httpserver: pytest_httpserver.HTTPServer,
    executor: Executor,
    settings: Settings,
) -> Client:
    return Client(bridge=LocalBridge(executor), settings=settings)
