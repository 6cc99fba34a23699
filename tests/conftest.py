"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import httpx
import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_ENV_VARS = ("GITHUB_TOKEN", "NO_COLOR", "GHACTIVITY_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop environment variables that change client or CLI behaviour."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _skip_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``cli.main`` from reconfiguring femtologging on every call."""
    monkeypatch.setattr(
        "ghactivity.cli.configure_logging",
        lambda level, *, force=False: ("WARNING", False),
    )


class _NullLogger:
    """Discard log records written by module loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None:
        del level, message, exc_info, stack_info
        return None


@pytest.fixture(autouse=True)
def _silence_loggers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep diagnostics out of captured stderr."""
    for target in (
        "ghactivity.cli.logger",
        "ghactivity.github.client.logger",
        "ghactivity.github.observability.logger",
    ):
        monkeypatch.setattr(target, _NullLogger())


MockHandler = typ.Callable[[httpx.Request], httpx.Response]
MockClientFactory = typ.Callable[
    [MockHandler], tuple[httpx.Client, list[httpx.Request]]
]


@pytest.fixture
def mock_http_client() -> cabc.Iterator[MockClientFactory]:
    """Return a factory for ``httpx.Client`` instances backed by a handler."""
    clients: list[httpx.Client] = []

    def _factory(handler: MockHandler) -> tuple[httpx.Client, list[httpx.Request]]:
        recorded: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client, recorded

    yield _factory
    for client in clients:
        client.close()
