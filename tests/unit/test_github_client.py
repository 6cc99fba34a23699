"""Unit tests for the GitHub REST events client."""

from __future__ import annotations

import secrets
import typing as typ

import httpx
import pytest

from ghactivity.github import (
    GitHubAPIError,
    GitHubClientConfig,
    GitHubConfigError,
    GitHubEventsClient,
    GitHubNetworkError,
    GitHubResponseParseError,
)
from tests.helpers.github_events import sample_feed

_TOKEN = secrets.token_hex(8)

MockFactory = typ.Callable[..., tuple[httpx.Client, list[httpx.Request]]]


def _json_response(status: int, payload: object) -> httpx.Response:
    return httpx.Response(status_code=status, json=payload)


def _client(
    mock_http_client: MockFactory,
    handler: typ.Callable[[httpx.Request], httpx.Response],
    *,
    token: str | None = None,
) -> tuple[GitHubEventsClient, list[httpx.Request]]:
    http_client, calls = mock_http_client(handler)
    config = GitHubClientConfig(token=token)
    client = GitHubEventsClient(config, http_client=http_client)
    return client, calls


def test_fetch_requests_events_endpoint(mock_http_client: MockFactory) -> None:
    """The request targets the user's events with one page of 100."""
    client, calls = _client(mock_http_client, lambda _: _json_response(200, []))

    client.fetch_user_events("octocat")

    assert len(calls) == 1
    request = calls[0]
    assert request.method == "GET"
    assert request.url.host == "api.github.com"
    assert request.url.path == "/users/octocat/events"
    assert request.url.params["per_page"] == "100"


def test_fetch_sends_anonymous_headers(mock_http_client: MockFactory) -> None:
    """Without a token only Accept and User-Agent are sent."""
    client, calls = _client(mock_http_client, lambda _: _json_response(200, []))

    client.fetch_user_events("octocat")

    headers = calls[0].headers
    assert headers["Accept"] == "application/vnd.github+json"
    assert headers["User-Agent"].startswith("github-activity-cli/")
    assert "Authorization" not in headers
    assert "X-GitHub-Api-Version" not in headers


def test_fetch_sends_bearer_token(mock_http_client: MockFactory) -> None:
    """A configured token adds auth and API version headers."""
    client, calls = _client(
        mock_http_client, lambda _: _json_response(200, []), token=_TOKEN
    )

    client.fetch_user_events("octocat")

    headers = calls[0].headers
    assert headers["Authorization"] == f"Bearer {_TOKEN}"
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"


def test_fetch_returns_decoded_events(mock_http_client: MockFactory) -> None:
    """Array bodies are returned as decoded JSON."""
    feed = sample_feed()
    client, _ = _client(mock_http_client, lambda _: _json_response(200, feed))

    assert client.fetch_user_events("octocat") == feed


@pytest.mark.parametrize("payload", [{"message": "odd"}, "text", 3, None])
def test_fetch_returns_none_for_non_array_body(
    mock_http_client: MockFactory, payload: object
) -> None:
    """Valid JSON that is not an array yields ``None``."""
    client, _ = _client(mock_http_client, lambda _: _json_response(200, payload))

    assert client.fetch_user_events("octocat") is None


def test_fetch_returns_none_for_empty_body(mock_http_client: MockFactory) -> None:
    """An empty successful body is treated as no activity."""
    client, _ = _client(mock_http_client, lambda _: httpx.Response(200, content=b""))

    assert client.fetch_user_events("octocat") is None


def test_fetch_raises_parse_error_for_invalid_json(
    mock_http_client: MockFactory,
) -> None:
    """Malformed JSON in a successful response raises a parse error."""
    client, _ = _client(
        mock_http_client, lambda _: httpx.Response(200, content=b"[{not json")
    )

    with pytest.raises(GitHubResponseParseError, match="not json"):
        client.fetch_user_events("octocat")


@pytest.mark.parametrize(
    ("status", "body", "expected_message", "expected_text"),
    [
        (
            404,
            {"message": "Not Found"},
            "Not Found",
            "HTTP 404 from GitHub API. Not Found",
        ),
        (500, {"error": "boom"}, None, "HTTP 500 from GitHub API."),
        (403, {"message": 12}, "12", "HTTP 403 from GitHub API. 12"),
    ],
)
def test_fetch_raises_api_error_with_message(
    mock_http_client: MockFactory,
    status: int,
    body: dict[str, object],
    expected_message: str | None,
    expected_text: str,
) -> None:
    """HTTP errors carry the status and the API's message field."""
    client, _ = _client(mock_http_client, lambda _: _json_response(status, body))

    with pytest.raises(GitHubAPIError) as exc_info:
        client.fetch_user_events("octocat")

    assert exc_info.value.status_code == status
    assert exc_info.value.api_message == expected_message
    assert str(exc_info.value) == expected_text


def test_fetch_api_error_tolerates_non_json_body(
    mock_http_client: MockFactory,
) -> None:
    """Error bodies that are not JSON still produce an API error."""
    client, _ = _client(
        mock_http_client, lambda _: httpx.Response(502, content=b"<html>bad</html>")
    )

    with pytest.raises(GitHubAPIError) as exc_info:
        client.fetch_user_events("octocat")

    assert exc_info.value.status_code == 502
    assert exc_info.value.api_message is None


def test_fetch_maps_connection_errors(mock_http_client: MockFactory) -> None:
    """Transport failures raise a network error."""

    def _handler(request: httpx.Request) -> httpx.Response:
        msg = "name resolution failed"
        raise httpx.ConnectError(msg, request=request)

    client, _ = _client(mock_http_client, _handler)

    with pytest.raises(GitHubNetworkError, match="name resolution failed"):
        client.fetch_user_events("octocat")


def test_fetch_maps_timeouts(mock_http_client: MockFactory) -> None:
    """Timeouts raise a network error naming the timeout."""

    def _handler(request: httpx.Request) -> httpx.Response:
        msg = "read timed out"
        raise httpx.ReadTimeout(msg, request=request)

    client, _ = _client(mock_http_client, _handler)

    with pytest.raises(GitHubNetworkError, match="timed out after 15s"):
        client.fetch_user_events("octocat")


def test_fetch_rejects_blank_username(mock_http_client: MockFactory) -> None:
    """Blank usernames are rejected before any request is sent."""
    client, calls = _client(mock_http_client, lambda _: _json_response(200, []))

    with pytest.raises(GitHubConfigError, match="username is required"):
        client.fetch_user_events("   ")

    assert calls == []


def test_events_url_escapes_username(mock_http_client: MockFactory) -> None:
    """Usernames are encoded as a single path segment."""
    http_client, _ = mock_http_client(lambda _: _json_response(200, []))
    client = GitHubEventsClient(
        GitHubClientConfig(base_url="https://example.test/api/"),
        http_client=http_client,
    )

    assert (
        client.events_url("a/b c") == "https://example.test/api/users/a%2Fb%20c/"
        "events?per_page=100"
    )


def test_close_leaves_injected_client_open(mock_http_client: MockFactory) -> None:
    """Injected HTTP clients are owned by the caller."""
    http_client, _ = mock_http_client(lambda _: _json_response(200, []))

    with GitHubEventsClient(GitHubClientConfig(), http_client=http_client):
        pass

    assert not http_client.is_closed


def test_close_closes_owned_client() -> None:
    """Clients created internally are closed with the wrapper."""
    client = GitHubEventsClient(GitHubClientConfig())
    client.close()

    assert client._client.is_closed  # noqa: SLF001

