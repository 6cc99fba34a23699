"""GitHub REST client for a user's public activity feed."""

from __future__ import annotations

import typing as typ
import urllib.parse

import httpx
import msgspec

from ghactivity.common.time import utcnow
from ghactivity.events.decoder import text_field
from ghactivity.logging import get_logger, log_debug

from .errors import (
    GitHubAPIError,
    GitHubClientError,
    GitHubConfigError,
    GitHubNetworkError,
    GitHubResponseParseError,
)
from .observability import FetchEventLogger

if typ.TYPE_CHECKING:
    import types

    from .config import GitHubClientConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400


def _decode_json(content: bytes) -> object:
    """Decode a response body, raising ``msgspec.DecodeError`` when invalid."""
    return msgspec.json.decode(content)


def _api_error_message(response: httpx.Response) -> str | None:
    """Return the ``message`` field of a JSON error body if there is one."""
    try:
        body = _decode_json(response.content)
    except msgspec.DecodeError:
        log_debug(logger, "error body for HTTP %d is not JSON", response.status_code)
        return None
    return text_field(body, "message")


class GitHubEventsClient:
    """Fetch a user's public events from the GitHub REST API.

    Parameters
    ----------
    config
        API configuration (token, timeout, headers).
    http_client
        Optional ``httpx.Client`` for testing. If not provided, the instance
        creates and owns its own client.
    event_logger
        Optional structured event logger; a :class:`FetchEventLogger` is
        used by default.

    Examples
    --------
    >>> from ghactivity.github import GitHubClientConfig, GitHubEventsClient
    >>> with GitHubEventsClient(GitHubClientConfig()) as client:
    ...     events = client.fetch_user_events("octocat")  # doctest: +SKIP

    """

    def __init__(
        self,
        config: GitHubClientConfig,
        *,
        http_client: httpx.Client | None = None,
        event_logger: FetchEventLogger | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout_s)
        self._event_logger = event_logger or FetchEventLogger()

    @property
    def config(self) -> GitHubClientConfig:
        """Read-only access to the client configuration."""
        return self._config

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GitHubEventsClient:
        """Return the client for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned resources on exit."""
        self.close()

    def build_headers(self) -> dict[str, str]:
        """Return the request headers, including auth when a token is set."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self._config.user_agent,
        }
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
            headers["X-GitHub-Api-Version"] = self._config.api_version
        return headers

    def events_url(self, username: str) -> str:
        """Return the events endpoint URL for ``username``."""
        segment = urllib.parse.quote(username, safe="")
        base_url = self._config.base_url.rstrip("/")
        return f"{base_url}/users/{segment}/events?per_page={self._config.per_page}"

    def fetch_user_events(self, username: str) -> list[typ.Any] | None:
        """Fetch one page of public events for ``username``.

        Returns
        -------
        list[Any] | None
            The decoded event array, or ``None`` when the response body is
            empty or is valid JSON that is not an array.

        Raises
        ------
        GitHubConfigError
            If ``username`` is blank.
        GitHubNetworkError
            If the request fails before a response arrives.
        GitHubAPIError
            If GitHub answers with HTTP 400 or above.
        GitHubResponseParseError
            If a successful response body is not valid JSON.

        """
        if not username.strip():
            raise GitHubConfigError.empty_username()

        url = self.events_url(username)
        started_at = utcnow()
        self._event_logger.log_fetch_started(
            username, url, authenticated=self._config.has_token
        )
        try:
            response = self._send(url)
            events = self._parse_events(response)
        except GitHubClientError as exc:
            self._event_logger.log_fetch_failed(username, exc, utcnow() - started_at)
            raise

        self._event_logger.log_fetch_completed(
            username,
            status_code=response.status_code,
            events=None if events is None else len(events),
            duration=utcnow() - started_at,
        )
        return events

    def _send(self, url: str) -> httpx.Response:
        """Perform the GET request, mapping transport failures."""
        try:
            return self._client.get(
                url,
                headers=self.build_headers(),
                timeout=self._config.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise GitHubNetworkError.timeout(self._config.timeout_s) from exc
        except httpx.RequestError as exc:
            raise GitHubNetworkError.transport(str(exc)) from exc

    def _parse_events(self, response: httpx.Response) -> list[typ.Any] | None:
        """Validate the status and decode the body into an event array."""
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(
                response.status_code, _api_error_message(response)
            )

        if not response.content.strip():
            return None
        try:
            body = _decode_json(response.content)
        except msgspec.DecodeError as exc:
            raise GitHubResponseParseError.invalid_json(
                str(exc), response.text
            ) from exc
        if not isinstance(body, list):
            return None
        return typ.cast("list[typ.Any]", body)
