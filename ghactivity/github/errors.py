"""GitHub REST client errors."""

from __future__ import annotations

# Content preview length for parse error messages
_CONTENT_PREVIEW_LIMIT = 100


class GitHubClientError(RuntimeError):
    """Base exception for failures talking to the GitHub REST API."""


class GitHubAPIError(GitHubClientError):
    """Raised when GitHub returns an error response.

    Attributes
    ----------
    status_code
        HTTP status code from the response.
    api_message
        The ``message`` field of the JSON error body, when present.

    """

    def __init__(
        self, message: str, *, status_code: int, api_message: str | None = None
    ) -> None:
        """Initialise with a message, the HTTP status and the API message."""
        self.status_code = status_code
        self.api_message = api_message
        super().__init__(message)

    @classmethod
    def http_error(
        cls, status_code: int, api_message: str | None = None
    ) -> GitHubAPIError:
        """Return an error for HTTP responses with status 400 or above."""
        message = f"HTTP {status_code} from GitHub API."
        if api_message:
            message = f"{message} {api_message}"
        return cls(message, status_code=status_code, api_message=api_message)


class GitHubNetworkError(GitHubClientError):
    """Raised when the request never produced an HTTP response."""

    @classmethod
    def timeout(cls, timeout_s: float) -> GitHubNetworkError:
        """Return an error for a request that exceeded its timeout."""
        return cls(f"request timed out after {timeout_s:g}s")

    @classmethod
    def transport(cls, detail: str) -> GitHubNetworkError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(detail or "connection failed")


class GitHubResponseParseError(GitHubClientError):
    """Raised when a successful response body is not valid JSON."""

    @classmethod
    def invalid_json(cls, detail: str, content: str) -> GitHubResponseParseError:
        """Return an error carrying the decoder detail and a body preview."""
        if len(content) > _CONTENT_PREVIEW_LIMIT:
            preview = content[:_CONTENT_PREVIEW_LIMIT] + "..."
        else:
            preview = content
        return cls(f"{detail} (body: {preview!r})")


class GitHubConfigError(GitHubClientError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def invalid_timeout(cls, value: float) -> GitHubConfigError:
        """Return an error for a non-positive or non-finite request timeout."""
        return cls(
            f"timeout must be a positive finite number of seconds, got: {value:g}"
        )

    @classmethod
    def empty_username(cls) -> GitHubConfigError:
        """Return an error when no username was supplied."""
        return cls("username is required")
