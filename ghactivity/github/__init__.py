"""GitHub REST client for public activity feeds."""

from __future__ import annotations

from .client import GitHubEventsClient
from .config import GitHubClientConfig
from .errors import (
    GitHubAPIError,
    GitHubClientError,
    GitHubConfigError,
    GitHubNetworkError,
    GitHubResponseParseError,
)
from .observability import (
    ErrorCategory,
    FetchEventLogger,
    FetchEventType,
    categorize_error,
)

__all__ = [
    "ErrorCategory",
    "FetchEventLogger",
    "FetchEventType",
    "GitHubAPIError",
    "GitHubClientConfig",
    "GitHubClientError",
    "GitHubConfigError",
    "GitHubEventsClient",
    "GitHubNetworkError",
    "GitHubResponseParseError",
    "categorize_error",
]
