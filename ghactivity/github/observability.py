"""Structured log events for activity feed fetches.

Every fetch emits ``fetch.started`` followed by either ``fetch.completed`` or
``fetch.failed``. Failures carry an :class:`ErrorCategory` so that transient
network trouble can be told apart from bad usernames or a changed response
shape when reading logs.
"""

from __future__ import annotations

import enum
import typing as typ

from ghactivity.logging import get_logger, log_info

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubNetworkError,
    GitHubResponseParseError,
)

if typ.TYPE_CHECKING:
    import datetime as dt

logger = get_logger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500


class FetchEventType(enum.StrEnum):
    """Structured log event types for feed fetches."""

    FETCH_STARTED = "fetch.started"
    FETCH_COMPLETED = "fetch.completed"
    FETCH_FAILED = "fetch.failed"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubNetworkError, ErrorCategory.TRANSIENT),
    (GitHubResponseParseError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception raised while fetching the feed."""
    # GitHubAPIError requires special handling for status code distinction
    if isinstance(exc, GitHubAPIError):
        if exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class FetchEventLogger:
    """Emit structured fetch events via femtologging."""

    def log_fetch_started(
        self, username: str, url: str, *, authenticated: bool
    ) -> None:
        """Log the outgoing request."""
        log_info(
            logger,
            "[%s] username=%s url=%s authenticated=%s",
            FetchEventType.FETCH_STARTED,
            username,
            url,
            authenticated,
        )

    def log_fetch_completed(
        self,
        username: str,
        *,
        status_code: int,
        events: int | None,
        duration: dt.timedelta,
    ) -> None:
        """Log a successful response; ``events`` is ``None`` for non-arrays."""
        log_info(
            logger,
            "[%s] username=%s status=%d events=%s duration_seconds=%.3f",
            FetchEventType.FETCH_COMPLETED,
            username,
            status_code,
            "n/a" if events is None else events,
            duration.total_seconds(),
        )

    def log_fetch_failed(
        self, username: str, error: BaseException, duration: dt.timedelta
    ) -> None:
        """Log a failed fetch with its error category.

        Logged at INFO: the CLI already reports the failure to the user.
        """
        log_info(
            logger,
            "[%s] username=%s duration_seconds=%.3f error_type=%s "
            "error_category=%s error_message=%s",
            FetchEventType.FETCH_FAILED,
            username,
            duration.total_seconds(),
            type(error).__name__,
            categorize_error(error),
            str(error),
        )
