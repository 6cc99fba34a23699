"""Command-line entry point: print a GitHub user's recent public activity."""

from __future__ import annotations

import argparse
import os
import sys
import typing as typ

from ghactivity.errors import ExitCode, UsageError
from ghactivity.events import (
    Color,
    colorize,
    decode_event,
    describe_event,
    should_use_color,
)
from ghactivity.github import (
    GitHubAPIError,
    GitHubClientConfig,
    GitHubConfigError,
    GitHubEventsClient,
    GitHubNetworkError,
    GitHubResponseParseError,
)
from ghactivity.logging import configure_logging, get_logger, log_info, log_warning

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import httpx

logger = get_logger(__name__)

LOG_LEVEL_ENV = "GHACTIVITY_LOG_LEVEL"

DEFAULT_LIMIT = 20
_MIN_LIMIT = 1
_MAX_LIMIT = 100
_DEFAULT_TIMEOUT_S = 15.0

_NO_ACTIVITY_MESSAGE = "No recent public activity found."

_STATUS_TIPS: dict[int, str] = {
    404: "Tip: check if the username is correct.",
    401: "Tip: If using a token, ensure it is valid.",
    403: "Tip: Provide a token via --token or GITHUB_TOKEN to raise rate limits.",
}

_EPILOG = """\
examples:
  github-activity octocat
  github-activity octocat --limit 15
  GITHUB_TOKEN=ghp_xxx github-activity octocat
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting."""

    def error(self, message: str) -> typ.NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``github-activity``."""
    parser = _ArgumentParser(
        prog="github-activity",
        allow_abbrev=False,
        description="Show a GitHub user's recent public activity.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("username", help="GitHub username to look up")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        metavar="N",
        help=f"Maximum events to print, clamped to {_MIN_LIMIT}-{_MAX_LIMIT} "
        f"(default {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--token",
        default=None,
        metavar="TOKEN",
        help="GitHub token; defaults to the GITHUB_TOKEN environment variable",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=_DEFAULT_TIMEOUT_S,
        metavar="SECONDS",
        help=f"Request timeout in seconds (default {_DEFAULT_TIMEOUT_S:g})",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colours (also honoured via NO_COLOR)",
    )
    return parser


def clamp_limit(limit: int) -> int:
    """Clamp ``limit`` into the supported range.

    >>> clamp_limit(0), clamp_limit(500), clamp_limit(7)
    (1, 100, 7)
    """
    return max(_MIN_LIMIT, min(_MAX_LIMIT, limit))


def parse_options(
    parser: argparse.ArgumentParser, argv: cabc.Sequence[str] | None
) -> argparse.Namespace:
    """Parse ``argv`` and normalise option values.

    Raises
    ------
    UsageError
        If the arguments are missing, unknown or malformed.

    """
    options = parser.parse_args(argv)
    if not options.username.strip():
        raise UsageError.missing_username()
    options.limit = clamp_limit(options.limit)
    return options


def render_events(
    events: cabc.Iterable[object],
    *,
    limit: int,
    use_color: bool,
    out: typ.TextIO,
) -> int:
    """Write up to ``limit`` formatted events to ``out``; return the count."""
    printed = 0
    for raw in events:
        if printed >= limit:
            break
        print(describe_event(decode_event(raw), use_color=use_color), file=out)
        printed += 1
    return printed


def _error_prefix(*, use_color: bool) -> str:
    return colorize("Error: ", Color.RED, enabled=use_color)


def _report_usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    print(parser.format_help())
    return ExitCode.USAGE


def _report_api_error(exc: GitHubAPIError, *, use_color: bool) -> int:
    print(f"{_error_prefix(use_color=use_color)}{exc}", file=sys.stderr)
    tip = _STATUS_TIPS.get(exc.status_code)
    if tip is not None:
        print(tip, file=sys.stderr)
    return ExitCode.API_ERROR


def _configure_logging() -> None:
    raw_level = os.environ.get(LOG_LEVEL_ENV)
    normalized, invalid = configure_logging(raw_level)
    if invalid:
        log_warning(
            logger,
            "Invalid %s %r, falling back to %s",
            LOG_LEVEL_ENV,
            raw_level,
            normalized,
        )


def main(
    argv: cabc.Sequence[str] | None = None,
    *,
    http_client: httpx.Client | None = None,
) -> int:
    """Fetch and print a user's recent public GitHub activity.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.
    http_client : httpx.Client | None, optional
        HTTP client to send the request with; mainly for tests.

    Returns
    -------
    int
        0 on success or empty activity, 1 for GitHub API errors, 2 for
        network failures, 3 for unparseable responses and 64 for usage
        errors.

    """
    _configure_logging()
    parser = build_parser()
    try:
        options = parse_options(parser, argv)
        config = GitHubClientConfig.from_env(
            token=options.token, timeout_s=options.timeout
        )
    except (UsageError, GitHubConfigError) as exc:
        return _report_usage_error(parser, str(exc))

    use_color = should_use_color(no_color_flag=options.no_color, stream=sys.stdout)
    prefix = _error_prefix(use_color=use_color)
    try:
        with GitHubEventsClient(config, http_client=http_client) as client:
            events = client.fetch_user_events(options.username)
    except GitHubNetworkError as exc:
        print(f"{prefix}Network error: {exc}", file=sys.stderr)
        return ExitCode.NETWORK_ERROR
    except GitHubAPIError as exc:
        return _report_api_error(exc, use_color=use_color)
    except GitHubResponseParseError as exc:
        print(f"{prefix}Failed to parse API response: {exc}", file=sys.stderr)
        return ExitCode.PARSE_ERROR

    if not events:
        print(_NO_ACTIVITY_MESSAGE)
        return ExitCode.OK

    printed = render_events(
        events, limit=options.limit, use_color=use_color, out=sys.stdout
    )
    log_info(
        logger,
        "printed %d of %d events for %s",
        printed,
        len(events),
        options.username,
    )
    return ExitCode.OK


if __name__ == "__main__":
    raise SystemExit(main())
