"""Configuration for the GitHub REST events client."""

from __future__ import annotations

import dataclasses
import math
import os

from .errors import GitHubConfigError

_DEFAULT_BASE_URL = "https://api.github.com"
_DEFAULT_PER_PAGE = 100
_DEFAULT_TIMEOUT_S = 15.0
_DEFAULT_USER_AGENT = "github-activity-cli/1.0 (+https://github.com/)"
_DEFAULT_API_VERSION = "2022-11-28"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubClientConfig:
    """Configuration for :class:`~ghactivity.github.client.GitHubEventsClient`.

    Attributes
    ----------
    token
        Optional bearer token. Without one, requests are anonymous and subject
        to the lower unauthenticated rate limit.
    base_url
        REST API root.
    per_page
        Page size requested from the events endpoint.
    timeout_s
        Request timeout in seconds.
    user_agent
        Value sent in the ``User-Agent`` header.
    api_version
        Value sent in ``X-GitHub-Api-Version`` alongside a token.

    """

    token: str | None = None
    base_url: str = _DEFAULT_BASE_URL
    per_page: int = _DEFAULT_PER_PAGE
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT
    api_version: str = _DEFAULT_API_VERSION

    def __post_init__(self) -> None:
        """Reject non-finite and non-positive timeouts."""
        if not math.isfinite(self.timeout_s) or self.timeout_s <= 0:
            raise GitHubConfigError.invalid_timeout(self.timeout_s)

    @property
    def has_token(self) -> bool:
        """Return whether requests will carry an ``Authorization`` header."""
        return bool(self.token)

    @classmethod
    def from_env(
        cls, *, token: str | None = None, timeout_s: float | None = None
    ) -> GitHubClientConfig:
        """Build configuration from explicit values and ``GITHUB_TOKEN``.

        An explicit non-blank ``token`` wins over the environment; blank
        tokens from either source are treated as absent.
        """
        resolved = (token or "").strip() or os.environ.get("GITHUB_TOKEN", "").strip()
        return cls(
            token=resolved or None,
            timeout_s=_DEFAULT_TIMEOUT_S if timeout_s is None else timeout_s,
        )
