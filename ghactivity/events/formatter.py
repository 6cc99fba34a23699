"""Render activity feed events as one-line descriptions.

Each known GitHub event type has a describer registered against its type
tag. Describers are pure functions of the event and the colour flag, and they
substitute fixed wording for any payload field that is missing or has the
wrong JSON type, so formatting a single event never fails.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from .colors import Color, colorize
from .decoder import array_length, is_true, text_field

if typ.TYPE_CHECKING:
    from .models import NormalizedEvent

EventDescriber = typ.Callable[["NormalizedEvent", "_Palette"], str]
_registry: dict[str, EventDescriber] = {}

_UNKNOWN_NUMBER = "#?"


def register(event_type: str) -> typ.Callable[[EventDescriber], EventDescriber]:
    """Register a describer for a GitHub event type."""

    def _inner(func: EventDescriber) -> EventDescriber:
        _registry[event_type] = func
        return func

    return _inner


def get_event_describer(event_type: str) -> EventDescriber | None:
    """Return the registered describer for the event type if present."""
    return _registry.get(event_type)


def registered_event_types() -> frozenset[str]:
    """Return the event types that have a dedicated describer."""
    return frozenset(_registry)


@dataclasses.dataclass(frozen=True, slots=True)
class _Palette:
    """Applies the semantic colour roles used in event lines."""

    enabled: bool

    def count(self, text: str) -> str:
        return colorize(text, Color.CYAN, enabled=self.enabled)

    def strong(self, text: str) -> str:
        return colorize(text, Color.BOLD, enabled=self.enabled)

    def when(self, event: NormalizedEvent) -> str:
        display = colorize(event.created_at_display, Color.DIM, enabled=self.enabled)
        return f"({display})"

    def paint(self, text: str, color: Color) -> str:
        return colorize(text, color, enabled=self.enabled)


def capitalize_first(text: str) -> str:
    """Uppercase the first character and leave the rest untouched.

    >>> capitalize_first("reopened")
    'Reopened'
    >>> capitalize_first("")
    ''
    """
    if not text:
        return text
    return text[0].upper() + text[1:]


def _text(event: NormalizedEvent, *keys: str, default: str) -> str:
    value = text_field(event.payload, *keys)
    return default if value is None else value


def _number(event: NormalizedEvent, entity: str) -> str:
    number = text_field(event.payload, entity, "number")
    return _UNKNOWN_NUMBER if number is None else f"#{number}"


def _in_repo(event: NormalizedEvent, palette: _Palette) -> str:
    return f"in {palette.strong(event.repo_name)} {palette.when(event)}"


@register("PushEvent")
def _describe_push(event: NormalizedEvent, palette: _Palette) -> str:
    commits = array_length(event.payload, "commits") or 0
    noun = "commit" if commits == 1 else "commits"
    return (
        f"- Pushed {palette.count(str(commits))} {noun} to "
        f"{palette.strong(event.repo_name)} {palette.when(event)}"
    )


@register("IssuesEvent")
def _describe_issues(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="acted on")
    number = palette.count(_number(event, "issue"))
    return f"- {capitalize_first(action)} issue {number} {_in_repo(event, palette)}"


@register("IssueCommentEvent")
def _describe_issue_comment(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="commented")
    number = palette.count(_number(event, "issue"))
    return (
        f"- {capitalize_first(action)} on issue {number} {_in_repo(event, palette)}"
    )


@register("PullRequestEvent")
def _describe_pull_request(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="acted on")
    # Only an exact "closed" is promoted; other actions keep their wording.
    if action == "closed" and is_true(event.payload, "pull_request", "merged"):
        action = "merged"
    number = palette.count(_number(event, "pull_request"))
    return (
        f"- {capitalize_first(action)} pull request {number} "
        f"{_in_repo(event, palette)}"
    )


@register("PullRequestReviewEvent")
def _describe_pull_request_review(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="reviewed")
    number = palette.count(_number(event, "pull_request"))
    return f"- {capitalize_first(action)} PR {number} {_in_repo(event, palette)}"


@register("PullRequestReviewCommentEvent")
def _describe_pull_request_review_comment(
    event: NormalizedEvent, palette: _Palette
) -> str:
    number = palette.count(_number(event, "pull_request"))
    return f"- Commented on PR {number} {_in_repo(event, palette)}"


@register("WatchEvent")
def _describe_watch(event: NormalizedEvent, palette: _Palette) -> str:
    return f"- Starred {palette.strong(event.repo_name)} {palette.when(event)}"


@register("CreateEvent")
def _describe_create(event: NormalizedEvent, palette: _Palette) -> str:
    ref_type = _text(event, "ref_type", default="thing")
    ref = _text(event, "ref", default=event.repo_name)
    return (
        f"- Created {palette.paint(ref_type, Color.GREEN)} {palette.strong(ref)} "
        f"{_in_repo(event, palette)}"
    )


@register("DeleteEvent")
def _describe_delete(event: NormalizedEvent, palette: _Palette) -> str:
    ref_type = _text(event, "ref_type", default="thing")
    ref = _text(event, "ref", default="")
    target = f"{ref_type} {ref}".strip()
    return (
        f"- Deleted {palette.paint(target, Color.YELLOW)} {_in_repo(event, palette)}"
    )


@register("ForkEvent")
def _describe_fork(event: NormalizedEvent, palette: _Palette) -> str:
    forkee = _text(event, "forkee", "full_name", default="a fork")
    return (
        f"- Forked {palette.strong(event.repo_name)} to {palette.strong(forkee)} "
        f"{palette.when(event)}"
    )


@register("ReleaseEvent")
def _describe_release(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="published")
    tag = _text(event, "release", "tag_name", default="a release")
    return (
        f"- {capitalize_first(action)} {palette.count(tag)} "
        f"{_in_repo(event, palette)}"
    )


@register("PublicEvent")
def _describe_public(event: NormalizedEvent, palette: _Palette) -> str:
    return f"- Open-sourced {palette.strong(event.repo_name)} {palette.when(event)}"


@register("MemberEvent")
def _describe_member(event: NormalizedEvent, palette: _Palette) -> str:
    action = _text(event, "action", default="changed")
    member = _text(event, "member", "login", default="a member")
    return (
        f"- {capitalize_first(action)} collaborator {palette.count(member)} "
        f"{_in_repo(event, palette)}"
    )


@register("GollumEvent")
def _describe_gollum(event: NormalizedEvent, palette: _Palette) -> str:
    return f"- Updated wiki {_in_repo(event, palette)}"


@register("CommitCommentEvent")
def _describe_commit_comment(event: NormalizedEvent, palette: _Palette) -> str:
    return f"- Commented on a commit {_in_repo(event, palette)}"


def _describe_generic(event: NormalizedEvent, palette: _Palette) -> str:
    return f"- {event.event_type} {_in_repo(event, palette)}"


def describe_event(event: NormalizedEvent, *, use_color: bool = False) -> str:
    """Return the display line for ``event``.

    Parameters
    ----------
    event : NormalizedEvent
        Decoded feed event.
    use_color : bool, optional
        Wrap fragments in ANSI escape sequences.

    Returns
    -------
    str
        A single line starting with ``"- "`` and no trailing newline.
        Unrecognised event types render as ``- {type} in {repo} ({ts})``.

    """
    describer = get_event_describer(event.event_type) or _describe_generic
    return describer(event, _Palette(enabled=use_color))
