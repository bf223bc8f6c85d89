"""Turns fetch results into the widget's display state.

``transform`` is pure: it never mutates ``previous`` and returns a new
``FeedState`` for every event. A failed or empty fetch keeps the last good
issue list on screen and only swaps the banner.
"""

import logging
from datetime import datetime

from .dates import format_last_checked, parse_timestamp, relative_time
from .models import DisplayIssue, FeedState, FetchEvent, FetchFailed, Label

logger = logging.getLogger(__name__)

MAX_DISPLAY_ISSUES = 10
NO_DATA_WARNING = "No data."


def _field(raw: dict, key: str, kind: type):
    value = raw[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _label(raw: dict) -> Label:
    return Label(name=_field(raw, "name", str), color=_field(raw, "color", str))


def build_display_issue(raw: dict, now: datetime) -> DisplayIssue | None:
    """Project one raw issue record, or return None if it is unusable."""
    try:
        updated_at = parse_timestamp(_field(raw, "updated_at", str))
        user = raw["user"]
        if not isinstance(user, dict):
            raise TypeError("user must be an object")
        comments = raw.get("comments")
        if not isinstance(comments, int) or isinstance(comments, bool):
            comments = None
        labels = raw.get("labels")
        return DisplayIssue(
            title=_field(raw, "title", str),
            number=_field(raw, "number", int),
            url=_field(raw, "html_url", str),
            user=_field(user, "login", str),
            time=relative_time(updated_at, now),
            comments=comments,
            labels=tuple(_label(lb) for lb in labels) if labels is not None else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Skipping malformed issue %r: %s", raw.get("number"), e)
        return None


def transform(event: FetchEvent, previous: FeedState, now: datetime | None = None) -> FeedState:
    """Compute the next state from a fetch event and the previous state."""
    if isinstance(event, FetchFailed):
        return previous.with_warning(event.error)

    if not event.data:
        return previous.with_warning(NO_DATA_WARNING)

    if now is None:
        now = datetime.now().astimezone()

    display_issues: list[DisplayIssue] = []
    for raw in event.data:
        if not isinstance(raw, dict) or raw.get("state") != "open":
            continue
        issue = build_display_issue(raw, now)
        if issue is not None:
            display_issues.append(issue)
        if len(display_issues) == MAX_DISPLAY_ISSUES:
            break

    logger.info("Displaying %d open issues", len(display_issues))
    return FeedState(
        warning="",
        display_issues=tuple(display_issues),
        last_checked=format_last_checked(now),
    )
