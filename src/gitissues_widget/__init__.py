"""GitIssues widget: open issues of one GitHub repository as an HTML table."""

from .client import FetchError, GitHubClient
from .feed import transform
from .host import WidgetHost
from .models import DisplayIssue, FeedState, FetchFailed, FetchSucceeded, Label
from .render import WidgetStyle, render

__all__ = [
    "GitHubClient",
    "FetchError",
    "WidgetHost",
    "transform",
    "render",
    "WidgetStyle",
    "DisplayIssue",
    "FeedState",
    "FetchFailed",
    "FetchSucceeded",
    "Label",
]

__version__ = "0.1.0"
