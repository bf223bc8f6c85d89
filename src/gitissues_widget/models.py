"""Data models for the GitIssues widget."""

from dataclasses import dataclass, field, replace

INITIAL_WARNING = "Fetching GitHub data ..."


@dataclass(frozen=True)
class Label:
    """A GitHub issue label, reduced to what the widget draws."""

    name: str
    color: str

    def to_dict(self) -> dict:
        return {"name": self.name, "color": self.color}


@dataclass(frozen=True)
class DisplayIssue:
    """UI-ready projection of one open GitHub issue.

    ``time`` is a precomputed label ("yesterday", "last week" or
    "on <Mon> <day>, <year>"), not a timestamp.
    """

    title: str
    number: int
    url: str
    user: str
    time: str
    comments: int | None = None
    labels: tuple[Label, ...] | None = None

    def to_dict(self) -> dict:
        d: dict = {
            "title": self.title,
            "number": self.number,
            "url": self.url,
            "user": self.user,
            "time": self.time,
        }
        if self.comments is not None:
            d["comments"] = self.comments
        if self.labels is not None:
            d["labels"] = [label.to_dict() for label in self.labels]
        return d


@dataclass(frozen=True)
class FeedState:
    """Everything needed to render one refresh cycle."""

    warning: str = ""
    display_issues: tuple[DisplayIssue, ...] = field(default_factory=tuple)
    last_checked: str = ""

    @classmethod
    def initial(cls) -> "FeedState":
        return cls(warning=INITIAL_WARNING)

    def with_warning(self, warning: str) -> "FeedState":
        return replace(self, warning=warning)

    def to_dict(self) -> dict:
        return {
            "warning": self.warning,
            "display_issues": [issue.to_dict() for issue in self.display_issues],
            "last_checked": self.last_checked,
        }


@dataclass(frozen=True)
class FetchSucceeded:
    """Parsed issues payload from a completed fetch."""

    data: list | None


@dataclass(frozen=True)
class FetchFailed:
    """A fetch that failed; ``error`` is shown verbatim in the banner."""

    error: str


FetchEvent = FetchSucceeded | FetchFailed
