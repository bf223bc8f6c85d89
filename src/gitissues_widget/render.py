"""HTML rendering for the widget.

Styles are declared as camelCase property dicts, the way the desktop host
writes them, and converted to a ``<style>`` block. Bare numbers become
pixel values.
"""

import html
import re
from dataclasses import dataclass

from .config import Config
from .models import DisplayIssue, FeedState, Label

ROW_STYLE = {"borderBottom": "1px solid #fff"}
NUMBER_STYLE = {"paddingRight": 10, "textAlign": "right"}
TABLE_STYLE = {"borderCollapse": "separate"}
META_STYLE = {"color": "rgb(220, 255, 230)"}
COMMENTS_STYLE = {
    "textAlign": "right",
    "backgroundColor": "rgb(200, 180, 190)",
    "padding": "4px 8px",
    "margin": 2,
    "display": "inline-block",
    "borderRadius": 5,
    "color": "#333",
}
LABEL_STYLE = {
    "display": "inline-block",
    "padding": "1px 6px",
    "marginRight": 4,
    "borderRadius": 5,
}
INFO_TAG_STYLE = {
    "backgroundColor": "rgb(240, 240, 240)",
    "color": "#333",
    "padding": 10,
    "borderRadius": 5,
    "marginTop": 15,
    "textAlign": "center",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class WidgetStyle:
    """Static presentation settings for the widget container."""

    top: int = 240
    left: int = 45
    width: int = 400
    color: str = "#fff"
    background_color: str = "rgba(0, 0, 0, 0.6)"
    font_size: int = 11
    font_family: str = "Helvetica"

    @classmethod
    def from_config(cls, config: Config) -> "WidgetStyle":
        return cls(top=config.widget_top, left=config.widget_left)

    def container(self) -> dict:
        return {
            "position": "absolute",
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "color": self.color,
            "backgroundColor": self.background_color,
            "borderRadius": 5,
            "padding": 15,
            "fontSize": self.font_size,
            "fontFamily": self.font_family,
        }


def css_declarations(props: dict) -> str:
    """Convert ``{"borderRadius": 5}`` into ``border-radius: 5px;``."""
    parts = []
    for key, value in props.items():
        name = _CAMEL_RE.sub("-", key).lower()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = f"{value}px" if value else "0"
        parts.append(f"{name}: {value};")
    return " ".join(parts)


def stylesheet(style: WidgetStyle) -> str:
    rules = {
        ".gitissues": style.container(),
        ".gitissues table": TABLE_STYLE,
        ".gitissues .number": NUMBER_STYLE,
        ".gitissues .row": ROW_STYLE,
        ".gitissues .meta": META_STYLE,
        ".gitissues .comments": COMMENTS_STYLE,
        ".gitissues .label": LABEL_STYLE,
        ".gitissues .info-tag": INFO_TAG_STYLE,
        ".gitissues a": {"color": "inherit", "textDecoration": "none"},
    }
    return "\n".join(
        f"{selector} {{ {css_declarations(props)} }}" for selector, props in rules.items()
    )


def _label_text_color(color: str) -> str:
    """Pick black or white text for a hex label colour by perceived brightness."""
    red, green, blue = (int(color[i : i + 2], 16) for i in (0, 2, 4))
    return "#000" if 0.299 * red + 0.587 * green + 0.114 * blue > 128 else "#fff"


def _render_label(label: Label) -> str:
    color = label.color if re.fullmatch(r"[0-9a-fA-F]{6}", label.color) else "666666"
    return (
        f'<span class="label" style="background-color: #{color}; '
        f'color: {_label_text_color(color)};">{html.escape(label.name)}</span>'
    )


def _render_issue(issue: DisplayIssue) -> str:
    labels = "".join(_render_label(label) for label in issue.labels or ())
    if labels:
        labels = f"<br>{labels}"
    comments = ""
    if issue.comments is not None:
        comments = f'<span class="comments">{issue.comments}</span>'
    return (
        "<tr>"
        f'<td class="number">#{issue.number} </td>'
        '<td class="row">'
        f'<a href="{html.escape(issue.url)}">{html.escape(issue.title)}</a><br>'
        f'<span class="meta">by {html.escape(issue.user)} {html.escape(issue.time)}</span>'
        f"{labels}</td>"
        f"<td>{comments}</td>"
        "</tr>"
    )


def render(state: FeedState, style: WidgetStyle, repo_name: str) -> str:
    """Render ``state`` as a self-contained HTML fragment."""
    lines = [
        f"<style>\n{stylesheet(style)}\n</style>",
        '<div class="gitissues">',
        f"<h1>GitHub Issues for {html.escape(repo_name)}</h1>",
    ]
    if state.warning:
        lines.append(f'<p class="info-tag">{html.escape(state.warning)}</p>')
    lines.append("<table><tbody>")
    lines.extend(_render_issue(issue) for issue in state.display_issues)
    lines.append("</tbody></table>")
    if state.last_checked:
        lines.append(f'<p class="info-tag">Last updated on {html.escape(state.last_checked)}</p>')
    lines.append("</div>")
    return "\n".join(lines)
