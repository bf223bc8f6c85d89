"""Configuration management for the GitIssues widget.

All configuration comes from environment variables. Uses pydantic-settings
for validation so a malformed repository name or refresh interval fails at
startup instead of on the first poll.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Widget configuration loaded from environment variables."""

    github_repo: str = Field(default="felixhageloh/uebersicht", alias="GITISSUES_REPO")
    github_api_url: str = Field(default="https://api.github.com", alias="GITHUB_API_URL")
    refresh_frequency_ms: int = Field(default=600_000, gt=0, alias="GITISSUES_REFRESH_MS")
    widget_top: int = Field(default=240, alias="GITISSUES_TOP")
    widget_left: int = Field(default=45, alias="GITISSUES_LEFT")
    output_path: Path | None = Field(default=None, alias="GITISSUES_OUTPUT")
    server_host: str = Field(default="127.0.0.1", alias="MCP_SERVER_HOST")
    server_port: int = Field(default=8000, alias="MCP_SERVER_PORT")

    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("github_repo")
    @classmethod
    def _check_repo(cls, value: str) -> str:
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must be in <owner>/<name> format, got {value!r}")
        return f"{owner}/{name}"

    @property
    def repo_owner(self) -> str:
        return self.github_repo.split("/")[0]

    @property
    def repo_name(self) -> str:
        return self.github_repo.split("/")[1]


def load_config() -> Config:
    """Load and validate config from environment. Raises on invalid values."""
    return Config()
