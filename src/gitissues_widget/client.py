"""GitHub REST API client for the issues endpoint."""

import logging

import httpx

from .config import Config
from .models import FetchEvent, FetchFailed, FetchSucceeded

logger = logging.getLogger(__name__)


class GitHubClient:
    """Async client for the GitHub v3 issues endpoint.

    Designed for single-instance lifecycle: create once at startup and reuse
    for every poll cycle. Requests are unauthenticated and only fetch the
    first page the API returns.
    """

    def __init__(self, config: Config):
        self._config = config
        self.api_url = config.github_api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=30.0,
            follow_redirects=True,
            headers={"Accept": "application/vnd.github+json"},
        )

    async def fetch_issues(self, owner: str, name: str) -> list[dict]:
        """Fetch the issues of ``owner/name``.

        Returns:
            The decoded JSON list of issue records, open and closed mixed.

        Raises:
            FetchError: On transport failure, non-2xx status or a body that
                is not a JSON list.
        """
        url = f"{self.api_url}/repos/{owner}/{name}/issues"
        logger.debug("Fetching issues from %s", url)

        try:
            response = await self._client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"GitHub API request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"GitHub API request error: {e}") from e
        except ValueError as e:
            raise FetchError(f"Malformed JSON from GitHub API: {e}") from e

        if not isinstance(data, list):
            raise FetchError(f"Unexpected GitHub API response: {type(data).__name__}")

        logger.info("Retrieved %d issues for %s/%s", len(data), owner, name)
        return data

    async def command(self) -> FetchEvent:
        """Fetch the configured repository and wrap the outcome as an event."""
        try:
            data = await self.fetch_issues(self._config.repo_owner, self._config.repo_name)
        except FetchError as e:
            logger.warning("Fetch failed: %s", e)
            return FetchFailed(error=str(e))
        return FetchSucceeded(data=data)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()


class FetchError(Exception):
    """Raised when the issues cannot be fetched or decoded."""
