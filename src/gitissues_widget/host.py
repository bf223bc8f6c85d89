"""Poll loop that drives the widget: fetch, transform, render.

``WidgetHost`` owns the timer and the single ``FeedState``. Cycles run one at
a time; once the host is stopped, a fetch still in flight is allowed to
finish but its result is dropped.
"""

import asyncio
import logging
import signal
import sys
from collections.abc import Callable

from .client import GitHubClient
from .config import Config, load_config
from .feed import transform
from .models import FeedState, FetchFailed
from .render import WidgetStyle, render

logger = logging.getLogger(__name__)

RenderCallback = Callable[[str], None]


class WidgetHost:
    """Runs poll cycles for one repository and keeps the latest state."""

    def __init__(
        self,
        client: GitHubClient,
        config: Config,
        style: WidgetStyle | None = None,
        on_render: RenderCallback | None = None,
    ):
        self._client = client
        self._config = config
        self._style = style or WidgetStyle.from_config(config)
        self._on_render = on_render
        self._lock = asyncio.Lock()
        self._stopped = asyncio.Event()
        self._last_poll: float | None = None
        self.state = self.initial_state

    @property
    def initial_state(self) -> FeedState:
        return FeedState.initial()

    @property
    def refresh_frequency(self) -> int:
        """Milliseconds between poll cycles."""
        return self._config.refresh_frequency_ms

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def render(self) -> str:
        return render(self.state, self._style, self._config.repo_name)

    async def poll_once(self) -> FeedState:
        """Run one fetch-transform-render cycle. Never raises."""
        async with self._lock:
            try:
                event = await self._client.command()
            except Exception as e:
                logger.error("Poll cycle failed: %s", e, exc_info=True)
                event = FetchFailed(error=str(e))

            if self.stopped:
                logger.info("Widget stopped, dropping fetch result")
                return self.state

            self.state = transform(event, self.state)
            self._last_poll = asyncio.get_running_loop().time()
            if self._on_render:
                try:
                    self._on_render(self.render())
                except Exception as e:
                    logger.error("Publishing widget failed: %s", e, exc_info=True)
            return self.state

    async def ensure_fresh(self) -> FeedState:
        """Poll only if the last cycle is older than the refresh interval."""
        if self._last_poll is not None:
            age = asyncio.get_running_loop().time() - self._last_poll
            if age < self.refresh_frequency / 1000:
                return self.state
        return await self.poll_once()

    async def run(self) -> None:
        """Poll on a fixed interval until ``stop()`` is called."""
        interval = self.refresh_frequency / 1000
        logger.info(
            "Polling %s every %.0f seconds", self._config.github_repo, interval
        )
        while not self.stopped:
            await self.poll_once()
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass

    def stop(self) -> None:
        self._stopped.set()


def _publisher(config: Config) -> RenderCallback:
    if config.output_path is None:

        def write_stdout(markup: str) -> None:
            sys.stdout.write(markup + "\n")
            sys.stdout.flush()

        return write_stdout

    def write_file(markup: str) -> None:
        config.output_path.write_text(markup, encoding="utf-8")
        logger.debug("Wrote widget to %s", config.output_path)

    return write_file


async def _run(config: Config) -> None:
    client = GitHubClient(config)
    host = WidgetHost(client, config, on_render=_publisher(config))

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, host.stop)

    try:
        await host.run()
    finally:
        logger.info("Shutting down, closing connections...")
        await client.aclose()


def main() -> None:
    """Run the widget poll loop in the foreground."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    asyncio.run(_run(load_config()))


if __name__ == "__main__":
    main()
