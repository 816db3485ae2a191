"""Fixed inter-page throttle for postback pagination.

The upstream is a small ASP.NET site; each postback is preceded by a
fixed courtesy pause. No jitter and no adaptive backoff: the scrape makes
at most a handful of requests and never retries.
"""

import asyncio
import logging

from nav_tracker.config import ScraperConfig

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sleeps a fixed delay before each postback.

    Usage::

        limiter = RateLimiter(config)
        await limiter.wait()
        html = await client.fetch_post(url, fields)
    """

    def __init__(self, config: ScraperConfig | None = None):
        if config is None:
            config = ScraperConfig()

        self._delay = max(0.0, config.page_delay)
        self._waits = 0

    @property
    def delay(self) -> float:
        """Pause before each postback, in seconds."""
        return self._delay

    @property
    def waits(self) -> int:
        """Number of completed waits."""
        return self._waits

    async def wait(self) -> float:
        """Sleep for the configured delay.

        Returns:
            The delay slept, in seconds.
        """
        if self._delay > 0:
            logger.debug("Throttling %.1fs before postback", self._delay)
            await asyncio.sleep(self._delay)
        self._waits += 1
        return self._delay
