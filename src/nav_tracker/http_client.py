"""Async HTTP client for the upstream NAV site.

One GET for the first listing page, one form-urlencoded POST per
postback. Both run on a single aiohttp session so the ASP.NET session
cookie (if the server sets one) survives between pages.

The client never retries: a failed postback ends pagination and the
caller keeps whatever pages it already has.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import urlencode

import aiohttp

from nav_tracker.config import ScraperConfig
from nav_tracker.exceptions import HttpStatusError, NetworkError
from nav_tracker.user_agents import UserAgentRotator

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Headers derived from the body; callers may never override them.
_PROTECTED_HEADERS = frozenset({"content-type", "content-length"})


class NavClient:
    """HTTP client for the upstream ASP.NET NAV listing.

    Usage:
        async with NavClient() as client:
            html = await client.fetch_get(url)
            next_html = await client.fetch_post(url, form_fields)
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        rotator: UserAgentRotator | None = None,
    ):
        if config is None:
            config = ScraperConfig()

        self._config = config
        self._rotator = rotator or UserAgentRotator(config.browser_family)
        self._session: aiohttp.ClientSession | None = None

        # Request counters
        self._request_count = 0
        self._success_count = 0
        self._failure_count = 0

    async def start(self) -> None:
        """Open the HTTP session. One User-Agent is used for its lifetime."""
        if self._session is not None:
            return
        self._session = aiohttp.ClientSession(
            headers=self._rotator.get_headers(),
            timeout=aiohttp.ClientTimeout(total=self._config.request_timeout),
        )
        logger.debug("HTTP session opened")

    async def close(self) -> None:
        if self._session is None:
            return
        session = self._session
        self._session = None
        await session.close()
        logger.debug("HTTP session closed")

    async def __aenter__(self) -> "NavClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _require_session(self, url: str) -> aiohttp.ClientSession:
        if self._session is None:
            raise NetworkError("Client not started. Call start() first.", url=url)
        return self._session

    async def fetch_get(self, url: str) -> str:
        """GET a page and return its body.

        The status code is not checked; an error page simply parses to
        zero rows.

        Raises:
            NetworkError: On connection failure or timeout.
        """
        session = self._require_session(url)
        self._request_count += 1
        try:
            async with session.get(url) as response:
                body = await response.text(errors="replace")
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            self._failure_count += 1
            raise NetworkError(f"GET {url} failed: {exc}", url=url) from exc

        self._success_count += 1
        logger.debug("GET %s -> %d (%d chars)", url, status, len(body))
        return body

    async def fetch_post(
        self,
        url: str,
        form_fields: dict[str, str],
        extra_headers: dict[str, str] | None = None,
    ) -> str:
        """POST form fields to ``url`` and return the response body.

        The body is form-urlencoded. Referer is set to ``url`` itself: the
        upstream rejects postbacks without a matching referer. Caller
        headers are merged in but cannot replace Content-Type or
        Content-Length.

        Raises:
            NetworkError: On connection failure or timeout.
            HttpStatusError: On a status outside 200-299.
        """
        session = self._require_session(url)
        body = urlencode(form_fields).encode("utf-8")

        headers = {"Referer": url}
        for name, value in (extra_headers or {}).items():
            if name.lower() in _PROTECTED_HEADERS:
                logger.debug("Ignoring caller header %s", name)
                continue
            headers[name] = value
        headers["Content-Type"] = FORM_CONTENT_TYPE
        headers["Content-Length"] = str(len(body))

        self._request_count += 1
        try:
            async with session.post(url, data=body, headers=headers) as response:
                text = await response.text(errors="replace")
                status = response.status
                reason = response.reason
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            self._failure_count += 1
            raise NetworkError(f"POST {url} failed: {exc}", url=url) from exc

        if not 200 <= status < 300:
            self._failure_count += 1
            raise HttpStatusError(
                f"Status {status}: {reason}", url=url, status_code=status
            )

        self._success_count += 1
        logger.debug(
            "POST %s (%d fields) -> %d (%d chars)",
            url, len(form_fields), status, len(text),
        )
        return text

    @property
    def stats(self) -> dict:
        """Return current client statistics."""
        total = self._request_count
        return {
            "requests": total,
            "successes": self._success_count,
            "failures": self._failure_count,
            "success_rate": (self._success_count / total) if total > 0 else 0.0,
        }
