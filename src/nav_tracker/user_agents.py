"""Browser-like request headers for the upstream NAV site.

The upstream ASP.NET site rejects postbacks that do not look like they
come from a browser, so every request carries a real desktop
User-Agent drawn from fake-useragent.

USAGE NOTE: Real browsers do NOT change User-Agent mid-session. NavClient
calls get_headers() once per client, i.e. once per scrape, so the GET and
every postback of one pagination run share the same User-Agent.
"""

from fake_useragent import UserAgent

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

_KNOWN_FAMILIES = {
    "chrome": "Chrome",
    "edge": "Edge",
    "firefox": "Firefox",
    "safari": "Safari",
}


class UserAgentRotator:
    """Hands out desktop User-Agent strings of one browser family."""

    def __init__(self, browser_family: str = "Chrome"):
        self._browser_family = self._normalize_family(browser_family)
        self._ua = UserAgent(
            browsers=[self._browser_family],
            platforms=["desktop"],
            min_version=120.0,
        )

    @property
    def browser_family(self) -> str:
        return self._browser_family

    @staticmethod
    def _normalize_family(name: str) -> str:
        """Map a family name to fake-useragent's spelling.

        Defaults to "Chrome" for unknown names.
        """
        return _KNOWN_FAMILIES.get(name.strip().lower(), "Chrome")

    def get(self) -> str:
        """Return a random UA string from the configured browser family."""
        return self._ua.random

    def get_headers(self) -> dict[str, str]:
        """Return the base headers sent with every request.

        For Chrome-family browsers, includes Sec-CH-UA-Platform and
        Sec-CH-UA-Mobile headers that real Chrome browsers send.
        """
        headers: dict[str, str] = {
            "User-Agent": self.get(),
            "Accept": ACCEPT_HTML,
        }

        if self._browser_family in ("Chrome", "Edge"):
            headers["Sec-CH-UA-Platform"] = '"Windows"'
            headers["Sec-CH-UA-Mobile"] = "?0"

        return headers
