"""Scraper configuration and the tracked position for the NAV dashboard."""

from dataclasses import dataclass

QSIF_NAV_URL = "https://www.qsif.com/NAV/latestnav"

DEFAULT_SCHEME = "qsif Equity Long-Short Fund - Direct - Growth"
DEFAULT_OPTION = "Growth"
DEFAULT_UNITS = 99995
DEFAULT_PRINCIPAL = 1000000


@dataclass
class ScraperConfig:
    """Configuration for one scrape of the upstream NAV listing.

    All timing values are in seconds.
    """

    # Upstream page; GET for page 1, postbacks are POSTed to the same URL
    start_url: str = QSIF_NAV_URL

    # Hard ceiling on fetch-parse cycles (upstream runaway protection)
    max_pages: int = 5

    # Fixed throttle before each postback
    page_delay: float = 1.0

    # POST responses at or below this many characters are treated as failures
    min_response_length: int = 100

    # aiohttp total timeout per request
    request_timeout: float = 30.0

    # Browser family for the User-Agent header (Chrome, Firefox, Safari)
    browser_family: str = "Chrome"


@dataclass
class TrackedPosition:
    """The investment being compared against every other scheme."""

    scheme_name: str = DEFAULT_SCHEME
    option: str = DEFAULT_OPTION
    units: float = DEFAULT_UNITS
    principal: float = DEFAULT_PRINCIPAL

    @property
    def display_name(self) -> str:
        return f"{self.scheme_name} ({self.option})"
