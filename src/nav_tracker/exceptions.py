"""Custom exception hierarchy for the NAV tracker.

Exception tree:
    NavTrackerError
    +-- NetworkError      (transport failure on GET or POST)
    +-- HttpStatusError   (non-2xx POST response)
    +-- NoDataError       (zero records collected across all pages)

A tracked scheme missing from the listing is not an exception; see
``Comparison.tracked``.
"""

from typing import Optional


class NavTrackerError(Exception):
    """Base exception for all NAV tracker errors."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class NetworkError(NavTrackerError):
    """Transport-level failure (connection refused, DNS, timeout).

    Fatal to the request on the initial GET. Mid-pagination it only ends
    the page loop.
    """

    pass


class HttpStatusError(NavTrackerError):
    """A postback returned a status outside 200-299.

    Treated like NetworkError mid-pagination: the loop stops and the pages
    collected so far are kept.
    """

    pass


class NoDataError(NavTrackerError):
    """No NAV records were found on any page -- nothing to compare."""

    pass
