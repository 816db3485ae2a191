"""Postback pagination over the upstream NAV listing.

Provides:
- PageState, TerminationReason: the states and exits of the page loop
- Accumulator: immutable value threaded through every transition
- parse_page, plan_next_page, accept_response: pure transitions
- Paginator / fetch_all_pages: async driver that performs the requests

The loop is a small state machine::

    FETCHING --parse_page--> PARSED --plan_next_page--> AWAITING_NEXT_PAGE
        ^                      |                              |
        |                      v                              v
        +--accept_response-- (POST) <-------------------------+
                               |
    any step ----------------> TERMINATED

Every failure after the first GET ends the loop instead of raising:
partial results are always returned, and "no more pages" and "pagination
broke" look the same to the caller apart from ``termination``.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from nav_tracker.config import ScraperConfig
from nav_tracker.exceptions import HttpStatusError, NetworkError
from nav_tracker.http_client import NavClient
from nav_tracker.markup import has_next_marker
from nav_tracker.models import NavRecord
from nav_tracker.nav_parser import parse_rows
from nav_tracker.postback import PageFormState, extract_form_state
from nav_tracker.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class PageState(Enum):
    FETCHING = "fetching"
    PARSED = "parsed"
    AWAITING_NEXT_PAGE = "awaiting_next_page"
    TERMINATED = "terminated"


class TerminationReason(str, Enum):
    """Why the page loop stopped."""

    LAST_PAGE = "last_page"                    # no "Next" marker
    DUPLICATE_PAGE = "duplicate_page"          # page repeats collected rows
    MISSING_FORM_STATE = "missing_form_state"  # no viewstate/eventvalidation
    NO_EVENT_TARGET = "no_event_target"        # "Next" postback unresolved
    SHORT_RESPONSE = "short_response"          # postback body too short
    EMPTY_RESPONSE = "empty_response"          # postback body has no rows
    ECHOED_PAGE = "echoed_page"                # server returned the same page
    POST_FAILED = "post_failed"                # transport or status error
    PAGE_LIMIT = "page_limit"                  # max_pages reached


@dataclass(frozen=True)
class Accumulator:
    """Loop state: everything collected so far plus the page in hand."""

    state: PageState
    html: str
    records: tuple[NavRecord, ...] = ()
    page_records: tuple[NavRecord, ...] = ()
    pages_visited: int = 0
    form_state: PageFormState | None = None
    termination: TerminationReason | None = None

    def terminate(self, reason: TerminationReason) -> "Accumulator":
        return replace(
            self, state=PageState.TERMINATED, termination=reason, form_state=None
        )


@dataclass(frozen=True)
class ScrapeResult:
    """Records of every successfully fetched page, in page order."""

    records: tuple[NavRecord, ...]
    pages_visited: int
    termination: TerminationReason


def _is_duplicate_page(
    page_records: list[NavRecord], collected: tuple[NavRecord, ...]
) -> bool:
    """True when every record on the page was already collected.

    Compared by (name, option, nav). Two distinct pages sharing every
    row's values would also match; the upstream offers no page cursor to
    do better.
    """
    if not page_records:
        return False
    seen = {record.page_key for record in collected}
    # NaN is a singleton, so set membership would match it by identity.
    return all(
        not math.isnan(record.nav) and record.page_key in seen
        for record in page_records
    )


def parse_page(acc: Accumulator) -> Accumulator:
    """FETCHING -> PARSED (or TERMINATED on a duplicate page)."""
    page_number = acc.pages_visited + 1
    page_records = parse_rows(acc.html)
    logger.info("Page %d: %d schemes", page_number, len(page_records))

    if page_number > 1 and _is_duplicate_page(page_records, acc.records):
        logger.warning(
            "Page %d repeats already collected schemes, stopping", page_number
        )
        return acc.terminate(TerminationReason.DUPLICATE_PAGE)

    if page_records:
        logger.debug(
            "Page %d schemes: %s",
            page_number, ", ".join(record.label for record in page_records),
        )

    return replace(
        acc,
        state=PageState.PARSED,
        records=acc.records + tuple(page_records),
        page_records=tuple(page_records),
        pages_visited=page_number,
    )


def plan_next_page(acc: Accumulator, max_pages: int) -> Accumulator:
    """PARSED -> AWAITING_NEXT_PAGE, or TERMINATED when there is no way on."""
    if not has_next_marker(acc.html):
        logger.info("Page %d is the last page", acc.pages_visited)
        return acc.terminate(TerminationReason.LAST_PAGE)

    if acc.pages_visited >= max_pages:
        logger.warning("Page limit (%d) reached, stopping", max_pages)
        return acc.terminate(TerminationReason.PAGE_LIMIT)

    form_state = extract_form_state(acc.html)
    if form_state is None:
        logger.warning(
            "Page %d has a Next link but no postback state, stopping",
            acc.pages_visited,
        )
        return acc.terminate(TerminationReason.MISSING_FORM_STATE)

    if not form_state.has_target:
        logger.warning(
            "Page %d: could not resolve the Next postback target, stopping",
            acc.pages_visited,
        )
        return acc.terminate(TerminationReason.NO_EVENT_TARGET)

    logger.debug(
        "Next target %s (%d extra hidden fields)",
        form_state.event_target, len(form_state.extra_hidden_fields),
    )
    return replace(acc, state=PageState.AWAITING_NEXT_PAGE, form_state=form_state)


def accept_response(
    acc: Accumulator, response_html: str, min_length: int
) -> Accumulator:
    """AWAITING_NEXT_PAGE -> FETCHING with the postback response as the page.

    A response that is too short, has no rows, or looks like the current
    page echoed back ends the loop and is discarded.
    """
    if len(response_html) <= min_length:
        logger.warning(
            "Postback response too short (%d chars), stopping", len(response_html)
        )
        return acc.terminate(TerminationReason.SHORT_RESPONSE)

    response_records = parse_rows(response_html)
    if not response_records:
        logger.warning("Postback response has no schemes, stopping")
        return acc.terminate(TerminationReason.EMPTY_RESPONSE)

    if (
        acc.page_records
        and len(response_records) == len(acc.page_records)
        and response_records[0].scheme_key == acc.page_records[0].scheme_key
    ):
        logger.warning("Postback response looks like the same page, stopping")
        return acc.terminate(TerminationReason.ECHOED_PAGE)

    return replace(
        acc,
        state=PageState.FETCHING,
        html=response_html,
        page_records=(),
        form_state=None,
    )


class Paginator:
    """Drives the page loop against a NavClient.

    Usage::

        async with NavClient(config) as client:
            result = await Paginator(client, config).fetch_all_pages(url)
    """

    def __init__(
        self,
        client: NavClient,
        config: ScraperConfig | None = None,
        limiter: RateLimiter | None = None,
    ):
        if config is None:
            config = ScraperConfig()

        self._client = client
        self._config = config
        self._limiter = limiter or RateLimiter(config)

    async def fetch_all_pages(self, start_url: str | None = None) -> ScrapeResult:
        """Fetch the listing and follow its "Next" postbacks.

        Raises:
            NetworkError: Only when the initial GET fails. Later failures
                end pagination and keep the pages collected so far.
        """
        url = start_url or self._config.start_url
        logger.info("Fetching NAV listing from %s", url)

        html = await self._client.fetch_get(url)
        acc = Accumulator(state=PageState.FETCHING, html=html)

        while acc.state is not PageState.TERMINATED:
            if acc.state is PageState.FETCHING:
                acc = parse_page(acc)
            elif acc.state is PageState.PARSED:
                acc = plan_next_page(acc, self._config.max_pages)
            elif acc.state is PageState.AWAITING_NEXT_PAGE:
                acc = await self._post_next(url, acc)

        logger.info(
            "Pagination finished (%s): %d schemes from %d page(s)",
            acc.termination.value, len(acc.records), acc.pages_visited,
        )
        return ScrapeResult(
            records=acc.records,
            pages_visited=acc.pages_visited,
            termination=acc.termination,
        )

    async def _post_next(self, url: str, acc: Accumulator) -> Accumulator:
        fields = acc.form_state.to_post_fields()
        await self._limiter.wait()
        logger.info(
            "Requesting page %d (%d form fields)", acc.pages_visited + 1, len(fields)
        )
        try:
            response_html = await self._client.fetch_post(url, fields)
        except (NetworkError, HttpStatusError) as exc:
            logger.error("Postback for page %d failed: %s", acc.pages_visited + 1, exc)
            return acc.terminate(TerminationReason.POST_FAILED)
        return accept_response(acc, response_html, self._config.min_response_length)


async def fetch_all_pages(
    client: NavClient, start_url: str | None = None, config: ScraperConfig | None = None
) -> ScrapeResult:
    """Convenience wrapper around ``Paginator(client, config).fetch_all_pages``."""
    return await Paginator(client, config).fetch_all_pages(start_url)
