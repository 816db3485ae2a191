"""NAV table parser for the upstream latest-NAV listing page.

Provides:
- parse_rows: pure function extracting NavRecord rows from page HTML
- parse_nav: permissive, locale-invariant NAV cell parsing
"""

import logging
import math
import re

from nav_tracker.markup import iter_row_cells
from nav_tracker.models import NavRecord

logger = logging.getLogger(__name__)

# Longest leading decimal number, e.g. "123.45 *" -> 123.45
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_nav(text: str) -> float:
    """Parse a NAV cell into a float, NaN when it has no numeric prefix.

    Decimal point is always '.', independent of locale. Trailing garbage
    after the number is ignored.
    """
    match = _LEADING_FLOAT.match(text.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


def parse_rows(html: str) -> list[NavRecord]:
    """Parse every NAV row on a listing page.

    Pure function: HTML string in, records out, in document order.

    Returns:
        List of NavRecord. Empty if the page carries no NAV table; a page
        without rows is a normal outcome, not an error.
    """
    records: list[NavRecord] = []
    for date, name, option, nav_text in iter_row_cells(html):
        nav = parse_nav(nav_text)
        if math.isnan(nav):
            logger.warning("Unparseable NAV %r for %s (%s)", nav_text, name.strip(), option.strip())
        records.append(
            NavRecord(date=date, name=name.strip(), option=option.strip(), nav=nav)
        )
    return records
