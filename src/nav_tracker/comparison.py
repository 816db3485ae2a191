"""Tracked-scheme vs. peers comparison over a scraped NAV listing."""

import logging
from collections.abc import Iterable

from nav_tracker.config import TrackedPosition
from nav_tracker.models import Comparison, ComparisonEntry, NavRecord

logger = logging.getLogger(__name__)


def compare(records: Iterable[NavRecord], position: TrackedPosition) -> Comparison:
    """Compare the tracked scheme against every other scheme in ``records``.

    The tracked scheme is matched exactly (case-sensitive) on name and
    option; the first match wins. Every record that does not match becomes
    a peer, valued as if ``position.units`` had been bought with
    ``position.principal``.

    A missing tracked scheme is a normal outcome: ``tracked`` is None and
    ``peers`` covers the whole listing.
    """
    records = tuple(records)
    key = (position.scheme_name, position.option)

    tracked_record = next((r for r in records if r.scheme_key == key), None)
    if tracked_record is None:
        logger.warning(
            "Tracked scheme %s not found among %d schemes",
            position.display_name, len(records),
        )
        for index, record in enumerate(records, start=1):
            logger.info(
                "  %d. %s - NAV: %s [%s]", index, record.label, record.nav, record.date
            )
    else:
        logger.info(
            "Found tracked scheme %s, NAV %s", position.display_name, tracked_record.nav
        )

    def entry(record: NavRecord) -> ComparisonEntry:
        return ComparisonEntry.from_record(record, position.units, position.principal)

    return Comparison(
        tracked=entry(tracked_record) if tracked_record is not None else None,
        tracked_record=tracked_record,
        peers=tuple(entry(r) for r in records if r.scheme_key != key),
        schemes=records,
    )
