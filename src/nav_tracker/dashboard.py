"""One scrape-and-compare cycle, turned into a rendering-ready payload.

Provides:
- build_dashboard: scrape every page, compare, build the payload
- build_payload: pure formatting of a Comparison for the templates
- chart_color: random bar colour for the comparison chart
"""

import logging
import random

from nav_tracker.comparison import compare
from nav_tracker.config import ScraperConfig, TrackedPosition
from nav_tracker.exceptions import NoDataError
from nav_tracker.http_client import NavClient
from nav_tracker.models import Comparison, ComparisonEntry, DashboardPayload, PeerCard
from nav_tracker.pagination import Paginator

logger = logging.getLogger(__name__)


def _gain_class(gain_loss: float) -> str:
    return "positive" if gain_loss >= 0 else "negative"


def chart_color(rng: random.Random) -> str:
    """Random mid-range colour, each channel in [30, 229]."""
    r, g, b = (rng.randrange(200) + 30 for _ in range(3))
    return f"rgb({r},{g},{b})"


def _peer_card(entry: ComparisonEntry) -> PeerCard:
    return PeerCard(
        name=entry.label,
        nav=f"{entry.nav:.4f}",
        value=f"{entry.value:.2f}",
        gain_loss=f"{entry.gain_loss:.2f}",
        return_percent=f"{entry.return_percent:.2f}",
        gain_class=_gain_class(entry.gain_loss),
    )


def build_payload(
    comparison: Comparison,
    position: TrackedPosition,
    pages_visited: int,
    rng: random.Random | None = None,
) -> DashboardPayload:
    """Format a comparison for the dashboard or not-found template.

    This is where values are rounded: NAV to 4 decimals, money and
    percentages to 2.
    """
    if not comparison.found:
        return DashboardPayload(
            scheme_name=position.display_name,
            found=False,
            pages_visited=pages_visited,
            units=position.units,
            total_schemes=len(comparison.schemes),
            schemes_list=[
                f"{s.name} ({s.option}) - NAV: ₹{s.nav} [{s.date}]"
                for s in comparison.schemes
            ],
        )

    rng = rng or random.Random()
    tracked = comparison.tracked
    labels = [tracked.label] + [peer.label for peer in comparison.peers]

    return DashboardPayload(
        scheme_name=position.display_name,
        found=True,
        pages_visited=pages_visited,
        date=comparison.tracked_record.date,
        nav=f"{tracked.nav:.4f}",
        units=position.units,
        current_value=f"{tracked.value:.2f}",
        gain_loss=f"{tracked.gain_loss:.2f}",
        return_percent=f"{tracked.return_percent:.2f}",
        gain_class=_gain_class(tracked.gain_loss),
        peers=[_peer_card(peer) for peer in comparison.peers],
        chart_labels=labels,
        chart_values=[tracked.value] + [peer.value for peer in comparison.peers],
        chart_colors=[chart_color(rng) for _ in labels],
        total_schemes=len(comparison.schemes),
    )


async def build_dashboard(
    config: ScraperConfig | None = None,
    position: TrackedPosition | None = None,
    client: NavClient | None = None,
) -> DashboardPayload:
    """Run one full scrape-and-compare cycle.

    Each call performs its own independent scrape. When ``client`` is
    None a fresh NavClient is opened and closed around the scrape.

    Raises:
        NetworkError: If the first page cannot be fetched.
        NoDataError: If no NAV rows were found on any page.
    """
    config = config or ScraperConfig()
    position = position or TrackedPosition()

    if client is None:
        async with NavClient(config) as own_client:
            result = await Paginator(own_client, config).fetch_all_pages()
    else:
        result = await Paginator(client, config).fetch_all_pages()

    if not result.records:
        raise NoDataError("No NAV data found", url=config.start_url)

    comparison = compare(result.records, position)
    return build_payload(comparison, position, result.pages_visited)
