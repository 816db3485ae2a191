"""CLI entry point for the NAV tracker.

Provides ``main()`` as the sync entry point for the ``nav-tracker``
console script. ``scrape`` runs one scrape-and-compare cycle and prints a
summary; ``serve`` starts the dashboard web app.

Usage::

    nav-tracker scrape                         # compare the default position
    nav-tracker scrape --units 500 --principal 5000
    nav-tracker serve --port 8080              # dashboard on :8080
"""

import argparse
import asyncio
import logging
import os
import sys

from nav_tracker.config import (
    DEFAULT_OPTION,
    DEFAULT_PRINCIPAL,
    DEFAULT_SCHEME,
    DEFAULT_UNITS,
    QSIF_NAV_URL,
    ScraperConfig,
    TrackedPosition,
)
from nav_tracker.dashboard import build_dashboard
from nav_tracker.exceptions import NavTrackerError
from nav_tracker.logging_config import setup_logging
from nav_tracker.models import DashboardPayload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the nav-tracker CLI."""
    parser = argparse.ArgumentParser(
        prog="nav-tracker",
        description="Compare a tracked fund against every scheme on the latest NAV listing",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=QSIF_NAV_URL,
        help=f"NAV listing page (default: {QSIF_NAV_URL})",
    )
    parser.add_argument(
        "--scheme",
        type=str,
        default=DEFAULT_SCHEME,
        help="Tracked scheme name, matched exactly",
    )
    parser.add_argument(
        "--option",
        type=str,
        default=DEFAULT_OPTION,
        help=f"Tracked scheme option (default: {DEFAULT_OPTION})",
    )
    parser.add_argument(
        "--units",
        type=float,
        default=DEFAULT_UNITS,
        help=f"Units held (default: {DEFAULT_UNITS})",
    )
    parser.add_argument(
        "--principal",
        type=float,
        default=DEFAULT_PRINCIPAL,
        help=f"Amount invested (default: {DEFAULT_PRINCIPAL})",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum listing pages to fetch (default: 5)",
    )
    parser.add_argument(
        "--page-delay",
        type=float,
        default=None,
        help="Seconds to wait before each postback (default: 1.0)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write a DEBUG run log into this directory",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show DEBUG output on the console",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("scrape", help="Run one scrape-and-compare cycle and print it")
    serve = commands.add_parser("serve", help="Serve the dashboard over HTTP")
    serve.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: $PORT or 3000)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> tuple[ScraperConfig, TrackedPosition]:
    """Turn parsed arguments into the scraper config and tracked position."""
    overrides = {"start_url": args.url}
    if args.max_pages is not None:
        overrides["max_pages"] = args.max_pages
    if args.page_delay is not None:
        overrides["page_delay"] = args.page_delay
    config = ScraperConfig(**overrides)

    position = TrackedPosition(
        scheme_name=args.scheme,
        option=args.option,
        units=args.units,
        principal=args.principal,
    )
    return config, position


def format_summary(payload: DashboardPayload) -> str:
    """Format a dashboard payload into a human-readable summary string."""
    lines = ["=" * 60, payload.scheme_name, "-" * 60]

    if not payload.found:
        lines.append(f"Not found among {payload.total_schemes} schemes:")
        lines.extend(
            f"  {index}. {line}"
            for index, line in enumerate(payload.schemes_list, start=1)
        )
        lines.append("=" * 60)
        return "\n".join(lines)

    lines += [
        f"NAV date:    {payload.date}",
        f"NAV:         {payload.nav}",
        f"Value:       {payload.current_value}",
        f"Gain/Loss:   {payload.gain_loss} ({payload.return_percent}%)",
        "-" * 60,
    ]
    for card in payload.peers:
        lines.append(
            f"{card.name}: NAV {card.nav}, value {card.value}, "
            f"gain {card.gain_loss} ({card.return_percent}%)"
        )
    lines += [
        "-" * 60,
        f"Schemes:     {payload.total_schemes} from {payload.pages_visited} page(s)",
        "=" * 60,
    ]
    return "\n".join(lines)


async def async_main(args: argparse.Namespace) -> int:
    """Async entry point for ``scrape``: run one cycle, print the summary."""
    config, position = config_from_args(args)
    logger.info(
        "Starting nav-tracker: url=%s, scheme=%s, max_pages=%d, page_delay=%.1fs",
        config.start_url, position.display_name, config.max_pages, config.page_delay,
    )
    try:
        payload = await build_dashboard(config, position)
    except NavTrackerError as exc:
        logger.error("Error: %s", exc)
        return 1

    print(format_summary(payload))
    return 0


def serve(args: argparse.Namespace) -> None:
    """Run the dashboard app under uvicorn."""
    import uvicorn

    from nav_tracker.web import create_app

    config, position = config_from_args(args)
    port = args.port if args.port is not None else int(os.environ.get("PORT", 3000))
    logger.info("Dashboard available at http://%s:%d", args.host, port)
    uvicorn.run(create_app(config, position), host=args.host, port=port, log_config=None)


def main(argv: list[str] | None = None) -> None:
    """Sync entry point for the nav-tracker console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        log_dir=args.log_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
    )

    if args.command == "serve":
        serve(args)
        return

    try:
        exit_code = asyncio.run(async_main(args))
    except KeyboardInterrupt:
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
