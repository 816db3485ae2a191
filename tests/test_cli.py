"""Tests for the CLI argument parsing and the scrape command."""

from unittest.mock import AsyncMock, patch

import pytest

from nav_tracker.cli import (
    async_main,
    build_parser,
    config_from_args,
    format_summary,
    main,
)
from nav_tracker.config import DEFAULT_SCHEME, QSIF_NAV_URL
from nav_tracker.exceptions import NoDataError
from nav_tracker.models import DashboardPayload, PeerCard


class TestBuildParser:
    """Tests for CLI argument parsing."""

    def test_default_args(self):
        """Bare scrape command produces correct defaults."""
        args = build_parser().parse_args(["scrape"])
        assert args.command == "scrape"
        assert args.url == QSIF_NAV_URL
        assert args.scheme == DEFAULT_SCHEME
        assert args.option == "Growth"
        assert args.units == 99995
        assert args.principal == 1000000
        assert args.max_pages is None
        assert args.log_dir is None
        assert args.verbose is False

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_serve_options(self):
        args = build_parser().parse_args(["serve", "--host", "0.0.0.0", "--port", "8080"])
        assert args.command == "serve"
        assert args.host == "0.0.0.0"
        assert args.port == 8080

    def test_position_flags(self):
        args = build_parser().parse_args([
            "--scheme", "FundA",
            "--option", "IDCW",
            "--units", "12.5",
            "--principal", "500",
            "scrape",
        ])
        _, position = config_from_args(args)
        assert position.scheme_name == "FundA"
        assert position.option == "IDCW"
        assert position.units == 12.5
        assert position.principal == 500

    def test_scraper_overrides(self):
        args = build_parser().parse_args([
            "--url", "https://nav.example.test/latest",
            "--max-pages", "3",
            "--page-delay", "0.25",
            "scrape",
        ])
        config, _ = config_from_args(args)
        assert config.start_url == "https://nav.example.test/latest"
        assert config.max_pages == 3
        assert config.page_delay == 0.25

    def test_unset_overrides_keep_config_defaults(self):
        config, _ = config_from_args(build_parser().parse_args(["scrape"]))
        assert config.max_pages == 5
        assert config.page_delay == 1.0


class TestFormatSummary:

    def test_found(self):
        payload = DashboardPayload(
            scheme_name="FundA (Growth)",
            found=True,
            pages_visited=2,
            date="01-01-2024",
            nav="123.4500",
            units=100,
            current_value="12345.00",
            gain_loss="2345.00",
            return_percent="23.45",
            gain_class="positive",
            peers=[
                PeerCard(
                    name="FundB (Growth)", nav="50.0000", value="5000.00",
                    gain_loss="-5000.00", return_percent="-50.00", gain_class="negative",
                )
            ],
            total_schemes=2,
        )
        text = format_summary(payload)
        assert "FundA (Growth)" in text
        assert "Gain/Loss:   2345.00 (23.45%)" in text
        assert "FundB (Growth): NAV 50.0000" in text
        assert "2 from 2 page(s)" in text

    def test_not_found(self):
        payload = DashboardPayload(
            scheme_name="FundA (Growth)",
            found=False,
            pages_visited=1,
            units=100,
            total_schemes=1,
            schemes_list=["FundB (Growth) - NAV: ₹50.0 [01-01-2024]"],
        )
        text = format_summary(payload)
        assert "Not found among 1 schemes" in text
        assert "1. FundB (Growth)" in text


class TestScrapeCommand:

    @pytest.mark.asyncio
    async def test_error_returns_exit_code_1(self):
        args = build_parser().parse_args(["scrape"])
        with patch(
            "nav_tracker.cli.build_dashboard",
            new=AsyncMock(side_effect=NoDataError("No NAV data found")),
        ):
            assert await async_main(args) == 1

    @pytest.mark.asyncio
    async def test_success_prints_summary(self, capsys):
        args = build_parser().parse_args(["scrape"])
        payload = DashboardPayload(
            scheme_name="X (Growth)", found=False, pages_visited=1, units=1,
        )
        with patch("nav_tracker.cli.build_dashboard", new=AsyncMock(return_value=payload)):
            assert await async_main(args) == 0
        assert "X (Growth)" in capsys.readouterr().out

    def test_main_exits_with_code(self):
        with patch("nav_tracker.cli.setup_logging"), patch(
            "nav_tracker.cli.build_dashboard",
            new=AsyncMock(side_effect=NoDataError("No NAV data found")),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["scrape"])
        assert exc_info.value.code == 1

    def test_serve_uses_port_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "4321")
        with patch("nav_tracker.cli.setup_logging"), patch("uvicorn.run") as mock_run:
            main(["serve"])
        assert mock_run.call_args.kwargs["port"] == 4321
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
