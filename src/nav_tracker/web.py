"""FastAPI application serving the NAV comparison dashboard.

Routes:
- ``GET /``                HTML dashboard (or the scheme-not-found page)
- ``GET /api/comparison``  the same payload as JSON
- ``GET /health``          liveness probe
- ``/static``              stylesheet

Every request runs its own scrape; nothing is cached between requests.
"""

import html
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from nav_tracker.config import ScraperConfig, TrackedPosition
from nav_tracker.dashboard import build_dashboard
from nav_tracker.exceptions import NavTrackerError
from nav_tracker.models import DashboardPayload

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


def create_app(
    config: ScraperConfig | None = None,
    position: TrackedPosition | None = None,
) -> FastAPI:
    """Build the dashboard app for one tracked position."""
    app = FastAPI(
        title="NAV Tracker",
        description="Tracked fund vs. every other scheme on the latest NAV listing",
    )
    app.state.config = config or ScraperConfig()
    app.state.position = position or TrackedPosition()
    app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")

    async def _run(request: Request) -> DashboardPayload:
        logger.info("=" * 50)
        logger.info("New request for NAV dashboard")
        return await build_dashboard(request.app.state.config, request.app.state.position)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request):
        try:
            payload = await _run(request)
        except Exception as exc:
            logger.exception("Dashboard request failed")
            return HTMLResponse(f"<h1>Error: {html.escape(str(exc))}</h1>")

        template = "dashboard.html" if payload.found else "error.html"
        return templates.TemplateResponse(
            request, template, {"payload": payload}
        )

    @app.get("/api/comparison", response_model=DashboardPayload)
    async def comparison(request: Request):
        try:
            return await _run(request)
        except NavTrackerError as exc:
            logger.error("Comparison request failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "nav-tracker"}

    return app
