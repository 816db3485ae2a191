"""Pydantic v2 models for the rendering-ready dashboard payload.

Numbers are pre-formatted strings here: this is the presentation boundary
where rounding happens.
"""

from pydantic import BaseModel, Field


class PeerCard(BaseModel):
    """Display fields for one peer scheme."""

    name: str
    nav: str
    value: str
    gain_loss: str
    return_percent: str
    gain_class: str


class DashboardPayload(BaseModel):
    """Everything the dashboard and not-found templates need."""

    scheme_name: str
    found: bool
    pages_visited: int = Field(ge=0)

    # Tracked scheme display fields (None when not found)
    date: str | None = None
    nav: str | None = None
    units: float
    current_value: str | None = None
    gain_loss: str | None = None
    return_percent: str | None = None
    gain_class: str | None = None

    peers: list[PeerCard] = Field(default_factory=list)

    chart_labels: list[str] = Field(default_factory=list)
    chart_values: list[float] = Field(default_factory=list)
    chart_colors: list[str] = Field(default_factory=list)

    # Full listing, populated when the tracked scheme is missing
    total_schemes: int = Field(default=0, ge=0)
    schemes_list: list[str] = Field(default_factory=list)
