"""Pydantic v2 model for a single NAV listing row."""

from pydantic import BaseModel, ConfigDict


class NavRecord(BaseModel):
    """One row of the upstream NAV table.

    ``nav`` may be NaN when the numeric cell is malformed; such a record
    never matches anything by value.
    """

    model_config = ConfigDict(frozen=True)

    date: str
    name: str
    option: str
    nav: float

    @property
    def scheme_key(self) -> tuple[str, str]:
        """Business identity of the scheme."""
        return (self.name, self.option)

    @property
    def page_key(self) -> tuple[str, str, float]:
        """Identity used to spot a repeated page."""
        return (self.name, self.option, self.nav)

    @property
    def label(self) -> str:
        return f"{self.name} ({self.option})"
