"""Pydantic v2 models for the tracked-vs-peers comparison.

ComparisonEntry values are derived from a NavRecord and the tracked
position's units and principal. No rounding happens here.
"""

from pydantic import BaseModel, ConfigDict, model_validator
from typing_extensions import Self

from .nav import NavRecord


class ComparisonEntry(BaseModel):
    """Value, gain/loss and return of holding ``units`` of one scheme."""

    model_config = ConfigDict(frozen=True)

    label: str
    nav: float
    value: float
    gain_loss: float
    return_percent: float

    @classmethod
    def from_record(
        cls, record: NavRecord, units: float, principal: float
    ) -> "ComparisonEntry":
        value = record.nav * units
        gain_loss = value - principal
        return cls(
            label=record.label,
            nav=record.nav,
            value=value,
            gain_loss=gain_loss,
            return_percent=gain_loss / principal * 100,
        )

    @property
    def is_gain(self) -> bool:
        return self.gain_loss >= 0


class Comparison(BaseModel):
    """Result of comparing the tracked scheme against every other record.

    ``tracked`` is None when the scheme is absent from the listing; in that
    case ``peers`` covers every record and ``schemes`` lists them all for
    diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    tracked: ComparisonEntry | None
    tracked_record: NavRecord | None
    peers: tuple[ComparisonEntry, ...]
    schemes: tuple[NavRecord, ...]

    @property
    def found(self) -> bool:
        return self.tracked is not None

    @model_validator(mode="after")
    def check_tracked_pair(self) -> Self:
        """tracked and tracked_record are both set or both None."""
        if (self.tracked is None) != (self.tracked_record is None):
            raise ValueError("tracked and tracked_record must be set together")
        return self
