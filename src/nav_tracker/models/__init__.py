"""Pydantic v2 models for NAV records, comparisons and the dashboard payload.

Re-exports all model classes for convenient import::

    from nav_tracker.models import NavRecord, ComparisonEntry, ...
"""

from .comparison import Comparison, ComparisonEntry
from .dashboard import DashboardPayload, PeerCard
from .nav import NavRecord

__all__ = [
    "NavRecord",
    "ComparisonEntry",
    "Comparison",
    "DashboardPayload",
    "PeerCard",
]
