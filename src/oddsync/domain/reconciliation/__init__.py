"""Update-or-insert reconciliation of betting snapshots."""

from __future__ import annotations

from .coercion import coerce_probability
from .engine import RUN_LOCK, ReconciliationEngine

__all__ = ["RUN_LOCK", "ReconciliationEngine", "coerce_probability"]
