from __future__ import annotations

from dataclasses import dataclass, field

"""Aggregate result of a completed import (not persisted)."""

__all__ = [
    "FailedRow",
    "ImportSummary",
]


@dataclass(frozen=True)
class FailedRow:
    row: int  # source line number
    errors: tuple[str, ...]


@dataclass(frozen=True)
class ImportSummary:
    """Counts reported after the bulk submission succeeded.

    total = success + failed; failed_rows keeps original row order.
    """
    total: int
    success: int
    failed: int
    failed_rows: list[FailedRow] = field(default_factory=list)
