from __future__ import annotations

from dataclasses import dataclass

"""RawRow model: one parsed data row before field mapping."""

__all__ = [
    "RawRow",
]


@dataclass(frozen=True)
class RawRow:
    """Ordered raw text cells of one data row.

    line_number is the 1-based source position (header = 1) used in error
    reporting. For delimited text it counts physical lines, blank ones
    included; for workbooks it is the sheet row number.
    """
    line_number: int
    cells: tuple[str, ...]

    @property
    def is_blank(self) -> bool:
        return all(not c.strip() for c in self.cells)
