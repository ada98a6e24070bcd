from __future__ import annotations

from dataclasses import dataclass

from .resource import ResourceRecord

"""ValidationOutcome: per-row result of mapping + validation."""

__all__ = [
    "ValidationOutcome",
]


@dataclass(frozen=True)
class ValidationOutcome:
    """Result for one source row.

    ``record`` is present iff ``errors`` is empty.
    """
    row_number: int
    errors: tuple[str, ...] = ()
    record: ResourceRecord | None = None

    def __post_init__(self) -> None:
        if bool(self.errors) == (self.record is not None):
            raise ValueError(
                f"row {self.row_number}: record must be present iff there are no errors"
            )

    @property
    def is_valid(self) -> bool:
        return not self.errors
