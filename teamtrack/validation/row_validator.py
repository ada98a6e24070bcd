from __future__ import annotations

from collections.abc import Iterable

from ..mapping.field_mapper import MappedRow, map_row
from ..models.enums import BillabilityStatus
from ..models.raw_row import RawRow
from ..models.resource import ResourceRecord
from ..models.validation_outcome import ValidationOutcome

"""Row validator.

Rules (in message order):
1. Employee ID / Name / Email ID must be non-empty after trimming
2. Non-billable rows need a recognised Non-Billable Category

No email-format, duplicate-id or cross-row checks: duplicate employee codes
across rows are accepted as-is.
"""

__all__ = [
    "REQUIRED_FIELDS",
    "validate_row",
    "build_outcome",
    "validate_rows",
]

# (field name, column label) in message order
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("employee_id", "Employee ID"),
    ("name", "Name"),
    ("email", "Email ID"),
)


def validate_row(mapped: MappedRow) -> list[str]:
    """Return the ordered (possibly empty) error list for one mapped row."""
    errors: list[str] = []
    for field_name, label in REQUIRED_FIELDS:
        if not str(mapped.fields.get(field_name) or "").strip():
            errors.append(f"{label} is required")

    if mapped.billability is BillabilityStatus.NON_BILLABLE and not mapped.category.ok:
        errors.append(mapped.category.message or "Non-Billable Category is not recognized")
    return errors


def build_outcome(mapped: MappedRow) -> ValidationOutcome:
    errors = validate_row(mapped)
    if errors:
        return ValidationOutcome(row_number=mapped.row_number, errors=tuple(errors))
    return ValidationOutcome(
        row_number=mapped.row_number,
        record=ResourceRecord(**mapped.fields),
    )


def validate_rows(headers: list[str], rows: Iterable[RawRow]) -> list[ValidationOutcome]:
    """Map and validate every row, preserving input order."""
    return [build_outcome(map_row(headers, row)) for row in rows]
