from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

import pandas as pd

from ..models.enums import BillabilityStatus, NonBillableStatus, ResourceStatus
from ..models.raw_row import RawRow
from ..models.resource import EPOCH

"""Field mapper: raw header-keyed cells -> typed resource fields.

Every parser here is a total function; the fallback branch of each one is a
deliberate lenient default, never an exception:

- billability: "billable" (any case) -> BILLABLE, everything else -> NON_BILLABLE
- status: "inactive" (any case) -> INACTIVE, everything else -> ACTIVE
- dates: unparseable / empty -> EPOCH
- non-billable category: resolved once into a CategoryResolution that carries
  either the status or the rejection reason; the validator reads the reason
"""

__all__ = [
    "COLUMN_HEADERS",
    "CategoryRejection",
    "CategoryResolution",
    "MappedRow",
    "generate_resource_id",
    "map_row",
    "normalize_category",
    "pair_cells",
    "parse_billability",
    "parse_date",
    "parse_resource_status",
    "parse_skills",
    "resolve_non_billable_category",
]

# Fixed column order shared by the import template and the CSV export
COLUMN_HEADERS: tuple[str, ...] = (
    "Employee ID",
    "Name",
    "Email ID",
    "Contact Number",
    "Location",
    "Client",
    "Project",
    "Project ID",
    "Project Manager",
    "Reporting Manager",
    "Delivery Head",
    "Billability Status",
    "Non-Billable Category",
    "Total Experience",
    "DOJ",
    "Assignment Start Date",
    "Assignment End Date",
    "Practice",
    "Primary Skills",
    "Secondary Skills",
    "Status",
)

_CATEGORY_LOOKUP: dict[str, NonBillableStatus] = {
    "availablefordeployment": NonBillableStatus.AVAILABLE_FOR_DEPLOYMENT,
    "bibench": NonBillableStatus.BI_BENCH,
    "partialbench": NonBillableStatus.PARTIAL_BENCH,
    "benchblocked": NonBillableStatus.BENCH_BLOCKED,
    "maternity": NonBillableStatus.MATERNITY,
    "solutioninvestment": NonBillableStatus.SOLUTION_INVESTMENT,
    "deliverysupport": NonBillableStatus.DELIVERY_SUPPORT,
    "projectbuffer": NonBillableStatus.PROJECT_BUFFER,
}


class CategoryRejection(Enum):
    MISSING = "missing"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class CategoryResolution:
    """Either a resolved status or the reason the raw text was rejected."""
    raw: str
    status: NonBillableStatus | None = None
    rejection: CategoryRejection | None = None

    @property
    def ok(self) -> bool:
        return self.status is not None

    @property
    def message(self) -> str | None:
        if self.rejection is CategoryRejection.MISSING:
            return "Non-Billable Category is required when Billability Status is Non-Billable"
        if self.rejection is CategoryRejection.UNRECOGNIZED:
            return f"Non-Billable Category '{self.raw}' is not recognized"
        return None


def normalize_category(text: str) -> str:
    # "Bench Blocked" / "bench  blocked" / "BenchBlocked" -> "benchblocked"
    return "".join(text.lower().split())


def resolve_non_billable_category(raw: str) -> CategoryResolution:
    key = normalize_category(raw)
    if not key:
        return CategoryResolution(raw=raw, rejection=CategoryRejection.MISSING)
    status = _CATEGORY_LOOKUP.get(key)
    if status is None:
        return CategoryResolution(raw=raw, rejection=CategoryRejection.UNRECOGNIZED)
    return CategoryResolution(raw=raw, status=status)


def parse_billability(raw: str) -> BillabilityStatus:
    if raw.strip().lower() == "billable":
        return BillabilityStatus.BILLABLE
    # default: anything else (garbled, empty) is non-billable
    return BillabilityStatus.NON_BILLABLE


def parse_resource_status(raw: str) -> ResourceStatus:
    if raw.strip().lower() == "inactive":
        return ResourceStatus.INACTIVE
    return ResourceStatus.ACTIVE


def parse_date(raw: str) -> date:
    text = raw.strip()
    if not text:
        return EPOCH
    try:
        ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, OverflowError, TypeError):
        return EPOCH
    if ts is None or pd.isna(ts):
        return EPOCH
    return ts.date()


def parse_skills(raw: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in raw.split(";") if s.strip())


def generate_resource_id() -> str:
    """Fresh opaque id: millisecond timestamp + 48 random bits."""
    return f"res_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


def pair_cells(headers: list[str], cells: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Pair trimmed headers with trimmed cells by position ("" when missing)."""
    data: dict[str, str] = {}
    for i, header in enumerate(headers):
        value = cells[i] if i < len(cells) else ""
        data[header.strip()] = (value or "").strip()
    return data


@dataclass(frozen=True)
class MappedRow:
    """Candidate fields for one row, before validation."""
    row_number: int
    cells: dict[str, str]
    fields: dict[str, Any]
    category: CategoryResolution

    @property
    def billability(self) -> BillabilityStatus:
        return self.fields["billability_status"]


def map_row(headers: list[str], raw_row: RawRow) -> MappedRow:
    data = pair_cells(headers, raw_row.cells)

    def get(key: str) -> str:
        return data.get(key, "")

    billability = parse_billability(get("Billability Status"))
    category = resolve_non_billable_category(get("Non-Billable Category"))
    non_billable_status = (
        category.status if billability is BillabilityStatus.NON_BILLABLE else None
    )

    fields: dict[str, Any] = {
        "id": generate_resource_id(),
        "employee_id": get("Employee ID"),
        "name": get("Name"),
        "email": get("Email ID"),
        "contact_number": get("Contact Number"),
        "location": get("Location"),
        "client": get("Client"),
        "project": get("Project"),
        "project_id": get("Project ID") or None,
        "project_manager": get("Project Manager"),
        "reporting_manager": get("Reporting Manager"),
        "delivery_head": get("Delivery Head"),
        "billability_status": billability,
        "non_billable_status": non_billable_status,
        "total_experience": get("Total Experience"),
        "doj": parse_date(get("DOJ")),
        "assignment_start_date": parse_date(get("Assignment Start Date")),
        "assignment_end_date": parse_date(get("Assignment End Date")),
        "practice": get("Practice"),
        "primary_skills": parse_skills(get("Primary Skills")),
        "secondary_skills": parse_skills(get("Secondary Skills")),
        "status": parse_resource_status(get("Status")),
    }
    return MappedRow(row_number=raw_row.line_number, cells=data, fields=fields, category=category)
