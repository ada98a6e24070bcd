from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

from .enums import BillabilityStatus, NonBillableStatus, ResourceStatus

"""ResourceRecord domain model.

The canonical employee entity handed to the storage actor. Instances are
built only for rows that passed validation, so the constructor enforces the
record invariants instead of reporting them.
"""

__all__ = [
    "EPOCH",
    "ResourceRecord",
]

# Sentinel for "no date" (unparseable or empty cell)
EPOCH = date(1970, 1, 1)


@dataclass(frozen=True)
class ResourceRecord:
    """Single employee resource record.

    Invariants (checked in ``__post_init__``):
    - employee_id, name, email are non-empty
    - non_billable_status is set iff billability_status is NON_BILLABLE
    """
    id: str
    employee_id: str
    name: str
    email: str
    contact_number: str = ""
    location: str = ""
    client: str = ""
    project: str = ""
    project_id: str | None = None
    project_manager: str = ""
    reporting_manager: str = ""
    delivery_head: str = ""
    billability_status: BillabilityStatus = BillabilityStatus.BILLABLE
    non_billable_status: NonBillableStatus | None = None
    total_experience: str = ""
    doj: date = EPOCH
    assignment_start_date: date = EPOCH
    assignment_end_date: date = EPOCH
    practice: str = ""
    primary_skills: tuple[str, ...] = field(default_factory=tuple)
    secondary_skills: tuple[str, ...] = field(default_factory=tuple)
    status: ResourceStatus = ResourceStatus.ACTIVE

    def __post_init__(self) -> None:
        for attr in ("employee_id", "name", "email"):
            if not getattr(self, attr).strip():
                raise ValueError(f"{attr} must be non-empty")
        non_billable = self.billability_status is BillabilityStatus.NON_BILLABLE
        if non_billable and self.non_billable_status is None:
            raise ValueError("non_billable_status is required for non-billable resources")
        if not non_billable and self.non_billable_status is not None:
            raise ValueError("non_billable_status must be absent for billable resources")

    def without_id(self) -> dict[str, Any]:
        """Field dict excluding the generated identifier (comparison helper)."""
        data = asdict(self)
        data.pop("id")
        return data

    def to_row(self) -> dict[str, Any]:
        """Flatten to storage column values (enums as wire values, skills as lists)."""
        data = asdict(self)
        data["billability_status"] = self.billability_status.value
        data["non_billable_status"] = (
            self.non_billable_status.value if self.non_billable_status else None
        )
        data["status"] = self.status.value
        data["primary_skills"] = list(self.primary_skills)
        data["secondary_skills"] = list(self.secondary_skills)
        return data

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ResourceRecord:
        """Inverse of ``to_row``."""
        nb = row.get("non_billable_status")
        return cls(
            id=row["id"],
            employee_id=row["employee_id"],
            name=row["name"],
            email=row["email"],
            contact_number=row.get("contact_number") or "",
            location=row.get("location") or "",
            client=row.get("client") or "",
            project=row.get("project") or "",
            project_id=row.get("project_id") or None,
            project_manager=row.get("project_manager") or "",
            reporting_manager=row.get("reporting_manager") or "",
            delivery_head=row.get("delivery_head") or "",
            billability_status=BillabilityStatus(row["billability_status"]),
            non_billable_status=NonBillableStatus(nb) if nb else None,
            total_experience=row.get("total_experience") or "",
            doj=row.get("doj") or EPOCH,
            assignment_start_date=row.get("assignment_start_date") or EPOCH,
            assignment_end_date=row.get("assignment_end_date") or EPOCH,
            practice=row.get("practice") or "",
            primary_skills=tuple(row.get("primary_skills") or ()),
            secondary_skills=tuple(row.get("secondary_skills") or ()),
            status=ResourceStatus(row.get("status") or ResourceStatus.ACTIVE.value),
        )
