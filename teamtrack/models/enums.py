from __future__ import annotations

from enum import Enum

"""Closed enum types for resource records and import lifecycle.

Values mirror the backend actor's wire identifiers; ``label`` gives the
human-readable text used in templates and exports.
"""

__all__ = [
    "BillabilityStatus",
    "NonBillableStatus",
    "ResourceStatus",
    "UserRole",
    "ImportState",
]


class BillabilityStatus(Enum):
    BILLABLE = "billable"
    NON_BILLABLE = "nonBillable"

    @property
    def label(self) -> str:
        return "Billable" if self is BillabilityStatus.BILLABLE else "Non-Billable"


class NonBillableStatus(Enum):
    """Sub-category of a non-billable resource (8 variants)."""
    AVAILABLE_FOR_DEPLOYMENT = "availableForDeployment"
    BI_BENCH = "biBench"
    PARTIAL_BENCH = "partialBench"
    BENCH_BLOCKED = "benchBlocked"
    MATERNITY = "maternity"
    SOLUTION_INVESTMENT = "solutionInvestment"
    DELIVERY_SUPPORT = "deliverySupport"
    PROJECT_BUFFER = "projectBuffer"

    @property
    def label(self) -> str:
        return _NON_BILLABLE_LABELS[self]


_NON_BILLABLE_LABELS: dict[NonBillableStatus, str] = {
    NonBillableStatus.AVAILABLE_FOR_DEPLOYMENT: "Available for Deployment",
    NonBillableStatus.BI_BENCH: "BI Bench",
    NonBillableStatus.PARTIAL_BENCH: "Partial Bench",
    NonBillableStatus.BENCH_BLOCKED: "Bench Blocked",
    NonBillableStatus.MATERNITY: "Maternity",
    NonBillableStatus.SOLUTION_INVESTMENT: "Solution Investment",
    NonBillableStatus.DELIVERY_SUPPORT: "Delivery Support",
    NonBillableStatus.PROJECT_BUFFER: "Project Buffer",
}


class ResourceStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def label(self) -> str:
        return "Active" if self is ResourceStatus.ACTIVE else "Inactive"


class UserRole(Enum):
    EMPLOYEE = "employee"
    PM = "pm"
    DELIVERY_HEAD = "deliveryHead"
    PMO = "pmo"
    ADMIN = "admin"
    MANAGEMENT = "management"


class ImportState(Enum):
    """Lifecycle of a single import operation.

    State transitions:
        idle → parsing → (parse_failed | parsed)
        parsed → submitting → (submit_failed | complete)
        submit_failed → submitting (retry)

    - PARSE_FAILED and COMPLETE are terminal
    - SUBMIT_FAILED is terminal unless the caller retries the whole submission
    """
    IDLE = "idle"
    PARSING = "parsing"
    PARSE_FAILED = "parse_failed"
    PARSED = "parsed"
    SUBMITTING = "submitting"
    SUBMIT_FAILED = "submit_failed"
    COMPLETE = "complete"
