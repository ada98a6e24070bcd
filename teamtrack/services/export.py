from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path

import pandas as pd

from ..mapping.field_mapper import COLUMN_HEADERS
from ..models.resource import EPOCH, ResourceRecord

"""CSV / XLSX export of resource records and the import template.

Layout is the fixed 21-column order of COLUMN_HEADERS. Each field is the
inverse of the import mapping: enum labels, YYYY-MM-DD dates (EPOCH -> ""),
skills joined with ';'. Lines are joined with '\\n' and there is no trailing
newline, matching the template users already have.
"""

__all__ = [
    "SAMPLE_ROWS",
    "TEMPLATE_FILENAME",
    "default_export_filename",
    "escape_csv",
    "export_resources_csv",
    "generate_template_csv",
    "resource_to_row",
    "write_export_csv",
    "write_export_xlsx",
    "write_template",
]

TEMPLATE_FILENAME = "resource_import_template.csv"

SAMPLE_ROWS: tuple[tuple[str, ...], ...] = (
    (
        "EMP001", "John Smith", "john.smith@company.com", "+91-9876543210", "Bangalore",
        "Acme Corp", "Digital Transformation", "PRJ-001", "Alice Johnson", "Bob Williams",
        "Carol Davis", "Billable", "", "5 years", "2020-01-15", "2024-01-01", "2024-12-31",
        "Engineering", "Java;Spring Boot;Microservices", "Docker;Kubernetes;AWS", "Active",
    ),
    (
        "EMP002", "Priya Sharma", "priya.sharma@company.com", "+91-9876543211", "Hyderabad",
        "", "", "", "Alice Johnson", "Bob Williams",
        "Carol Davis", "Non-Billable", "Available for Deployment", "3 years", "2021-06-01",
        "2024-01-01", "2024-06-30",
        "QA", "Automation Testing;Selenium;Java", "Jenkins;Azure DevOps", "Active",
    ),
    (
        "EMP003", "Rahul Verma", "rahul.verma@company.com", "+91-9876543212", "Mumbai",
        "Beta Ltd", "UI Modernization", "PRJ-002", "David Lee", "Eve Martin",
        "Frank Wilson", "Billable", "", "7 years", "2018-03-10", "2024-02-01", "2024-11-30",
        "Frontend", "UI;UX;React;TypeScript", "Figma;Adobe XD", "Active",
    ),
)


_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def escape_csv(value: str) -> str:
    """Quote a field for CSV output.

    The importer reads one record per line, so embedded line breaks are
    written as single spaces to keep every record on one line.
    """
    value = _LINE_BREAKS.sub(" ", value)
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def _format_date(value: date | None) -> str:
    if value is None or value == EPOCH:
        return ""
    return value.strftime("%Y-%m-%d")


def resource_to_row(record: ResourceRecord) -> list[str]:
    return [
        record.employee_id,
        record.name,
        record.email,
        record.contact_number,
        record.location,
        record.client,
        record.project,
        record.project_id or "",
        record.project_manager,
        record.reporting_manager,
        record.delivery_head,
        record.billability_status.label,
        record.non_billable_status.label if record.non_billable_status else "",
        record.total_experience,
        _format_date(record.doj),
        _format_date(record.assignment_start_date),
        _format_date(record.assignment_end_date),
        record.practice,
        ";".join(record.primary_skills),
        ";".join(record.secondary_skills),
        record.status.label,
    ]


def _join_table(rows: Iterable[Sequence[str]]) -> str:
    header = ",".join(escape_csv(h) for h in COLUMN_HEADERS)
    lines = [",".join(escape_csv(c) for c in row) for row in rows]
    return "\n".join([header, *lines])


def generate_template_csv() -> str:
    """Header + 3 illustrative rows for users to pre-fill before upload."""
    return _join_table(SAMPLE_ROWS)


def export_resources_csv(records: Iterable[ResourceRecord]) -> str:
    return _join_table(resource_to_row(r) for r in records)


def default_export_filename(today: date | None = None, extension: str = "csv") -> str:
    stamp = (today or date.today()).isoformat()
    return f"resources_export_{stamp}.{extension}"


def write_template(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(generate_template_csv().encode("utf-8"))
    return path


def write_export_csv(records: Iterable[ResourceRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(export_resources_csv(records).encode("utf-8"))
    return path


def write_export_xlsx(records: Iterable[ResourceRecord], path: Path) -> Path:
    """Same table as the CSV export, all cells as text, sheet 'Resources'."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([resource_to_row(r) for r in records], columns=list(COLUMN_HEADERS))
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Resources", index=False)
    return path
