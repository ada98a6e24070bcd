from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from teamtrack.logging.error_log import ErrorLogBuffer
from teamtrack.models.enums import BillabilityStatus, NonBillableStatus, ResourceStatus
from teamtrack.models.resource import EPOCH, ResourceRecord
from teamtrack.services.export import export_resources_csv, write_export_xlsx
from teamtrack.services.import_pipeline import ResourceImport


@pytest.fixture()
def records() -> list[ResourceRecord]:
    return [
        ResourceRecord(
            id="res_1_000000000001",
            employee_id="EMP100",
            name="Lee, Dana",
            email="dana@x.com",
            contact_number="+91-9000000001",
            location="Pune",
            client="Acme Corp",
            project='Project "Atlas"',
            project_id="PRJ-100",
            project_manager="Alice Johnson",
            reporting_manager="Bob Williams",
            delivery_head="Carol Davis",
            total_experience="8 years",
            doj=date(2016, 5, 2),
            assignment_start_date=date(2024, 1, 1),
            assignment_end_date=date(2024, 12, 31),
            practice="Data",
            primary_skills=("Python", "Spark"),
            secondary_skills=("AWS",),
        ),
        ResourceRecord(
            id="res_1_000000000002",
            employee_id="EMP101",
            name="Omar Khan",
            email="omar@x.com",
            billability_status=BillabilityStatus.NON_BILLABLE,
            non_billable_status=NonBillableStatus.DELIVERY_SUPPORT,
            doj=EPOCH,
            status=ResourceStatus.INACTIVE,
        ),
    ]


def _reimport(tmp_path: Path, filename: str, content) -> list[ResourceRecord]:
    job = ResourceImport(filename, error_log=ErrorLogBuffer(tmp_path / "logs"))
    outcomes = job.parse(content)
    assert all(o.is_valid for o in outcomes)
    return [o.record for o in outcomes]


def test_csv_round_trip(tmp_path: Path, records):
    back = _reimport(tmp_path, "export.csv", export_resources_csv(records))
    assert [r.without_id() for r in back] == [r.without_id() for r in records]
    assert all(b.id != r.id for b, r in zip(back, records))


def test_xlsx_round_trip(tmp_path: Path, records):
    path = write_export_xlsx(records, tmp_path / "export.xlsx")
    back = _reimport(tmp_path, "export.xlsx", path.read_bytes())
    assert [r.without_id() for r in back] == [r.without_id() for r in records]


def test_xlsx_round_trip_keeps_na_like_text(tmp_path: Path):
    original = ResourceRecord(
        id="res_1_000000000003",
        employee_id="EMP102",
        name="NULL",
        email="null@x.com",
        location="NA",
        client="N/A",
        project="#N/A",
        practice="None",
        primary_skills=("nan",),
    )
    path = write_export_xlsx([original], tmp_path / "na.xlsx")
    back = _reimport(tmp_path, "na.xlsx", path.read_bytes())
    assert [r.without_id() for r in back] == [original.without_id()]


def test_csv_export_with_line_breaks_reimports_as_one_row(tmp_path: Path):
    original = ResourceRecord(
        id="res_1_000000000004",
        employee_id="EMP103",
        name="Ana Ruiz",
        email="ana@x.com",
        location="Line1\nLine2",
        project="Phase 1,\r\nPhase 2",
    )
    back = _reimport(tmp_path, "export.csv", export_resources_csv([original]))
    assert len(back) == 1
    assert back[0].location == "Line1 Line2"
    assert back[0].project == "Phase 1, Phase 2"
