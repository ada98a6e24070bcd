from __future__ import annotations

from teamtrack.logging.init import setup_logging
from teamtrack.models.import_summary import FailedRow, ImportSummary
from teamtrack.services.summary import log_summary, render_failed_rows, render_summary_line


def test_render_summary_line():
    s = ImportSummary(total=7, success=5, failed=2)
    assert render_summary_line(s) == "SUMMARY total=7 imported=5 skipped=2"


def test_render_summary_line_zero():
    assert render_summary_line(ImportSummary(0, 0, 0)) == "SUMMARY total=0 imported=0 skipped=0"


def test_render_failed_rows():
    s = ImportSummary(
        total=3,
        success=1,
        failed=2,
        failed_rows=[
            FailedRow(row=2, errors=("Employee ID is required", "Name is required")),
            FailedRow(row=4, errors=("Email ID is required",)),
        ],
    )
    assert render_failed_rows(s) == [
        "row 2: Employee ID is required; Name is required",
        "row 4: Email ID is required",
    ]


def test_log_summary_uses_summary_label(capsys):
    setup_logging()
    log_summary(ImportSummary(total=4, success=3, failed=1))
    assert capsys.readouterr().out.splitlines() == ["SUMMARY total=4 imported=3 skipped=1"]
