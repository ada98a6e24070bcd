from __future__ import annotations

import logging

from ..logging.init import LOGGER_NAME, SUMMARY_LEVEL
from ..models.import_summary import ImportSummary

"""SUMMARY line rendering for a completed import."""


def render_summary_fields(summary: ImportSummary) -> str:
    return f"total={summary.total} imported={summary.success} skipped={summary.failed}"


def render_summary_line(summary: ImportSummary) -> str:
    """Render the one-line SUMMARY for an ImportSummary.

    Format:
    SUMMARY total={total} imported={success} skipped={failed}

    Examples:
        >>> render_summary_line(ImportSummary(total=7, success=5, failed=2))
        'SUMMARY total=7 imported=5 skipped=2'
    """
    return f"SUMMARY {render_summary_fields(summary)}"


def log_summary(summary: ImportSummary) -> None:
    """Emit the summary at SUMMARY level; the formatter adds the label."""
    logging.getLogger(LOGGER_NAME).log(SUMMARY_LEVEL, render_summary_fields(summary))


def render_failed_rows(summary: ImportSummary) -> list[str]:
    """One line per rejected row: 'row <n>: <msg>; <msg>'."""
    return [f"row {fr.row}: {'; '.join(fr.errors)}" for fr in summary.failed_rows]
