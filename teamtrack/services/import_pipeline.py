from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence

from ..logging.error_log import ErrorLogBuffer
from ..mapping.field_mapper import map_row
from ..models.enums import ImportState
from ..models.error_record import PARSE_ERROR, ROW_VALIDATION, SUBMIT_ERROR, ErrorRecord
from ..models.import_summary import FailedRow, ImportSummary
from ..models.validation_outcome import ValidationOutcome
from ..storage.protocols import StorageActor, SubmitError
from ..tabular.reader import ParseError, parse_tabular
from ..validation.row_validator import build_outcome
from .progress import RowProgress

logger = logging.getLogger(__name__)

"""Resource import orchestration.

One ResourceImport instance = one import operation:

    Idle -> Parsing -> (ParseFailed | Parsed)
    Parsed -> Submitting -> (SubmitFailed | Complete)
    SubmitFailed -> Submitting (whole-batch retry)

- parse(): tabular parse, then map + validate every row
- submit(): one bulk_create_resources call with the valid records only;
  any storage failure surfaces as SubmitError with no summary
- rejected rows and file-level failures go to the JSON Lines error log
"""

__all__ = [
    "ImportStateError",
    "ResourceImport",
    "build_summary",
    "partition_outcomes",
]


class ImportStateError(Exception):
    """Operation not allowed in the import's current state."""


def partition_outcomes(
    outcomes: Iterable[ValidationOutcome],
) -> tuple[list[ValidationOutcome], list[ValidationOutcome]]:
    """Split into (valid, invalid), preserving order within each set."""
    valid: list[ValidationOutcome] = []
    invalid: list[ValidationOutcome] = []
    for outcome in outcomes:
        (valid if outcome.is_valid else invalid).append(outcome)
    return valid, invalid


def build_summary(outcomes: Sequence[ValidationOutcome]) -> ImportSummary:
    valid, invalid = partition_outcomes(outcomes)
    return ImportSummary(
        total=len(outcomes),
        success=len(valid),
        failed=len(invalid),
        failed_rows=[FailedRow(row=o.row_number, errors=o.errors) for o in invalid],
    )


class ResourceImport:
    """Single bulk import of resource records from one uploaded file."""

    def __init__(
        self,
        filename: str,
        *,
        separator: str = ",",
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.filename = filename
        self.separator = separator
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self.state = ImportState.IDLE
        self.headers: list[str] = []
        self.outcomes: list[ValidationOutcome] = []
        self.summary: ImportSummary | None = None
        self.error: str | None = None

    def _require(self, *allowed: ImportState) -> None:
        if self.state not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise ImportStateError(f"cannot run in state '{self.state.value}' (expected {names})")

    @property
    def valid_outcomes(self) -> list[ValidationOutcome]:
        return partition_outcomes(self.outcomes)[0]

    @property
    def invalid_outcomes(self) -> list[ValidationOutcome]:
        return partition_outcomes(self.outcomes)[1]

    def parse(self, content: bytes | str) -> list[ValidationOutcome]:
        """Parse, map and validate. Raises ParseError (terminal)."""
        self._require(ImportState.IDLE)
        self.state = ImportState.PARSING
        try:
            data = parse_tabular(content, self.filename, self.separator)
        except ParseError as e:
            self.state = ImportState.PARSE_FAILED
            self.error = str(e)
            logger.error(f"parse: {self.filename}: {e}")
            self.error_log.append(ErrorRecord.create(self.filename, -1, PARSE_ERROR, str(e)))
            self._flush_error_log()
            raise

        self.headers = data.headers
        outcomes: list[ValidationOutcome] = []
        invalid = 0
        with RowProgress(len(data.rows)) as progress:
            for raw in data.rows:
                outcome = build_outcome(map_row(data.headers, raw))
                outcomes.append(outcome)
                if not outcome.is_valid:
                    invalid += 1
                    self.error_log.append(
                        ErrorRecord.create(
                            self.filename, outcome.row_number, ROW_VALIDATION, "; ".join(outcome.errors)
                        )
                    )
                progress.advance()
                progress.set_postfix(valid=len(outcomes) - invalid, invalid=invalid)

        self.outcomes = outcomes
        self.state = ImportState.PARSED
        self._flush_error_log()
        logger.info(
            f"parsed {self.filename}: rows={len(outcomes)} valid={len(outcomes) - invalid} "
            f"invalid={invalid}"
        )
        return outcomes

    async def parse_async(self, content: bytes | str) -> list[ValidationOutcome]:
        return await asyncio.to_thread(self.parse, content)

    def submit(self, storage: StorageActor) -> ImportSummary | None:
        """Submit the valid rows in one bulk call.

        Returns None (and submits nothing) when no row is valid. On storage
        failure raises SubmitError; the call may be repeated.
        """
        self._require(ImportState.PARSED, ImportState.SUBMIT_FAILED)
        valid = self.valid_outcomes
        if not valid:
            logger.warning(f"{self.filename}: no valid rows; nothing submitted")
            return None

        self.state = ImportState.SUBMITTING
        records = [o.record for o in valid if o.record is not None]
        logger.debug(f"submitting {len(records)} resources from {self.filename}")
        try:
            storage.bulk_create_resources(records)
        except Exception as e:
            self.state = ImportState.SUBMIT_FAILED
            self.error = str(e) or type(e).__name__
            logger.error(f"submit: {self.filename}: {self.error}")
            self.error_log.append(
                ErrorRecord.create(self.filename, -1, SUBMIT_ERROR, self.error)
            )
            self._flush_error_log()
            if isinstance(e, SubmitError):
                raise
            raise SubmitError(f"bulk create failed: {self.error}") from e

        self.error = None
        self.summary = build_summary(self.outcomes)
        self.state = ImportState.COMPLETE
        return self.summary

    async def submit_async(self, storage: StorageActor) -> ImportSummary | None:
        return await asyncio.to_thread(self.submit, storage)

    def _flush_error_log(self) -> None:
        try:
            path = self.error_log.flush()
        except OSError as e:
            # best-effort
            logger.warning(f"error log flush failed: {e}")
            return
        if path is not None:
            logger.debug(f"error log written: {path}")
