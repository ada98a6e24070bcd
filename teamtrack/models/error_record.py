from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

Structured entry for the JSON Lines error log written by the import pipeline.
Supports row=-1 as a sentinel for file-level errors (parse failure, submit
failure) where no single row is responsible.

Fixed key set: timestamp, file, row, error_type, message.
"""

__all__ = [
    "ErrorRecord",
    "PARSE_ERROR",
    "ROW_VALIDATION",
    "SUBMIT_ERROR",
]

PARSE_ERROR = "PARSE_ERROR"
ROW_VALIDATION = "ROW_VALIDATION"
SUBMIT_ERROR = "SUBMIT_ERROR"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source filename being imported
        row: Source line number (1-based). Use -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable description (row errors joined with '; ')
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
