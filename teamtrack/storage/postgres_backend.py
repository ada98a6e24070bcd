from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, fields
from typing import Any

from ..models.resource import ResourceRecord

"""PostgreSQL storage actor.

Bulk create uses psycopg2.extras.execute_values for a batched INSERT; skill
lists are passed as Python lists and land in text[] columns.

Transaction boundary: one bulk call = one transaction. On any driver error
the transaction is rolled back and BatchInsertError is raised, so a failed
submission never leaves part of the batch behind.
"""

try:  # pragma: no cover - optional until psycopg2 present at runtime
    from psycopg2.extras import execute_values
except ImportError:  # pragma: no cover
    execute_values = None  # type: ignore

__all__ = [
    "CREATE_TABLE_SQL",
    "RESOURCE_COLUMNS",
    "BatchInsertError",
    "BatchMetrics",
    "InsertResult",
    "PostgresStorageActor",
    "bulk_insert_resources",
]

RESOURCE_COLUMNS: tuple[str, ...] = tuple(f.name for f in fields(ResourceRecord))

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    "id" text PRIMARY KEY,
    "employee_id" text NOT NULL,
    "name" text NOT NULL,
    "email" text NOT NULL,
    "contact_number" text NOT NULL DEFAULT '',
    "location" text NOT NULL DEFAULT '',
    "client" text NOT NULL DEFAULT '',
    "project" text NOT NULL DEFAULT '',
    "project_id" text,
    "project_manager" text NOT NULL DEFAULT '',
    "reporting_manager" text NOT NULL DEFAULT '',
    "delivery_head" text NOT NULL DEFAULT '',
    "billability_status" text NOT NULL,
    "non_billable_status" text,
    "total_experience" text NOT NULL DEFAULT '',
    "doj" date NOT NULL,
    "assignment_start_date" date NOT NULL,
    "assignment_end_date" date NOT NULL,
    "practice" text NOT NULL DEFAULT '',
    "primary_skills" text[] NOT NULL DEFAULT '{}',
    "secondary_skills" text[] NOT NULL DEFAULT '{}',
    "status" text NOT NULL
)
"""


class BatchInsertError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing data for a single bulk insert."""
    batch_size: int
    elapsed_seconds: float
    start_time: float
    end_time: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int


def bulk_insert_resources(
    cursor: Any,
    records: Sequence[ResourceRecord],
    table: str = "resources",
    page_size: int = 1000,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
) -> InsertResult:
    """Insert ``records`` into ``table`` with execute_values.

    metrics_callback receives one BatchMetrics per call; it is not invoked
    when ``records`` is empty (early return, no SQL issued).
    """
    if execute_values is None:
        raise BatchInsertError("psycopg2 not available")

    if not records:
        return InsertResult(inserted_rows=0)

    cols_sql = ",".join(f'"{c}"' for c in RESOURCE_COLUMNS)
    sql = f"INSERT INTO {table} ({cols_sql}) VALUES %s"
    values = [tuple(row[c] for c in RESOURCE_COLUMNS) for row in (r.to_row() for r in records)]

    start_time = time.time()
    try:
        execute_values(cursor, sql, values, page_size=page_size)
    except Exception as e:
        raise BatchInsertError(str(e)) from e
    finally:
        end_time = time.time()
        if metrics_callback is not None:
            metrics_callback(
                BatchMetrics(
                    batch_size=len(values),
                    elapsed_seconds=end_time - start_time,
                    start_time=start_time,
                    end_time=end_time,
                )
            )
    return InsertResult(inserted_rows=len(values))


class PostgresStorageActor:
    """StorageActor over an open psycopg2 connection."""

    def __init__(
        self,
        connection: Any,
        table: str = "resources",
        metrics_callback: Callable[[BatchMetrics], None] | None = None,
    ) -> None:
        self.connection = connection
        self.table = table
        self.metrics_callback = metrics_callback

    def ensure_table(self) -> None:
        cur = self.connection.cursor()
        try:
            cur.execute(CREATE_TABLE_SQL.format(table=self.table))
            self.connection.commit()
        finally:
            cur.close()

    def bulk_create_resources(self, records: Sequence[ResourceRecord]) -> None:
        cur = self.connection.cursor()
        try:
            bulk_insert_resources(
                cur, records, table=self.table, metrics_callback=self.metrics_callback
            )
            self.connection.commit()
        except BatchInsertError:
            self.connection.rollback()
            raise
        finally:
            cur.close()

    def list_resources(self) -> list[ResourceRecord]:
        cols_sql = ",".join(f'"{c}"' for c in RESOURCE_COLUMNS)
        cur = self.connection.cursor()
        try:
            cur.execute(f"SELECT {cols_sql} FROM {self.table} ORDER BY employee_id")
            rows = cur.fetchall()
        finally:
            cur.close()
        return [ResourceRecord.from_row(dict(zip(RESOURCE_COLUMNS, row))) for row in rows]
