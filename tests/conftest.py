# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from teamtrack.logging.init import reset_logging
from teamtrack.mapping.field_mapper import COLUMN_HEADERS
from teamtrack.models.resource import ResourceRecord
from teamtrack.services.export import escape_csv


def base_row(**overrides: str) -> dict[str, str]:
    """A valid billable import row keyed by column header."""
    row = {
        "Employee ID": "EMP001",
        "Name": "John Smith",
        "Email ID": "john@x.com",
        "Contact Number": "+91-9876543210",
        "Location": "Bangalore",
        "Client": "Acme Corp",
        "Project": "Digital Transformation",
        "Project ID": "PRJ-001",
        "Project Manager": "Alice Johnson",
        "Reporting Manager": "Bob Williams",
        "Delivery Head": "Carol Davis",
        "Billability Status": "Billable",
        "Non-Billable Category": "",
        "Total Experience": "5 years",
        "DOJ": "2020-01-15",
        "Assignment Start Date": "2024-01-01",
        "Assignment End Date": "2024-12-31",
        "Practice": "Engineering",
        "Primary Skills": "Java;Spring Boot;Microservices",
        "Secondary Skills": "Docker;Kubernetes;AWS",
        "Status": "Active",
    }
    row.update(overrides)
    return row


def build_csv(rows: Sequence[dict[str, str]], headers: Sequence[str] = COLUMN_HEADERS) -> str:
    lines = [",".join(escape_csv(h) for h in headers)]
    for row in rows:
        lines.append(",".join(escape_csv(row.get(h, "")) for h in headers))
    return "\n".join(lines)


class FailingStorage:
    """StorageActor double that fails the first ``failures`` bulk calls."""

    def __init__(self, failures: int = 1, exc: Exception | None = None) -> None:
        self.failures = failures
        self.exc = exc or ConnectionError("storage actor unreachable")
        self.calls: list[list[ResourceRecord]] = []
        self.stored: list[ResourceRecord] = []

    def bulk_create_resources(self, records: Sequence[ResourceRecord]) -> None:
        self.calls.append(list(records))
        if len(self.calls) <= self.failures:
            raise self.exc
        self.stored.extend(records)

    def list_resources(self) -> list[ResourceRecord]:
        return list(self.stored)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """separator: ","
error_log_dir: ./logs
session_file: ./session/demo.json
storage:
  table: resources
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "teamtrack.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_row() -> Callable[..., dict[str, str]]:
    return base_row


@pytest.fixture()
def make_csv() -> Callable[..., str]:
    return build_csv


@pytest.fixture()
def mock_mode(monkeypatch):
    monkeypatch.setenv("DISABLE_DB_CONNECT", "1")


@pytest.fixture()
def failing_storage() -> type[FailingStorage]:
    return FailingStorage
