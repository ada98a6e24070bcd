"""In-memory storage actor (mock mode and tests)."""

from __future__ import annotations

from collections.abc import Sequence

from ..models.resource import ResourceRecord


class MemoryStorageActor:
    """Dict-backed StorageActor keyed by record id, insertion ordered."""

    def __init__(self) -> None:
        self._records: dict[str, ResourceRecord] = {}
        self.calls = 0

    def bulk_create_resources(self, records: Sequence[ResourceRecord]) -> None:
        self.calls += 1
        for record in records:
            self._records[record.id] = record

    def list_resources(self) -> list[ResourceRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
