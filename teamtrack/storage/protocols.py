"""Storage actor protocol: the import pipeline's only outbound dependency."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models.resource import ResourceRecord


class SubmitError(Exception):
    """Bulk submission failed; no record of the batch was accepted.

    Retryable: the caller may submit the same valid set again.
    """


@runtime_checkable
class StorageActor(Protocol):
    def bulk_create_resources(self, records: Sequence[ResourceRecord]) -> None:
        """Persist all records in one call; raise on failure."""
        ...

    def list_resources(self) -> list[ResourceRecord]:
        ...
