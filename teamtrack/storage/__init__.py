"""Storage actor protocol and backends (in-memory, PostgreSQL)."""

from .memory_backend import MemoryStorageActor
from .protocols import StorageActor, SubmitError

__all__ = ["MemoryStorageActor", "StorageActor", "SubmitError"]
