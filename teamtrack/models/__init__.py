"""Domain models for the TeamTrack resource import tool.

This package contains the domain model classes used throughout the pipeline:
raw parsed rows, resource records, per-row validation outcomes and the
aggregate import summary, plus configuration and error-log records.
"""

from .config_models import ImportConfig, StorageConfig
from .enums import BillabilityStatus, ImportState, NonBillableStatus, ResourceStatus, UserRole
from .error_record import ErrorRecord
from .import_summary import FailedRow, ImportSummary
from .raw_row import RawRow
from .resource import EPOCH, ResourceRecord
from .user_profile import UserProfile
from .validation_outcome import ValidationOutcome

__all__ = [
    # Configuration models
    "ImportConfig",
    "StorageConfig",
    # Enums
    "BillabilityStatus",
    "ImportState",
    "NonBillableStatus",
    "ResourceStatus",
    "UserRole",
    # Processing models
    "EPOCH",
    "ErrorRecord",
    "FailedRow",
    "ImportSummary",
    "RawRow",
    "ResourceRecord",
    "UserProfile",
    "ValidationOutcome",
]
