"""Row-level validation of mapped import rows."""
