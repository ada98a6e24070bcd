"""TeamTrack resource import toolkit.

Bulk import of employee resource records from CSV / Excel files, with
row-level validation, a single bulk submission to the storage backend and
CSV / XLSX export using the same 21-column layout.
"""

__version__ = "0.3.0"
