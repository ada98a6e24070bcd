"""Import pipeline orchestration, export/template and demo session services."""
