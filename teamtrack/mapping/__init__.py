"""Header/cell pairing and typed field derivation for import rows."""
