"""Delimited-text and spreadsheet parsing."""
