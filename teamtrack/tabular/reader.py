from __future__ import annotations

import asyncio
import io
import re
import zipfile
from dataclasses import dataclass
from datetime import datetime, time
from pathlib import PurePath
from typing import Any

import pandas as pd

from ..models.raw_row import RawRow

"""Tabular reader: delimited text or spreadsheet bytes -> (headers, rows).

- File extension selects the mode (.xlsx/.xls -> workbook, anything else -> text)
- Workbooks are decoded with pandas (first sheet only), every cell as str
- Rows whose cells are all blank are dropped
- Headerless input and missing required headers are fatal (ParseError)
"""

__all__ = [
    "REQUIRED_HEADERS",
    "SPREADSHEET_EXTENSIONS",
    "ParseError",
    "TabularData",
    "split_delimited_line",
    "parse_delimited",
    "read_workbook",
    "is_spreadsheet",
    "parse_tabular",
    "parse_tabular_async",
]

REQUIRED_HEADERS: tuple[str, ...] = ("Employee ID", "Name", "Email ID")
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})

_LINE_BREAK = re.compile(r"\r?\n")


class ParseError(Exception):
    """Raised when input is empty/headerless or lacks required headers."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


@dataclass
class TabularData:
    headers: list[str]
    rows: list[RawRow]


def split_delimited_line(line: str, separator: str = ",") -> list[str]:
    """Split one line on ``separator`` honouring double-quoted segments.

    A quote toggles quoting; ``""`` inside a quoted segment is a literal quote.
    """
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == separator and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current))
    return cells


def parse_delimited(text: str, separator: str = ",") -> TabularData:
    """Parse delimited text. First non-blank line is the header.

    Line numbers count physical lines (blank lines included).
    """
    headers: list[str] | None = None
    rows: list[RawRow] = []
    for lineno, line in enumerate(_LINE_BREAK.split(text), start=1):
        if not line.strip():
            continue
        cells = split_delimited_line(line, separator)
        if headers is None:
            headers = cells
            continue
        rows.append(RawRow(line_number=lineno, cells=tuple(cells)))
    return TabularData(headers=headers or [], rows=rows)


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (pd.Timestamp, datetime)):
        if pd.isna(value):
            return ""
        # date-only cells render as YYYY-MM-DD
        if value.time() == time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.isoformat()
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def read_workbook(content: bytes) -> TabularData:
    """Decode the first sheet of a workbook; row 1 is the header.

    Missing cells become "" and every other cell its string form. Text such
    as "NA", "N/A" or "NULL" is kept as written, not read as a missing value.
    """
    df = pd.read_excel(
        io.BytesIO(content), sheet_name=0, header=None, dtype=object, keep_default_na=False
    )
    if df.shape[0] == 0:
        return TabularData(headers=[], rows=[])
    records = [[_cell_to_str(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
    headers = records[0]
    rows = [
        RawRow(line_number=idx, cells=tuple(cells))
        for idx, cells in enumerate(records[1:], start=2)
    ]
    return TabularData(headers=headers, rows=rows)


def is_spreadsheet(filename: str) -> bool:
    return PurePath(filename).suffix.lower() in SPREADSHEET_EXTENSIONS


def parse_tabular(content: bytes | str, filename: str, separator: str = ",") -> TabularData:
    """Parse an uploaded file and check the header row.

    Steps:
    1. Decode by mode (workbook bytes / UTF-8 text)
    2. Reject headerless input
    3. Reject input missing any of REQUIRED_HEADERS (no row processed)
    4. Drop rows whose cells are all blank
    """
    if is_spreadsheet(filename):
        if isinstance(content, str):
            raise ParseError(f"'{filename}' is a spreadsheet but text content was given")
        try:
            data = read_workbook(content)
        except (ValueError, OSError, zipfile.BadZipFile) as e:
            raise ParseError(f"unreadable spreadsheet '{filename}': {e}") from e
    else:
        try:
            text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
        except UnicodeDecodeError as e:
            raise ParseError(f"'{filename}' is not valid UTF-8 text: {e}") from e
        data = parse_delimited(text, separator)

    if not data.headers or all(not h.strip() for h in data.headers):
        raise ParseError("empty or headerless input")

    present = {h.strip() for h in data.headers}
    missing = [h for h in REQUIRED_HEADERS if h not in present]
    if missing:
        raise ParseError(f"missing required columns: {', '.join(missing)}", missing=missing)

    data.rows = [r for r in data.rows if not r.is_blank]
    return data


async def parse_tabular_async(
    content: bytes | str, filename: str, separator: str = ","
) -> TabularData:
    """Awaitable ``parse_tabular``; runs in a worker thread."""
    return await asyncio.to_thread(parse_tabular, content, filename, separator)
