from __future__ import annotations

import asyncio
import io

import pandas as pd
import pytest

from teamtrack.tabular.reader import (
    ParseError,
    is_spreadsheet,
    parse_delimited,
    parse_tabular,
    parse_tabular_async,
    read_workbook,
    split_delimited_line,
)


def _make_xlsx(rows: list[list[object]]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    return buf.getvalue()


def test_split_plain_line():
    assert split_delimited_line("a,b,,c") == ["a", "b", "", "c"]


def test_split_quoted_separator_and_escaped_quote():
    line = '"Smith, John","say ""hi""",x'
    assert split_delimited_line(line) == ["Smith, John", 'say "hi"', "x"]


def test_split_custom_separator():
    assert split_delimited_line('a;"b;c";d', separator=";") == ["a", "b;c", "d"]


def test_parse_delimited_crlf_and_blank_lines():
    text = "Employee ID,Name,Email ID\r\n\r\nEMP1,A,a@x\r\nEMP2,B,b@x\n"
    data = parse_delimited(text)
    assert data.headers == ["Employee ID", "Name", "Email ID"]
    assert [r.cells for r in data.rows] == [("EMP1", "A", "a@x"), ("EMP2", "B", "b@x")]
    # physical line numbers: header=1, blank=2
    assert [r.line_number for r in data.rows] == [3, 4]


def test_parse_tabular_row_and_header_counts(make_csv, make_row):
    rows = [make_row(**{"Employee ID": f"EMP{i}"}) for i in range(5)]
    data = parse_tabular(make_csv(rows), "resources.csv")
    assert len(data.headers) == 21
    assert len(data.rows) == 5


def test_parse_tabular_empty_input():
    with pytest.raises(ParseError) as e:
        parse_tabular("", "empty.csv")
    assert "empty or headerless input" in str(e.value)


def test_parse_tabular_only_blank_lines():
    with pytest.raises(ParseError):
        parse_tabular(b"\n  \r\n\n", "blank.csv")


@pytest.mark.parametrize(
    "header, missing",
    [
        ("Name,Email ID", ["Employee ID"]),
        ("Employee ID,Email ID", ["Name"]),
        ("Location,Client", ["Employee ID", "Name", "Email ID"]),
    ],
)
def test_parse_tabular_missing_required_headers(header: str, missing: list[str]):
    with pytest.raises(ParseError) as e:
        parse_tabular(f"{header}\nx,y\n", "bad.csv")
    assert e.value.missing == missing
    for col in missing:
        assert col in str(e.value)


def test_parse_tabular_trims_headers_for_required_check():
    data = parse_tabular(" Employee ID , Name ,Email ID\nE1,N,e@x", "t.csv")
    assert len(data.rows) == 1


def test_parse_tabular_drops_all_blank_rows():
    text = "Employee ID,Name,Email ID\nE1,A,a@x\n , ,\nE2,B,b@x"
    data = parse_tabular(text, "t.csv")
    assert [r.cells[0] for r in data.rows] == ["E1", "E2"]


def test_parse_tabular_bytes_with_bom():
    content = b"\xef\xbb\xbf" + "Employee ID,Name,Email ID\nE1,A,a@x".encode("utf-8")
    data = parse_tabular(content, "bom.csv")
    assert data.headers[0] == "Employee ID"


def test_parse_tabular_invalid_utf8():
    with pytest.raises(ParseError):
        parse_tabular(b"\xff\xfe\x00bad", "latin.csv")


def test_parse_tabular_is_deterministic(make_csv, make_row):
    text = make_csv([make_row(), make_row(Name="Jane")])
    assert parse_tabular(text, "a.csv") == parse_tabular(text, "a.csv")


def test_is_spreadsheet_by_extension():
    assert is_spreadsheet("r.xlsx")
    assert is_spreadsheet("R.XLS")
    assert not is_spreadsheet("r.csv")
    assert not is_spreadsheet("r.txt")


def test_read_workbook_cells_as_strings():
    content = _make_xlsx(
        [
            ["Employee ID", "Name", "Email ID", "Total Experience"],
            ["EMP1", "Alice", "a@x", 5],
            ["EMP2", "Bob", None, 2.5],
        ]
    )
    data = read_workbook(content)
    assert data.headers == ["Employee ID", "Name", "Email ID", "Total Experience"]
    assert data.rows[0].cells == ("EMP1", "Alice", "a@x", "5")
    assert data.rows[1].cells == ("EMP2", "Bob", "", "2.5")
    assert [r.line_number for r in data.rows] == [2, 3]


def test_read_workbook_keeps_na_like_text():
    na_like = ["NA", "N/A", "NULL", "None", "#N/A", "nan"]
    content = _make_xlsx(
        [
            ["Employee ID", "Name", "Email ID", *[f"C{i}" for i in range(len(na_like))]],
            ["EMP1", "NULL", "a@x", *na_like],
            ["EMP2", "Bob", "b@x", *[None] * len(na_like)],
        ]
    )
    data = read_workbook(content)
    assert data.rows[0].cells == ("EMP1", "NULL", "a@x", *na_like)
    assert data.rows[1].cells[3:] == ("",) * len(na_like)


def test_read_workbook_date_cells():
    content = _make_xlsx(
        [
            ["Employee ID", "Name", "Email ID", "DOJ"],
            ["EMP1", "Alice", "a@x", pd.Timestamp("2020-01-15")],
        ]
    )
    data = read_workbook(content)
    assert data.rows[0].cells[3] == "2020-01-15"


def test_parse_tabular_xlsx_drops_blank_rows():
    content = _make_xlsx(
        [
            ["Employee ID", "Name", "Email ID"],
            ["EMP1", "Alice", "a@x"],
            [None, None, None],
            ["EMP2", "Bob", "b@x"],
        ]
    )
    data = parse_tabular(content, "resources.xlsx")
    assert [r.cells[0] for r in data.rows] == ["EMP1", "EMP2"]


def test_parse_tabular_xlsx_missing_headers():
    content = _make_xlsx([["Name", "Email ID"], ["Alice", "a@x"]])
    with pytest.raises(ParseError) as e:
        parse_tabular(content, "resources.xlsx")
    assert e.value.missing == ["Employee ID"]


def test_parse_tabular_corrupt_workbook():
    with pytest.raises(ParseError):
        parse_tabular(b"not a zip file", "broken.xlsx")


def test_parse_tabular_async(make_csv, make_row):
    text = make_csv([make_row()])
    data = asyncio.run(parse_tabular_async(text, "async.csv"))
    assert len(data.rows) == 1
