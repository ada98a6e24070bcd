#!/usr/bin/env python3
"""Generate a synthetic resource import file (CSV or XLSX).

Output uses the 21-column import layout (header row + data rows) and can be
fed straight to ``teamtrack import``. A share of rows can be made invalid on
purpose (blank Employee ID, or Non-Billable with an unknown category) to
exercise the skipped-row path.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from teamtrack.mapping.field_mapper import COLUMN_HEADERS
from teamtrack.models.enums import NonBillableStatus

FIRST_NAMES = ["Asha", "Ravi", "Meera", "John", "Priya", "Karan", "Sara", "Vikram", "Nina", "Omar"]
LAST_NAMES = ["Sharma", "Iyer", "Smith", "Verma", "Khan", "Das", "Patel", "Rao", "Lee", "Menon"]
LOCATIONS = ["Bangalore", "Hyderabad", "Mumbai", "Pune", "Chennai"]
CLIENTS = ["Acme Corp", "Beta Ltd", "Gamma Inc", ""]
PRACTICES = ["Engineering", "QA", "Frontend", "Data", "Cloud"]
SKILLS = ["Java", "Python", "React", "AWS", "Docker", "Kubernetes", "SQL", "Selenium", "Spark"]


def generate_rows(rows: int, invalid_ratio: float = 0.0, seed: int = 42) -> pd.DataFrame:
    """Build a DataFrame of import rows (all cells as text)."""
    rng = np.random.default_rng(seed)
    categories = [s.label for s in NonBillableStatus]
    doj = pd.date_range("2015-01-01", "2024-06-30", periods=200)

    data: list[list[str]] = []
    for i in range(rows):
        first = FIRST_NAMES[rng.integers(len(FIRST_NAMES))]
        last = LAST_NAMES[rng.integers(len(LAST_NAMES))]
        billable = bool(rng.random() < 0.7)
        client = CLIENTS[rng.integers(len(CLIENTS))] if billable else ""
        primary = rng.choice(SKILLS, size=3, replace=False).tolist()
        secondary = rng.choice(SKILLS, size=2, replace=False).tolist()
        start = pd.Timestamp(doj[rng.integers(len(doj))])
        row = [
            f"EMP{i + 1:05d}",
            f"{first} {last}",
            f"{first.lower()}.{last.lower()}{i + 1}@company.com",
            f"+91-9{rng.integers(100_000_000, 999_999_999)}",
            LOCATIONS[rng.integers(len(LOCATIONS))],
            client,
            "Platform Build" if client else "",
            f"PRJ-{rng.integers(1, 50):03d}" if client else "",
            "Alice Johnson",
            "Bob Williams",
            "Carol Davis",
            "Billable" if billable else "Non-Billable",
            "" if billable else categories[rng.integers(len(categories))],
            f"{rng.integers(1, 20)} years",
            start.strftime("%Y-%m-%d"),
            "2024-01-01",
            "2024-12-31",
            PRACTICES[rng.integers(len(PRACTICES))],
            ";".join(primary),
            ";".join(secondary),
            "Inactive" if rng.random() < 0.05 else "Active",
        ]
        if rng.random() < invalid_ratio:
            if rng.random() < 0.5:
                row[0] = ""
            else:
                row[11] = "Non-Billable"
                row[12] = "Sabbatical"
        data.append(row)
    return pd.DataFrame(data, columns=list(COLUMN_HEADERS))


def write_file(df: pd.DataFrame, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Resources", index=False)
    else:
        df.to_csv(output, index=False, lineterminator="\n")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic TeamTrack resource import file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s resources.csv --rows 500
  %(prog)s resources.xlsx --rows 10000 --invalid-ratio 0.05
        """,
    )
    parser.add_argument("output", type=Path, help="Output file (.csv or .xlsx)")
    parser.add_argument("--rows", type=int, default=1000, help="Data rows (default: 1000)")
    parser.add_argument(
        "--invalid-ratio", type=float, default=0.0, help="Share of invalid rows (0..1)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.invalid_ratio <= 1.0:
        print("Error: --invalid-ratio must be within 0..1", file=sys.stderr)
        return 1

    df = generate_rows(args.rows, args.invalid_ratio, args.seed)
    write_file(df, args.output)
    print(f"Created {args.output}: {len(df):,} rows x {len(df.columns)} columns")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
