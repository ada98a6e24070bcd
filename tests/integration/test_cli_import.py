from __future__ import annotations

import json
from pathlib import Path

from teamtrack.cli import main as cli_main


def test_import_then_export_in_same_process(write_config, temp_workdir: Path, mock_mode, make_csv, make_row, capsys):
    rows = [make_row(**{"Employee ID": f"EMP{i:03d}"}) for i in range(1, 6)]
    rows.append(make_row(**{"Employee ID": "", "Name": ""}))
    src = temp_workdir / "data" / "batch.csv"
    src.write_text(make_csv(rows), encoding="utf-8")

    code = cli_main(["import", str(src)])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY total=6 imported=5 skipped=1" in out

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    entry = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert entry["file"] == "batch.csv"
    assert entry["row"] == 7
    assert entry["message"] == "Employee ID is required; Name is required"


def test_template_is_importable(write_config, temp_workdir: Path, mock_mode, capsys):
    assert cli_main(["template", "--out", "data/template.csv"]) == 0
    code = cli_main(["import", "data/template.csv"])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY total=3 imported=3 skipped=0" in out
