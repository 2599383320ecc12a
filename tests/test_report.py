from pathlib import Path

import orjson

from errgen.pipeline import GroupSummary, RunSummary
from errgen.report import summary_table, summary_to_payload, write_report


def _summary() -> RunSummary:
    return RunSummary(
        files=["a.dat"],
        groups=[GroupSummary("a.dat", "sm", 0x100, 2, 0x100, 0x101)],
        written=["out/sm-error-enum-gen.h"],
    )


def test_payload_includes_hex_bounds():
    payload = summary_to_payload(_summary())
    assert payload["entries"] == 2
    assert payload["groups"][0]["errmax_hex"] == "0x101"
    assert payload["groups"][0]["count"] == 2


def test_write_report(tmp_path: Path) -> None:
    path = tmp_path / "reports" / "run.json"
    write_report(path, _summary())
    data = orjson.loads(path.read_bytes())
    assert data["files"] == ["a.dat"]
    assert data["written"] == ["out/sm-error-enum-gen.h"]


def test_summary_table_rows():
    table = summary_table(_summary())
    assert table.row_count == 1
