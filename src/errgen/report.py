"""Run report helpers: JSON payloads and a Rich summary table."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

import orjson
from rich.table import Table

from errgen.pipeline import RunSummary


def summary_to_payload(summary: RunSummary) -> dict[str, Any]:
    """Flatten a RunSummary into a JSON-friendly dict; codes are rendered as hex."""
    return {
        "files": summary.files,
        "groups": [
            {**asdict(g), "errmin_hex": f"{g.errmin:#x}", "errmax_hex": f"{g.errmax:#x}"}
            for g in summary.groups
        ],
        "entries": summary.entries,
        "written": summary.written,
        "list_path": summary.list_path,
        "listed": summary.listed,
    }


def write_report(path: Path, summary: RunSummary) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(summary_to_payload(summary), option=orjson.OPT_INDENT_2))


def summary_table(summary: RunSummary) -> Table:
    table = Table(title="Error groups")
    table.add_column("Source")
    table.add_column("Group")
    table.add_column("Entries", justify="right")
    table.add_column("ERRMIN", justify="right")
    table.add_column("ERRMAX", justify="right")
    for g in summary.groups:
        table.add_row(g.source, g.name, str(g.count), f"{g.errmin:#x}", f"{g.errmax:#x}")
    return table
