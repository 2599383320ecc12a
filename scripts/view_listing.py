"""Show an ``errgen -list`` output file as a Rich table."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from errgen.emit.listing import read_listing


def main() -> None:
    parser = argparse.ArgumentParser(description="View an error code listing.")
    parser.add_argument("listing", type=Path, help="File written by errgen -list.")
    parser.add_argument("--group", help="Only show symbols starting with GROUP_.")
    args = parser.parse_args()

    console = Console()
    entries = read_listing(args.listing)
    if args.group:
        prefix = f"{args.group}_"
        entries = [(sym, seq) for sym, seq in entries if sym.startswith(prefix)]

    console.print(f"[bold]{len(entries)}[/] codes in {args.listing}")

    code_table = Table(title="Codes")
    code_table.add_column("Seq", justify="right")
    code_table.add_column("Symbol")
    for sym, seq in entries:
        code_table.add_row(str(seq), sym)
    console.print(code_table)


if __name__ == "__main__":
    main()
