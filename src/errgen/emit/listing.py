"""Flat listing of every code in a run: ``name_TAG = <seq>`` per line."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from errgen.emit.common import def_symbol
from errgen.schema.model import AssignedGroup


class ListWriter:
    """Appends entries to one shared stream with a run-wide 1-based sequence."""

    def __init__(self, stream: TextIO, start: int = 1) -> None:
        self.stream = stream
        self.next_seq = start

    def write_group(self, group: AssignedGroup) -> int:
        for entry in group.entries:
            self.stream.write(f"{def_symbol(group.name, entry.tag)} = {self.next_seq}\n")
            self.next_seq += 1
        return group.count

    @property
    def written(self) -> int:
        return self.next_seq - 1


def _iter_listing(path: Path) -> Iterator[tuple[str, int]]:
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            symbol, _, seq = line.partition("=")
            yield symbol.strip(), int(seq)


def read_listing(path: Path) -> list[tuple[str, int]]:
    """Parse a listing file back into (symbol, sequence) pairs."""
    return list(_iter_listing(path))
