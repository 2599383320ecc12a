"""Error-table data model: groups, entries and code assignment."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Entry:
    tag: str
    message: str
    line: int | None = None


@dataclass
class Group:
    name: str
    base: int
    label: str = ""
    class_qualifier: str | None = None
    entries: list[Entry] = field(default_factory=list)
    source: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class AssignedEntry:
    tag: str
    message: str
    offset: int
    code: int


@dataclass(frozen=True)
class AssignedGroup:
    group: Group
    entries: tuple[AssignedEntry, ...]

    @property
    def name(self) -> str:
        return self.group.name

    @property
    def base(self) -> int:
        return self.group.base

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def errmin(self) -> int:
        return self.group.base

    @property
    def errmax(self) -> int:
        # An empty group yields errmax == base - 1, mirroring count - 1.
        return self.group.base + self.count - 1


def resolve_base(token: str) -> int:
    """Parse a base literal: ``0x`` hex, leading ``0`` octal, otherwise decimal.

    Raises ValueError when the digits do not fit the radix chosen by the prefix.
    """
    text = token.strip()
    if not text:
        raise ValueError("empty base")
    if text[:2] in ("0x", "0X"):
        return int(text[2:], 16)
    if text.startswith("0"):
        return int(text, 8)
    return int(text, 10)


def assign_entries(group: Group) -> AssignedGroup:
    """Number entries 0..n-1 in input order and compute absolute codes."""
    assigned = tuple(
        AssignedEntry(tag=e.tag, message=e.message, offset=i, code=group.base + i)
        for i, e in enumerate(group.entries)
    )
    return AssignedGroup(group=group, entries=assigned)
