"""Line-oriented parser for error-table definition files.

Input is a sequence of blocks::

    name = base "label" [ClassQualifier] {
    TAG  Free text message
    ...
    }

Blank lines and lines starting with ``#`` are ignored anywhere. Blocks may not
nest; the first problem aborts parsing with a ParseError.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from errgen.errors import InputError, ParseError
from errgen.schema.model import Entry, Group, resolve_base

OPEN_RE = re.compile(
    r'^\s*(?P<name>[A-Za-z_]\w*)\s*=\s*(?P<base>[0-9A-Fa-fxX]+)\s*"(?P<label>.*)"'
    r"\s*(?P<qualifier>[A-Za-z_][\w:]*)?\s*\{\s*$"
)
ENTRY_RE = re.compile(r"^\s*(?P<tag>[A-Za-z_]\w*)(?:\s+(?P<message>.*?))?\s*$")


class LineKind(Enum):
    IGNORE = "ignore"
    OPEN = "open"
    CLOSE = "close"
    ENTRY = "entry"


@dataclass
class ClassifiedLine:
    kind: LineKind
    name: str = ""
    base: str = ""
    label: str = ""
    qualifier: str | None = None
    tag: str = ""
    message: str = ""


def classify_line(text: str) -> ClassifiedLine:
    """Classify one raw line; raises ValueError when an entry has no usable tag.

    A line that does not match the header pattern is an entry, even if it ends in
    ``{``.
    """
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return ClassifiedLine(LineKind.IGNORE)
    if stripped.startswith("}"):
        return ClassifiedLine(LineKind.CLOSE)

    open_match = OPEN_RE.match(text)
    if open_match:
        return ClassifiedLine(
            LineKind.OPEN,
            name=open_match.group("name"),
            base=open_match.group("base"),
            label=open_match.group("label"),
            qualifier=open_match.group("qualifier"),
        )
    entry_match = ENTRY_RE.match(text)
    if not entry_match:
        raise ValueError(f"bad line: {stripped!r}")
    return ClassifiedLine(
        LineKind.ENTRY,
        tag=entry_match.group("tag"),
        message=entry_match.group("message") or "",
    )


def parse_groups(lines: Iterable[str], source: str | Path | None = None) -> Iterator[Group]:
    """Yield each group as its close marker is reached."""
    current: Group | None = None
    seen_names: set[str] = set()
    seen_tags: set[str] = set()
    lineno = 0

    for lineno, raw in enumerate(lines, start=1):
        try:
            line = classify_line(raw)
        except ValueError as exc:
            raise ParseError(str(exc), source, lineno) from exc

        if line.kind is LineKind.IGNORE:
            continue

        if line.kind is LineKind.OPEN:
            if current is not None:
                raise ParseError(
                    f"missing close marker for group '{current.name}' "
                    f"opened at line {current.line}",
                    source,
                    lineno,
                )
            if line.name in seen_names:
                raise ParseError(f"duplicate group name '{line.name}'", source, lineno)
            try:
                base = resolve_base(line.base)
            except ValueError as exc:
                raise ParseError(f"invalid base '{line.base}'", source, lineno) from exc
            current = Group(
                name=line.name,
                base=base,
                label=line.label,
                class_qualifier=line.qualifier,
                source=str(source) if source is not None else None,
                line=lineno,
            )
            seen_names.add(line.name)
            seen_tags = set()
        elif line.kind is LineKind.CLOSE:
            if current is None:
                raise ParseError("close marker without an open group", source, lineno)
            yield current
            current = None
        else:
            if current is None:
                if raw.rstrip().endswith("{"):
                    raise ParseError(f"malformed group header: {raw.strip()!r}", source, lineno)
                raise ParseError(f"entry '{line.tag}' outside of any group", source, lineno)
            if line.tag in seen_tags:
                raise ParseError(
                    f"duplicate tag '{line.tag}' in group '{current.name}'", source, lineno
                )
            seen_tags.add(line.tag)
            current.entries.append(Entry(tag=line.tag, message=line.message, line=lineno))

    if current is not None:
        raise ParseError(
            f"missing close marker for group '{current.name}' opened at line {current.line}",
            source,
            lineno,
        )


def parse_text(text: str, source: str | Path | None = None) -> list[Group]:
    return list(parse_groups(text.splitlines(), source))


def parse_file(path: Path) -> list[Group]:
    """Read and parse one definition file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"Couldn't open {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(f"{path}: not valid UTF-8 at byte {exc.start}") from exc
    return parse_text(text, path)
