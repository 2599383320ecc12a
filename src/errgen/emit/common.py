"""Naming, guard and banner helpers shared by the header emitters."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime

from errgen.schema.model import AssignedGroup

NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")
SYMBOL_WIDTH = 25


@dataclass
class HeaderContext:
    """Per-file rendering inputs that do not come from the group itself."""

    source: str
    program: str = "errgen"
    timestamp: str = field(default_factory=lambda: datetime.now().strftime("%a %b %d %H:%M:%S %Y"))
    info_type: str = "heron::error::error_info_t"
    count_type: str = "sp_uint32"
    sentinel: str = "dummy error code"
    banner_lines: tuple[str, ...] = ()
    emit_label: bool = False


def def_symbol(group_name: str, tag: str) -> str:
    """Macro-style symbol, case preserved: ``name_TAG``."""
    return f"{group_name}_{tag}"


def enum_symbol(group_name: str, tag: str) -> str:
    """Enum-style symbol with the group prefix uppercased: ``NAME_TAG``."""
    return f"{group_name.upper()}_{tag}"


def guard_token(file_name: str) -> str:
    """Inclusion guard derived from the output file name."""
    return NON_ALNUM_RE.sub("_", file_name.upper())


def c_string(text: str) -> str:
    """Escape text for a C string literal body."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def banner(file_name: str, group: AssignedGroup, ctx: HeaderContext) -> str:
    token = guard_token(file_name)
    lines = [
        f"#ifndef {token}",
        f"#define {token}",
        "",
        "/*",
        " * DO NOT EDIT ---",
        f" *     generated by {ctx.program} from {ctx.source}",
        f" *     generated on {ctx.timestamp}",
    ]
    if ctx.banner_lines:
        lines.append(" *")
        lines.extend(f" * {text}".rstrip() for text in ctx.banner_lines)
    lines.append(" */")
    if ctx.emit_label and group.group.label:
        lines.append("")
        label = group.group.label.replace("*/", "* /")
        lines.append(f"/* {group.name}: {label} */")
    lines.append("")
    return "\n".join(lines) + "\n"


def footer() -> str:
    return "\n#endif\n"
