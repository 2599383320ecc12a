"""Header emitters: one guarded C/C++ unit per (group, artifact kind).

Every renderer is a pure function of the assigned group and the header context,
so the five artifacts stay numerically consistent with one another.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from errgen.emit.common import (
    SYMBOL_WIDTH,
    HeaderContext,
    banner,
    c_string,
    def_symbol,
    enum_symbol,
    footer,
)
from errgen.schema.model import AssignedGroup

W = SYMBOL_WIDTH


def render_errmsg(group: AssignedGroup, file_name: str, ctx: HeaderContext) -> str:
    """Message strings indexed by offset, closed by the sentinel entry."""
    rows = [f"static const char* {group.name}_errmsg[] = {{"]
    for entry in group.entries:
        symbol = enum_symbol(group.name, entry.tag)
        rows.append(f'/* {symbol:<{W}} */ "{c_string(entry.message)}",')
    rows.append(f'\t"{c_string(ctx.sentinel)}"')
    rows.append("};")
    rows.append("")
    rows.append(f"const {ctx.count_type} {group.name}_msg_size = {group.count};")
    return banner(file_name, group, ctx) + "\n".join(rows) + "\n" + footer()


def render_einfo(group: AssignedGroup, file_name: str, ctx: HeaderContext) -> str:
    """(symbol, message) pairs plus the ERRCNT constant."""
    qualifier = group.group.class_qualifier
    prefix = f"{qualifier}::" if qualifier else f"{group.name}_"
    rows = [f"{ctx.info_type} {prefix}error_info[] = {{"]
    for entry in group.entries:
        symbol = enum_symbol(group.name, entry.tag)
        rows.append(f'    {{ {symbol:<{W}},  "{c_string(entry.message)}" }},')
    rows.append("};")
    rows.append("")
    errcnt = f"{group.name.upper()}_ERRCNT"
    rows.append(f"const {ctx.count_type} {errcnt:<{W}} = {group.count + 1};")
    return banner(file_name, group, ctx) + "\n".join(rows) + "\n" + footer()


def render_einfo_bakw(group: AssignedGroup, file_name: str, ctx: HeaderContext) -> str:
    """(symbol, symbol-as-string) pairs for code-to-name lookups."""
    rows = [f"{ctx.info_type} {group.name}_error_info_bakw[] = {{"]
    for entry in group.entries:
        symbol = enum_symbol(group.name, entry.tag)
        rows.append(f'    {{ {symbol}, "{symbol}" }},')
    rows.append("};")
    return banner(file_name, group, ctx) + "\n".join(rows) + "\n" + footer()


def render_enum(group: AssignedGroup, file_name: str, ctx: HeaderContext) -> str:
    upper = group.name.upper()
    rows = ["enum {"]
    for entry in group.entries:
        rows.append(f"    {enum_symbol(group.name, entry.tag):<{W}} = {entry.code:#x},")
    rows.append(f"    {upper + '_ERRMIN':<{W}} = {group.errmin:#x},")
    rows.append(f"    {upper + '_ERRMAX':<{W}} = {group.errmax:#x}")
    rows.append("};")
    return banner(file_name, group, ctx) + "\n".join(rows) + "\n" + footer()


def render_defines(group: AssignedGroup, file_name: str, ctx: HeaderContext) -> str:
    rows = []
    for entry in group.entries:
        rows.append(f"#define {def_symbol(group.name, entry.tag):<{W}} {entry.code:#x}")
    rows.append(f"#define {group.name + '_ERRMIN':<{W}} {group.errmin:#x}")
    rows.append(f"#define {group.name + '_ERRMAX':<{W}} {group.errmax:#x}")
    return banner(file_name, group, ctx) + "\n".join(rows) + "\n" + footer()


@dataclass(frozen=True)
class HeaderEmitter:
    key: str
    suffix: str
    render: Callable[[AssignedGroup, str, HeaderContext], str]

    def file_name(self, group_name: str, extension: str) -> str:
        return f"{group_name}-{self.suffix}.{extension}"


EMITTERS: dict[str, HeaderEmitter] = {
    "errmsg": HeaderEmitter("errmsg", "errmsg-gen", render_errmsg),
    "einfo": HeaderEmitter("einfo", "einfo-gen", render_einfo),
    "einfo_bakw": HeaderEmitter("einfo_bakw", "einfo-bakw-gen", render_einfo_bakw),
    "enum": HeaderEmitter("enum", "error-enum-gen", render_enum),
    "defines": HeaderEmitter("defines", "error-def-gen", render_defines),
}
