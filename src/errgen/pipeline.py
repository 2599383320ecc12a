"""Run orchestration: parse each input file and route groups to the emitters.

Files are processed in the given order, groups in appearance order. The first
error aborts the run; output already written is left in place.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import ExitStack
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from errgen.config import GeneratorConfig
from errgen.emit.common import HeaderContext
from errgen.emit.headers import EMITTERS, HeaderEmitter
from errgen.emit.listing import ListWriter
from errgen.errors import OutputError, UsageError
from errgen.schema.model import AssignedGroup, assign_entries
from errgen.schema.parser import parse_file


@dataclass
class RunOptions:
    errmsg: bool = False
    einfo: bool = False
    enum: bool = False
    defines: bool = False
    list_path: Path | None = None
    output_dir: Path = Path(".")

    @property
    def list_mode(self) -> bool:
        return self.list_path is not None

    def enabled_emitters(self) -> list[HeaderEmitter]:
        """Emitters selected by the flags; -p covers both metadata tables."""
        if self.list_mode:
            return []
        keys: list[str] = []
        if self.errmsg:
            keys.append("errmsg")
        if self.einfo:
            keys.extend(["einfo", "einfo_bakw"])
        if self.enum:
            keys.append("enum")
        if self.defines:
            keys.append("defines")
        return [EMITTERS[k] for k in keys]

    def validate(self) -> None:
        if not self.list_mode and not (self.errmsg or self.einfo or self.enum or self.defines):
            raise UsageError("You must specify at least one of -m, -p, -e, -d or -list")


@dataclass
class GroupSummary:
    source: str
    name: str
    base: int
    count: int
    errmin: int
    errmax: int


@dataclass
class RunSummary:
    files: list[str] = field(default_factory=list)
    groups: list[GroupSummary] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    list_path: str | None = None
    listed: int = 0

    @property
    def entries(self) -> int:
        return sum(g.count for g in self.groups)


class RunContext:
    """Holds everything that lives for one invocation.

    Use as a context manager: the list stream (list mode) is opened on entry and
    closed on exit, including when processing raises.
    """

    def __init__(
        self,
        options: RunOptions,
        config: GeneratorConfig | None = None,
        on_write: Callable[[Path], None] | None = None,
    ) -> None:
        options.validate()
        self.options = options
        self.config = config or GeneratorConfig()
        self.timestamp = self.config.timestamp or datetime.now().strftime("%a %b %d %H:%M:%S %Y")
        self.emitters = options.enabled_emitters()
        self.summary = RunSummary()
        self.list_writer: ListWriter | None = None
        self._on_write = on_write
        self._stack = ExitStack()

    def __enter__(self) -> RunContext:
        list_path = self.options.list_path
        if list_path is not None:
            try:
                list_path.parent.mkdir(parents=True, exist_ok=True)
                stream = self._stack.enter_context(list_path.open("w", encoding="utf-8"))
            except OSError as exc:
                self._stack.close()
                raise OutputError(f"Couldn't open {list_path}: {exc.strerror or exc}") from exc
            self.list_writer = ListWriter(stream)
            self.summary.list_path = str(list_path)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._stack.close()
        if self.list_writer is not None:
            self.summary.listed = self.list_writer.written

    def process_file(self, path: Path) -> None:
        groups = parse_file(path)
        ctx = self.config.header_context(str(path))
        ctx.timestamp = self.timestamp
        for group in groups:
            assigned = assign_entries(group)
            self.summary.groups.append(
                GroupSummary(
                    source=str(path),
                    name=assigned.name,
                    base=assigned.base,
                    count=assigned.count,
                    errmin=assigned.errmin,
                    errmax=assigned.errmax,
                )
            )
            if self.list_writer is not None:
                try:
                    self.list_writer.write_group(assigned)
                except OSError as exc:
                    raise OutputError(
                        f"Couldn't write {self.options.list_path}: {exc.strerror or exc}"
                    ) from exc
                continue
            for emitter in self.emitters:
                self._write_header(emitter, assigned, ctx)
        self.summary.files.append(str(path))

    def _write_header(
        self, emitter: HeaderEmitter, group: AssignedGroup, ctx: HeaderContext
    ) -> None:
        file_name = emitter.file_name(group.name, self.config.extension)
        out_path = self.options.output_dir / file_name
        text = emitter.render(group, file_name, ctx)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            with out_path.open("w", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            raise OutputError(f"Couldn't write {out_path}: {exc.strerror or exc}") from exc
        self.summary.written.append(str(out_path))
        if self._on_write is not None:
            self._on_write(out_path)


def run(
    files: Sequence[Path],
    options: RunOptions,
    config: GeneratorConfig | None = None,
    on_write: Callable[[Path], None] | None = None,
) -> RunSummary:
    """Generate outputs for every input file in order; raises on the first error."""
    if not files:
        raise UsageError("No input files given")
    context = RunContext(options, config, on_write=on_write)
    with context:
        for path in files:
            context.process_file(path)
    return context.summary
