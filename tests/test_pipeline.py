from pathlib import Path

import pytest

from errgen.config import GeneratorConfig
from errgen.emit.listing import ListWriter
from errgen.errors import OutputError, ParseError, UsageError
from errgen.pipeline import RunContext, RunOptions, run

LAYER_A = """
fs = 0x100 "File system" {
NOTFOUND  No such file
EXISTS    File exists
}
io = 0200 "I/O" {
EOF       End of file
}
"""

LAYER_B = """
net = 1000 "Network" {
TIMEOUT   Timed out
RESET     Connection reset
}
"""


def _write_inputs(tmp_path: Path) -> list[Path]:
    a = tmp_path / "a.dat"
    b = tmp_path / "b.dat"
    a.write_text(LAYER_A)
    b.write_text(LAYER_B)
    return [a, b]


def test_run_requires_a_selection(tmp_path: Path) -> None:
    with pytest.raises(UsageError):
        run(_write_inputs(tmp_path), RunOptions(output_dir=tmp_path / "out"))
    assert not (tmp_path / "out").exists()


def test_run_requires_inputs(tmp_path: Path) -> None:
    with pytest.raises(UsageError):
        run([], RunOptions(enum=True, output_dir=tmp_path))


def test_run_writes_one_file_per_group_and_emitter(tmp_path: Path) -> None:
    out = tmp_path / "out"
    options = RunOptions(errmsg=True, einfo=True, enum=True, defines=True, output_dir=out)
    summary = run(_write_inputs(tmp_path), options, GeneratorConfig(timestamp="fixed"))

    names = sorted(p.name for p in out.iterdir())
    assert len(names) == 15
    assert "fs-einfo-bakw-gen.h" in names
    assert "net-error-def-gen.h" in names
    assert [g.name for g in summary.groups] == ["fs", "io", "net"]
    assert summary.entries == 5
    io_group = summary.groups[1]
    assert (io_group.base, io_group.errmin, io_group.errmax) == (0o200, 0o200, 0o200)

    enum_text = (out / "net-error-enum-gen.h").read_text()
    assert "NET_TIMEOUT" in enum_text and "= 0x3e8," in enum_text
    assert "generated on fixed" in enum_text
    assert "from " + str(tmp_path / "b.dat") in enum_text


def test_only_selected_emitters_run(tmp_path: Path) -> None:
    out = tmp_path / "out"
    run(_write_inputs(tmp_path), RunOptions(defines=True, output_dir=out))
    assert sorted(p.name for p in out.iterdir()) == [
        "fs-error-def-gen.h",
        "io-error-def-gen.h",
        "net-error-def-gen.h",
    ]


def test_list_mode_numbers_across_files_and_suppresses_headers(tmp_path: Path) -> None:
    out = tmp_path / "out"
    listing = tmp_path / "codes.txt"
    options = RunOptions(enum=True, list_path=listing, output_dir=out)
    summary = run(_write_inputs(tmp_path), options)

    assert listing.read_text().splitlines() == [
        "fs_NOTFOUND = 1",
        "fs_EXISTS = 2",
        "io_EOF = 3",
        "net_TIMEOUT = 4",
        "net_RESET = 5",
    ]
    assert summary.listed == 5
    assert not out.exists()


def test_parse_error_aborts_before_later_files(tmp_path: Path) -> None:
    bad = tmp_path / "bad.dat"
    bad.write_text('x = 1 "unterminated" {\nA one\n')
    good = tmp_path / "good.dat"
    good.write_text(LAYER_B)
    out = tmp_path / "out"
    with pytest.raises(ParseError):
        run([bad, good], RunOptions(enum=True, output_dir=out))
    assert not (out / "net-error-enum-gen.h").exists()
    assert not (out / "x-error-enum-gen.h").exists()


def test_list_stream_closed_on_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.dat"
    bad.write_text("}\n")
    context = RunContext(RunOptions(list_path=tmp_path / "codes.txt"))
    with pytest.raises(ParseError):
        with context:
            context.process_file(bad)
    assert context.list_writer is not None
    assert context.list_writer.stream.closed


def test_unwritable_output_dir(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    inputs = _write_inputs(tmp_path)
    with pytest.raises(OutputError):
        run(inputs, RunOptions(enum=True, output_dir=blocker / "sub"))


class _FullDisk:
    closed = False

    def write(self, text: str) -> int:
        raise OSError(28, "No space left on device")


def test_list_write_failure_is_an_output_error(tmp_path: Path) -> None:
    inputs = _write_inputs(tmp_path)
    context = RunContext(RunOptions(list_path=tmp_path / "codes.txt"))
    with pytest.raises(OutputError) as info:
        with context:
            context.list_writer = ListWriter(_FullDisk())
            context.process_file(inputs[0])
    assert "No space left on device" in str(info.value)
