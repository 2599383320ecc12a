from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from errgen.config import GeneratorConfig, load_config
from errgen.errors import ErrgenError, UsageError
from errgen.pipeline import RunOptions, run
from errgen.report import summary_table, write_report

app = typer.Typer(
    help="Generate C/C++ error tables (messages, info tables, enums, #defines) from definitions.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def generate(
    files: list[Path] = typer.Argument(..., help="Error definition files, processed in order."),
    errmsg: bool = typer.Option(
        False, "--errmsg/--no-errmsg", "-m", help="Generate <name>-errmsg-gen message arrays."
    ),
    einfo: bool = typer.Option(
        False,
        "--einfo/--no-einfo",
        "-p",
        help="Generate <name>-einfo-gen and <name>-einfo-bakw-gen info tables.",
    ),
    enum: bool = typer.Option(
        False, "--enum/--no-enum", "-e", help="Generate <name>-error-enum-gen enumerations."
    ),
    defines: bool = typer.Option(
        False, "--defines/--no-defines", "-d", help="Generate <name>-error-def-gen #defines."
    ),
    list_path: Path | None = typer.Option(
        None,
        "-list",
        "--list",
        help="Write a flat list of error codes to this file instead of other outputs.",
    ),
    output_dir: Path = typer.Option(
        Path("."), "--output-dir", "-o", help="Directory for generated headers."
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML or JSON generator config."
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Optional path to write a JSON run summary."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report errors."),
) -> None:
    """Generate error headers (or a code list) from one or more definition files."""
    options = RunOptions(
        errmsg=errmsg,
        einfo=einfo,
        enum=enum,
        defines=defines,
        list_path=list_path,
        output_dir=output_dir,
    )

    def _wrote(path: Path) -> None:
        if not quiet:
            console.print(f"[bold green]Wrote[/] {escape(str(path))}")

    try:
        options.validate()
        cfg = load_config(config) if config else GeneratorConfig()
        summary = run(files, options, cfg, on_write=_wrote)
    except UsageError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except ErrgenError as exc:
        err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if summary.list_path and not quiet:
        console.print(
            f"[bold green]Wrote list[/] of {summary.listed} codes to {escape(summary.list_path)}"
        )
    if report:
        write_report(report, summary)
        if not quiet:
            console.print(f"[bold green]Wrote run report[/] to {escape(str(report))}")
    if not quiet:
        console.print(summary_table(summary))


if __name__ == "__main__":
    app()
