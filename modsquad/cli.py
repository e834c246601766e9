"""CLI entry point using Click."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modsquad import __version__
from modsquad.models.config import Config, ConvertConfig
from modsquad.models.plan import TargetFormat
from modsquad.utils.errors import ConfigError, ModsquadError, ToolNotFoundError
from modsquad.utils.logging import setup_logging


console = Console()


def check_tools(target_format: TargetFormat, config: Config) -> None:
    """Fail if a tool needed for the target format is not on PATH."""
    from modsquad.converter.tools import find_missing_tools

    missing = find_missing_tools(target_format, config)
    if missing:
        raise ToolNotFoundError(missing)


def prepare_output_root(output_root: Path) -> None:
    try:
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Failed to create output directory: {e}") from e


@click.command()
@click.version_option(version=__version__)
@click.argument(
    "inputs",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--out",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
    help="Output directory",
)
@click.option(
    "--format",
    "-f",
    "target_format",
    type=click.Choice([f.value for f in TargetFormat]),
    default=TargetFormat.MP3.value,
    show_default=True,
    help="Output format",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Recurse into directories",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: MODSQUAD_LOG_LEVEL or INFO)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the log to this file",
)
@click.option(
    "--jsonl",
    is_flag=True,
    help="Write the log file as JSON Lines",
)
def main(
    inputs: tuple[Path, ...],
    out: Path,
    target_format: str,
    recursive: bool,
    log_level: str | None,
    log_file: Path | None,
    jsonl: bool,
):
    """
    modsquad - batch export tracker modules to audio files.

    Each INPUT module is rendered with xmp and, for flac or mp3, encoded
    with flac or lame. Existing outputs are left alone, so an interrupted
    batch can simply be run again.
    """
    try:
        global_config = Config()
    except ValidationError as e:
        console.print(f"[red]Error: invalid MODSQUAD_ settings[/red]\n{escape(str(e))}")
        sys.exit(1)

    setup_logging(
        level=log_level or global_config.log_level,
        log_file=log_file,
        jsonl=jsonl or global_config.jsonl_log,
    )

    config = ConvertConfig(
        output_root=out,
        target_format=TargetFormat(target_format),
        recursive=recursive,
    )

    try:
        check_tools(config.target_format, global_config)
        prepare_output_root(config.output_root)
    except ModsquadError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    from modsquad.converter.interrupt import interrupt_guard
    from modsquad.converter.pipeline import ConversionPipeline, JobErrorEvent, JobStartedEvent
    from modsquad.scanner.walker import iter_jobs

    interrupt_guard.install()

    failures: list[tuple[Path, str]] = []

    def on_event(event):
        if isinstance(event, JobStartedEvent) and event.job:
            console.print(
                f"[blue]{pipeline.stats.total_jobs}.[/blue] {escape(str(event.job.input_path))}",
                soft_wrap=True,
            )
        elif isinstance(event, JobErrorEvent) and event.job:
            failures.append((event.job.input_path, event.error))

    pipeline = ConversionPipeline(
        config=config,
        global_config=global_config,
        guard=interrupt_guard,
        event_callback=on_event,
    )
    pipeline.run(iter_jobs(inputs, recursive=config.recursive))

    stats = pipeline.stats
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Converted", str(stats.converted_jobs), style="green")
    table.add_row("Skipped", str(stats.skipped_jobs), style="yellow")
    table.add_row("Failed", str(stats.failed_jobs), style="red" if stats.failed_jobs else "")
    if stats.started_at and stats.completed_at:
        elapsed = (stats.completed_at - stats.started_at).total_seconds()
        table.add_row("Elapsed", f"{elapsed:.1f}s")

    console.print("\n[green]Complete![/green]")
    console.print(table)

    for input_path, error in failures:
        console.print(
            f"[red]failed:[/red] {escape(str(input_path))} ({escape(error)})",
            soft_wrap=True,
        )


if __name__ == "__main__":
    main()
