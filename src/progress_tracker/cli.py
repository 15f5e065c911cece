from __future__ import annotations
import logging
import os
import time
from dataclasses import replace
from pathlib import Path

import click
from jsonschema import ValidationError

from progress_tracker import __version__
from progress_tracker.core.errors import ProgressError
from progress_tracker.core.formatter import PRESETS
from progress_tracker.core.reporting import render_text
from progress_tracker.core.styles import StyleRegistry
from progress_tracker.log import setup_logging
from progress_tracker.tracker import ProgressBar

logger = logging.getLogger(__name__)


def _list_styles(search_dirs: list[str]) -> int:
    listed = StyleRegistry(search_dirs).list_styles()
    if not listed:
        click.echo("No styles found.")
        return 0

    click.echo("Available styles (first match wins):")
    for sid, ver, label, src in listed:
        click.echo(f"  {sid:25} {ver:10}  {label}   [from: {src}]")
    return 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    show_default=True,
    help="Read steps from this file (one line per step); '-' is stdin",
)
@click.option("--total", type=int, default=None, help="Total number of steps")
@click.option(
    "--preset",
    type=click.Choice(sorted(PRESETS)),
    default="regular",
    show_default=True,
    help="Built-in layout (ignored when --style is given)",
)
@click.option("--style", "style_id", default=None, help="Style id to load")
@click.option("--style-version", default=None, help="Specific style version")
@click.option(
    "--styles-dir",
    multiple=True,
    default=[],
    help="Directory with style JSON files (can be used multiple times). "
    "Overrides PROGRESS_STYLES_DIR and packaged styles.",
)
@click.option("--label", default=None, help="Text shown before the percentage")
@click.option("--width", type=click.IntRange(min=0), default=None, help="Bar width in cells")
@click.option("--ascii", "force_ascii", is_flag=True, help="Use ASCII glyphs only")
@click.option(
    "--demo",
    is_flag=True,
    help="Simulate --total steps instead of reading input",
)
@click.option(
    "--delay",
    type=float,
    default=0.05,
    show_default=True,
    help="Seconds per simulated step (with --demo)",
)
@click.option("--report", default=None, help="Write JSON run report to this path")
@click.option(
    "--print-json",
    is_flag=True,
    help="Print JSON run report to stdout (in addition to text summary)",
)
@click.option(
    "--list-styles",
    is_flag=True,
    help="List available styles and exit.",
)
@click.option("--debug", is_flag=True, help="Log diagnostics to stderr.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write log records to this file",
)
@click.version_option(__version__, prog_name="progress-track")
def main(
    input_file,
    total: int | None,
    preset: str,
    style_id: str | None,
    style_version: str | None,
    styles_dir: tuple[str, ...],
    label: str | None,
    width: int | None,
    force_ascii: bool,
    demo: bool,
    delay: float,
    report: str | None,
    print_json: bool,
    list_styles: bool,
    debug: bool,
    log_file: Path | None,
):
    """
    Draw a progress bar for a stream of work items.

    Every input line counts as one completed step.

    Examples:
      progress-track --list-styles
      ./encode_all.sh | progress-track --total 150 --preset advanced
      progress-track --demo --total 80 --style wide --label Encoding
    """
    setup_logging("DEBUG" if debug else "WARNING", log_file=log_file)

    if list_styles:
        raise SystemExit(_list_styles(list(styles_dir or [])))

    if total is None:
        raise click.UsageError("--total is required (unless you pass --list-styles)")

    registry = StyleRegistry(list(styles_dir or []))
    name = style_id or preset
    try:
        config = registry.load_config(name, version=style_version)
    except ValidationError as e:
        raise click.UsageError(f"Style '{name}' is invalid: {e.message}")
    except ProgressError as e:
        raise click.UsageError(str(e))

    if label is not None:
        config = replace(config, label=label)
    if width is not None:
        config = replace(config, bar_width=width)

    try:
        bar = ProgressBar(total, config, ascii=True if force_ascii else None)
    except ProgressError as e:
        raise click.BadParameter(str(e), param_hint="--total")

    try:
        with bar:
            if demo:
                for _ in range(total):
                    time.sleep(delay)
                    bar.update()
            else:
                for _ in input_file:
                    bar.update()
    except KeyboardInterrupt:
        logger.warning("interrupted at step %d/%d", bar.current_step, bar.total_steps)

    rep = bar.report(style=name, run_id=os.environ.get("RUN_ID"))

    click.echo(render_text(rep))
    if print_json:
        click.echo(rep.to_json())
    if report:
        rep.write_json(report)

    raise SystemExit(rep.exit_code())


if __name__ == "__main__":
    main()
