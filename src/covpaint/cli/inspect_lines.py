"""covpaint inspect command - show how individual lines would be painted."""

import json
from pathlib import Path
from typing import Any

import click

from covpaint.cli.utils import load_snapshot, to_click_exception
from covpaint.core.errors import CovPaintError
from covpaint.source.printer import UNDEFINED, LineCoveragePrinter


def describe_line(printer: LineCoveragePrinter, line: int) -> dict[str, Any]:
    """Collect everything the printer reports for one line."""
    painted = printer.is_painted(line)
    return {
        "line": line,
        "painted": painted,
        "modified": printer.is_modified(line),
        "covered": printer.get_covered(line),
        "missed": printer.get_missed(line),
        "css_class": printer.get_color_class(line) if painted else UNDEFINED,
        "tooltip": printer.get_tooltip(line) if painted else "",
        "summary": printer.get_summary_column(line) if painted else "",
    }


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("lines", nargs=-1, required=True, type=click.IntRange(min=1))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def inspect_command(snapshot: Path, lines: tuple[int, ...], as_json: bool) -> None:
    """Show class, tooltip and summary for LINES of the file in SNAPSHOT."""
    try:
        node = load_snapshot(snapshot)
    except CovPaintError as e:
        raise to_click_exception(e) from e

    printer = LineCoveragePrinter(node)
    rows = [describe_line(printer, line) for line in lines]

    if as_json:
        click.echo(json.dumps({"path": printer.path, "lines": rows}))
        return

    click.echo(f"{printer.path} ({printer.size()} lines with coverage)")
    for row in rows:
        if row["painted"]:
            click.echo(
                f"{row['line']:>6}  {row['summary']:>7}  {row['css_class']}: {row['tooltip']}"
            )
        else:
            click.echo(f"{row['line']:>6}  {'':>7}  {UNDEFINED}")
