"""covpaint render command - render a source file as coverage table rows."""

from functools import partial
from pathlib import Path

import click

from covpaint.cli.utils import load_snapshot, read_source, to_click_exception
from covpaint.config.models import CovPaintConfig
from covpaint.core.errors import CovPaintError
from covpaint.core.logging import render_run
from covpaint.core.progress import pluralize, progress, status
from covpaint.source.printer import LineCoveragePrinter
from covpaint.source.render import (
    count_painted,
    render_rows,
    render_table,
    split_source_lines,
)
from covpaint.source.sanitizer import SANITIZERS, get_sanitizer


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write HTML to this file instead of stdout",
)
@click.option(
    "--sanitizer",
    type=click.Choice(sorted(SANITIZERS)),
    help="Sanitizer for code cells (default from config: render.sanitizer)",
)
@click.option("--rows-only", is_flag=True, help="Emit bare <tr> rows without the <table>")
@click.pass_context
def render_command(
    ctx: click.Context,
    snapshot: Path,
    source: Path,
    output: Path | None,
    sanitizer: str | None,
    rows_only: bool,
) -> None:
    """Render SOURCE as HTML rows annotated with the coverage in SNAPSHOT.

    SNAPSHOT is a JSON document with "path", "lines", "covered", "missed"
    and optionally "modified".
    """
    config: CovPaintConfig = ctx.obj["config"]

    with render_run(snapshot=str(snapshot), source=str(source)):
        try:
            node = load_snapshot(snapshot)
            text = read_source(source, config.render.source_encoding)
            printer = LineCoveragePrinter(
                node, sanitizer=get_sanitizer(sanitizer or config.render.sanitizer)
            )
        except CovPaintError as e:
            raise to_click_exception(e) from e

        with_progress = partial(progress, desc="Rendering", unit="lines")

        if rows_only:
            html = "\n".join(render_rows(printer, text, progress=with_progress))
        else:
            html = render_table(printer, text, progress=with_progress)

        if output is None:
            click.echo(html)
        else:
            output.write_text(html + "\n", encoding="utf-8")

        line_count = len(split_source_lines(text))
        painted = count_painted(printer, line_count)
        status(
            f"Rendered {node.relative_path}: {pluralize(line_count, 'line')}, {painted} painted",
            style="success",
        )