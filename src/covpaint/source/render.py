"""Whole-file row rendering on top of LineCoveragePrinter."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog
from markupsafe import Markup

from covpaint.source.printer import LineCoveragePrinter

logger = structlog.get_logger()

ProgressWrapper = Callable[[Iterable[tuple[int, str]]], Iterable[tuple[int, str]]]

_TABLE = Markup(
    '<table class="source">'
    '<thead><tr><th class="line">#</th><th class="hits">{header}</th>'
    '<th class="code">Source</th></tr></thead>'
    "<tbody>{rows}</tbody>"
    "</table>"
)


def split_source_lines(source: str) -> list[str]:
    r"""Split file text into lines the way coverage tools number them.

    Only ``\n`` ends a line. Other separators known to ``str.splitlines()``
    (form feed, vertical tab, U+2028 ...) stay inside the line, and the ``\r``
    of a CRLF ending is left for LineCoveragePrinter.cleanup_code to drop.
    A trailing newline does not open an extra empty line.
    """
    if not source:
        return []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def render_rows(
    printer: LineCoveragePrinter,
    source: str,
    *,
    progress: ProgressWrapper | None = None,
) -> list[str]:
    """Render every line of ``source`` as a ``<tr>`` row.

    Lines are numbered from 1 in split_source_lines() order.

    Args:
        printer: Printer built from the file's coverage snapshot.
        source: Full text of the file.
        progress: Optional wrapper around the (line, text) iterator, e.g.
            covpaint.core.progress.progress.
    """
    numbered = list(enumerate(split_source_lines(source), start=1))
    line_count = len(numbered)
    lines: Iterable[tuple[int, str]] = progress(numbered) if progress else numbered

    rows = [printer.render_line(line, text) for line, text in lines]

    logger.debug(
        "file_rendered",
        path=printer.path,
        lines=line_count,
        painted=count_painted(printer, line_count),
        covered_lines=printer.size(),
    )
    return rows


def render_table(
    printer: LineCoveragePrinter,
    source: str,
    *,
    progress: ProgressWrapper | None = None,
) -> str:
    """Render ``source`` as a bare ``<table>`` of coverage rows."""
    rows = render_rows(printer, source, progress=progress)
    return str(
        _TABLE.format(
            header=printer.get_column_header(),
            rows=Markup("\n".join(rows)),  # nosec
        )
    )


def count_painted(printer: LineCoveragePrinter, line_count: int) -> int:
    """Number of lines in ``1..line_count`` carrying coverage or a modified marker."""
    return sum(1 for line in range(1, line_count + 1) if printer.is_painted(line))
