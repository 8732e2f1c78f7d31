"""Coverage-annotated source rendering.

Usage:
    from covpaint.source import FileNode, LineCoveragePrinter

    node = FileNode.from_line_counters("src/foo.py", {3: (1, 0), 7: (2, 3)}, modified=[7])
    printer = LineCoveragePrinter(node)
    printer.get_tooltip(7)  # "Modified, partially covered, branch coverage: 2/5"
    printer.render_line(7, "    if x:")
"""

from covpaint.source.model import FileNode, SourceFileModel
from covpaint.source.printer import LineCoveragePrinter
from covpaint.source.render import (
    count_painted,
    render_rows,
    render_table,
    split_source_lines,
)
from covpaint.source.sanitizer import (
    EscapingSanitizer,
    PassthroughSanitizer,
    Sanitizer,
    get_sanitizer,
)

__all__ = [
    # Model
    "FileNode",
    "SourceFileModel",
    # Printer
    "LineCoveragePrinter",
    # Render
    "count_painted",
    "render_rows",
    "render_table",
    "split_source_lines",
    # Sanitizers
    "EscapingSanitizer",
    "PassthroughSanitizer",
    "Sanitizer",
    "get_sanitizer",
]
