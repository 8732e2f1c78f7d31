"""Line-level coverage rendering of a single source file.

A ``LineCoveragePrinter`` is built once per file from its coverage snapshot
and answers per-line queries: CSS class, tooltip, summary column and the
complete ``<tr>`` row. Coverage data is sparse, so lookups binary-search the
ascending line list instead of indexing a dense per-line array. A file with
tens of thousands of lines and a few hundred covered ones costs only the
covered ones.

All state is immutable after construction; one printer can serve any number
of concurrent renderers.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

from markupsafe import Markup

from covpaint.source.model import SourceFileModel
from covpaint.source.sanitizer import EscapingSanitizer, Sanitizer

SANITIZER: Sanitizer = EscapingSanitizer()

UNDEFINED = "noCover"
MODIFIED = "modified"
NO_COVERAGE = "coverNone"
FULL_COVERAGE = "coverFull"
PARTIAL_COVERAGE = "coverPart"
NBSP = "&nbsp;"
TAB_WIDTH = 8

_PAINTED_ROW = Markup(
    '<tr class="{css}" data-html-tooltip="{tooltip}">'
    '<td class="line"><a name="{line}">{line}</a></td>'
    '<td class="hits">{summary}</td>'
    '<td class="code">{code}</td>'
    "</tr>"
)
_UNPAINTED_ROW = Markup(
    '<tr class="{css}">'
    '<td class="line"><a name="{line}">{line}</a></td>'
    '<td class="hits"></td>'
    '<td class="code">{code}</td>'
    "</tr>"
)


class LineCoveragePrinter:
    """Renders the source lines of one file together with line and branch coverage."""

    __slots__ = (
        "_path",
        "_lines_to_paint",
        "_covered_per_line",
        "_missed_per_line",
        "_modified_lines",
        "_sanitizer",
    )

    def __init__(self, file: SourceFileModel, *, sanitizer: Sanitizer | None = None) -> None:
        self._path = file.relative_path
        self._lines_to_paint = tuple(file.lines_with_coverage)
        self._covered_per_line = tuple(file.covered_counters)
        self._missed_per_line = tuple(file.missed_counters)
        self._modified_lines = frozenset(file.modified_lines)
        self._sanitizer = sanitizer if sanitizer is not None else SANITIZER

    @property
    def path(self) -> str:
        return self._path

    def size(self) -> int:
        """Number of lines that carry coverage data."""
        return len(self._lines_to_paint)

    def __len__(self) -> int:
        return self.size()

    def render_line(self, line: int, source_code: str) -> str:
        """Render one source line as an HTML table row.

        Args:
            line: 1-based line number.
            source_code: Raw text of that line.

        Returns:
            A ``<tr>`` fragment with a line anchor cell, the summary cell and
            the sanitized code cell. Painted rows carry their coverage classes
            and a ``data-html-tooltip`` attribute; other rows get ``noCover``.
        """
        code = Markup(self._sanitizer.render(self.cleanup_code(source_code)))  # nosec
        if self.is_painted(line):
            row = _PAINTED_ROW.format(
                css=self.get_color_class(line),
                tooltip=self.get_tooltip(line),
                line=line,
                summary=self.get_summary_column(line),
                code=code,
            )
        else:
            row = _UNPAINTED_ROW.format(css=UNDEFINED, line=line, code=code)
        return str(row)

    def cleanup_code(self, content: str) -> str:
        """Drop line breaks and turn spaces and tabs into ``&nbsp;`` entities.

        Tabs always become TAB_WIDTH entities, regardless of column.
        """
        return (
            content.replace("\n", "")
            .replace("\r", "")
            .replace(" ", NBSP)
            .replace("\t", NBSP * TAB_WIDTH)
        )

    def get_modified_color_class(self, line: int) -> str:
        return MODIFIED if self.is_modified(line) else ""

    def get_color_class(self, line: int) -> str:
        """CSS classes of a line: the modified marker first, then the coverage class."""
        if self.get_covered(line) == 0:
            coverage_class = NO_COVERAGE
        elif self.get_missed(line) == 0:
            coverage_class = FULL_COVERAGE
        elif self.find_index_of_line(line) >= 0:
            coverage_class = PARTIAL_COVERAGE
        else:
            coverage_class = ""

        return " ".join(c for c in (self.get_modified_color_class(line), coverage_class) if c)

    def get_tooltip_prefix(self, line: int) -> str:
        return "Modified" if self.is_modified(line) else ""

    def get_tooltip(self, line: int) -> str:
        covered = self.get_covered(line)
        missed = self.get_missed(line)
        if covered + missed > 1:
            if missed == 0:
                suffix = "All branches covered"
            elif covered == 0:
                suffix = "No branches covered"
            else:
                suffix = f"Partially covered, branch coverage: {covered}/{covered + missed}"
        elif covered == 1:
            suffix = "Covered at least once"
        else:
            suffix = "Not covered"

        prefix = self.get_tooltip_prefix(line)
        if not prefix:
            return suffix
        return f"{prefix}, {suffix[:1].lower()}{suffix[1:]}"

    def get_summary_column(self, line: int) -> str:
        covered = self.get_covered(line)
        missed = self.get_missed(line)
        if covered + missed > 1:
            return f"{covered}/{covered + missed}"
        return str(covered)

    def is_painted(self, line: int) -> bool:
        """Whether the line has coverage data or is modified."""
        return self.find_index_of_line(line) >= 0 or self.is_modified(line)

    def is_modified(self, line: int) -> bool:
        return line in self._modified_lines

    def find_index_of_line(self, line: int) -> int:
        """Index of ``line`` in the covered line list.

        Returns ``-(insertion_point + 1)`` when the line is absent, so the
        result is negative exactly for lines without coverage data.
        """
        index = bisect_left(self._lines_to_paint, line)
        if index < len(self._lines_to_paint) and self._lines_to_paint[index] == line:
            return index
        return -(index + 1)

    def get_covered(self, line: int) -> int:
        return self.get_counter(line, self._covered_per_line)

    def get_missed(self, line: int) -> int:
        return self.get_counter(line, self._missed_per_line)

    def get_counter(self, line: int, counters: Sequence[int]) -> int:
        index = self.find_index_of_line(line)
        if index >= 0:
            return counters[index]
        return 0

    def get_column_header(self) -> str:
        return ""
