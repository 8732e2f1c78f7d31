"""Per-file coverage snapshot consumed by the source printer.

The snapshot is sparse: only lines carrying coverage data are listed, in
ascending order, with two counter sequences aligned to them by index. Lines
flagged as modified against a baseline are kept as a separate set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Any, Protocol

from covpaint.core.errors import SnapshotError

_REQUIRED_KEYS = ("path", "lines", "covered", "missed")


class SourceFileModel(Protocol):
    """Read-only view of a file's coverage, as produced upstream.

    Contract: ``lines_with_coverage`` is strictly ascending and both counter
    sequences have the same length as it.
    """

    @property
    def relative_path(self) -> str: ...

    @property
    def lines_with_coverage(self) -> Sequence[int]: ...

    @property
    def covered_counters(self) -> Sequence[int]: ...

    @property
    def missed_counters(self) -> Sequence[int]: ...

    @property
    def modified_lines(self) -> Set[int]: ...


@dataclass(frozen=True, slots=True)
class FileNode:
    """Immutable coverage snapshot of a single source file."""

    relative_path: str
    lines_with_coverage: tuple[int, ...] = ()
    covered_counters: tuple[int, ...] = ()
    missed_counters: tuple[int, ...] = ()
    modified_lines: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def from_line_counters(
        cls,
        path: str,
        counters: Mapping[int, tuple[int, int]],
        modified: Iterable[int] = (),
    ) -> FileNode:
        """Build a node from a ``{line: (covered, missed)}`` mapping."""
        lines = tuple(sorted(counters))
        return cls(
            relative_path=path,
            lines_with_coverage=lines,
            covered_counters=tuple(counters[line][0] for line in lines),
            missed_counters=tuple(counters[line][1] for line in lines),
            modified_lines=frozenset(modified),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileNode:
        """Build a node from its JSON document.

        Document shape::

            {"path": "src/foo.py", "lines": [3, 4, 9], "covered": [1, 2, 0],
             "missed": [0, 1, 1], "modified": [4, 12]}

        Raises:
            SnapshotError: If keys are missing, sequences are misaligned or
                line numbers are not strictly ascending.
        """
        missing = [key for key in _REQUIRED_KEYS if key not in data]
        if missing:
            raise SnapshotError.invalid(f"missing keys: {', '.join(missing)}", missing=missing)

        try:
            lines = tuple(int(n) for n in data["lines"])
            covered = tuple(int(n) for n in data["covered"])
            missed = tuple(int(n) for n in data["missed"])
            modified = frozenset(int(n) for n in data.get("modified", ()))
        except (TypeError, ValueError) as e:
            raise SnapshotError.invalid(f"non-integer entry: {e}") from e

        if not (len(lines) == len(covered) == len(missed)):
            raise SnapshotError.invalid(
                "counter arrays must match the line list",
                lines=len(lines),
                covered=len(covered),
                missed=len(missed),
            )
        if any(a >= b for a, b in zip(lines, lines[1:], strict=False)):
            raise SnapshotError.invalid("line numbers must be strictly ascending")
        if any(n < 0 for n in covered + missed):
            raise SnapshotError.invalid("counters must be non-negative")

        return cls(
            relative_path=str(data["path"]),
            lines_with_coverage=lines,
            covered_counters=covered,
            missed_counters=missed,
            modified_lines=modified,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON document accepted by from_dict()."""
        return {
            "path": self.relative_path,
            "lines": list(self.lines_with_coverage),
            "covered": list(self.covered_counters),
            "missed": list(self.missed_counters),
            "modified": sorted(self.modified_lines),
        }

    @property
    def lines_found(self) -> int:
        """Number of lines carrying coverage data."""
        return len(self.lines_with_coverage)

    @property
    def total_covered(self) -> int:
        return sum(self.covered_counters)

    @property
    def total_missed(self) -> int:
        return sum(self.missed_counters)
