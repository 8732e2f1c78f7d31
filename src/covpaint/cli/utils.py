"""CLI utilities."""

import json
from pathlib import Path

import click

from covpaint.core.errors import CovPaintError, SnapshotError, SourceError
from covpaint.source.model import FileNode


def load_snapshot(path: Path) -> FileNode:
    """Load a per-file coverage snapshot from its JSON document.

    Raises:
        SnapshotError: If the file can't be read, isn't JSON or is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError.parse_error(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise SnapshotError.parse_error(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError.parse_error(str(path), "top-level value must be an object")
    return FileNode.from_dict(data)


def read_source(path: Path, encoding: str) -> str:
    """Read the full text of a source file.

    Raises:
        SourceError: On I/O or decoding failures.
    """
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError.read_error(str(path), str(e)) from e


def to_click_exception(error: CovPaintError) -> click.ClickException:
    """Wrap a covpaint error for display, keeping the message only."""
    return click.ClickException(error.message)
