"""Core module exports."""

from covpaint.core.errors import (
    ConfigError,
    CovPaintError,
    ErrorCode,
    SnapshotError,
    SourceError,
)
from covpaint.core.logging import (
    configure_logging,
    get_logger,
    get_run_id,
    render_run,
)
from covpaint.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "CovPaintError",
    "ConfigError",
    "ErrorCode",
    "SnapshotError",
    "SourceError",
    # Logging
    "configure_logging",
    "get_logger",
    "get_run_id",
    "render_run",
    # Progress
    "pluralize",
    "progress",
    "status",
]
