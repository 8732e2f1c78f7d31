"""structlog setup for covpaint.

Every log event goes through stdlib logging, so one LoggingConfig can fan out
to the console and to log files with separate levels and formats. Events
emitted while a file is being rendered carry a ``run_id`` plus whatever
context the render run bound (snapshot and source paths), so the lines of one
run can be picked out of a shared log file.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO
from uuid import uuid4

import structlog

from covpaint.core.progress import ConsoleSuppressingFilter

if TYPE_CHECKING:
    from covpaint.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str | None:
    """Correlation id of the render run in progress, if any."""
    return _run_id.get()


@contextmanager
def render_run(run_id: str | None = None, **context: Any) -> Iterator[str]:
    """Scope a render run: assign a run id and bind ``context`` to every event.

    Both are dropped again on exit, also when the run fails.

    Usage::

        with render_run(snapshot="cov/foo.json") as rid:
            render_table(printer, text)  # events carry run_id=rid, snapshot=...
    """
    token = _run_id.set(run_id or uuid4().hex[:12])
    try:
        with structlog.contextvars.bound_contextvars(**context):
            yield _run_id.get() or ""
    finally:
        _run_id.reset(token)


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_run_id():
        event_dict["run_id"] = rid
    return event_dict


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _open_stream(destination: str) -> TextIO | None:
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def _handler_for(output: LogOutputConfig) -> logging.Handler:
    """Stream handler for stderr/stdout, appending file handler otherwise."""
    stream = _open_stream(output.destination)
    if stream is not None:
        handler: logging.Handler = logging.StreamHandler(stream)
        # Rich progress bars own the terminal while they run
        handler.addFilter(ConsoleSuppressingFilter())
        return handler

    path = Path(output.destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _formatter_for(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        stream = _open_stream(output.destination)
        renderer = structlog.dev.ConsoleRenderer(
            colors=stream is not None and stream.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def configure_logging(config: LoggingConfig) -> None:
    """Route structlog through stdlib logging according to ``config``.

    Replaces any handlers installed by a previous call, so the CLI can
    reconfigure after applying --verbose.
    """
    root_level = _level(config.level)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_run_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _handler_for(output)
        handler.setLevel(_level(output.level or config.level))
        handler.setFormatter(_formatter_for(output, pre_chain))
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
