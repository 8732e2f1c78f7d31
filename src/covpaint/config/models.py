"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVPAINT__SECTION__KEY)
3. Repo YAML (.covpaint.yaml)
4. Global YAML (~/.config/covpaint/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVPAINT__<SECTION>__<KEY>=<VALUE>

Examples:
    COVPAINT__LOGGING__LEVEL=DEBUG
    COVPAINT__RENDER__SANITIZER=passthrough
    COVPAINT__RENDER__SOURCE_ENCODING=latin-1
"""

import codecs
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
SanitizerName = Literal["escape", "passthrough"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVPAINT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per rendered file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RenderConfig(BaseModel):
    """Source rendering configuration.

    Env vars:
        COVPAINT__RENDER__SANITIZER: Sanitizer for the code cell (escape, passthrough)
        COVPAINT__RENDER__SOURCE_ENCODING: Encoding used to read source files
    """

    sanitizer: SanitizerName = Field(
        default="escape",
        description="Sanitizer applied to each code cell. 'passthrough' embeds source "
        "text verbatim and is only safe for trusted input.",
    )
    source_encoding: str = Field(
        default="utf-8",
        description="Text encoding of the rendered source files.",
    )

    @field_validator("source_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v


class CovPaintConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
