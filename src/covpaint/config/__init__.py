"""Config module exports."""

from covpaint.config.loader import load_config
from covpaint.config.models import (
    CovPaintConfig,
    LoggingConfig,
    LogOutputConfig,
    RenderConfig,
)

__all__ = [
    "load_config",
    "CovPaintConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "RenderConfig",
]
