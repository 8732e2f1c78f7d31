"""covpaint - source code rows annotated with line and branch coverage."""

__version__ = "0.1.0"
