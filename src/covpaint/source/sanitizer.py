"""Sanitizers for the code cell of a rendered source row.

The printer treats sanitization as an injected capability: anything with a
``render(text) -> str`` method. Its input is already whitespace-normalized,
i.e. spaces and tabs have become ``&nbsp;`` entities, so the default
sanitizer escapes markup but leaves well-formed entity references alone.
"""

import re
from typing import Protocol

from markupsafe import escape

from covpaint.core.errors import ConfigError

# Named (&nbsp;), decimal (&#160;) and hex (&#xA0;) character references
_ENTITY_RE = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);")


class Sanitizer(Protocol):
    """Turns normalized source text into markup safe to embed verbatim."""

    def render(self, html: str) -> str: ...


class EscapingSanitizer:
    """Escape everything except character entity references."""

    def render(self, html: str) -> str:
        parts: list[str] = []
        pos = 0
        for match in _ENTITY_RE.finditer(html):
            parts.append(str(escape(html[pos : match.start()])))
            parts.append(match.group(0))
            pos = match.end()
        parts.append(str(escape(html[pos:])))
        return "".join(parts)


class PassthroughSanitizer:
    """Return input unchanged. Only for trusted sources and tests."""

    def render(self, html: str) -> str:
        return html


SANITIZERS: dict[str, type[Sanitizer]] = {
    "escape": EscapingSanitizer,
    "passthrough": PassthroughSanitizer,
}


def get_sanitizer(name: str) -> Sanitizer:
    """Resolve a sanitizer by its config name.

    Raises:
        ConfigError: If the name is unknown.
    """
    sanitizer_cls = SANITIZERS.get(name)
    if sanitizer_cls is None:
        valid = ", ".join(sorted(SANITIZERS))
        raise ConfigError.invalid_value("render.sanitizer", name, f"must be one of: {valid}")
    return sanitizer_cls()
