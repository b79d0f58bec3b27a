"""
Code rendering with an optional syntax highlighter.

A highlighter is any object exposing ``supports(language)`` and
``render(code, language)``. When none is injected, or it does not support
the requested language, code is rendered as escaped plain text.
"""
from __future__ import annotations

import html
import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Highlighter(Protocol):
    def supports(self, language: str) -> bool: ...

    def render(self, code: str, language: str) -> str: ...


def escape_code(code: str) -> str:
    return html.escape(code, quote=False)


def render_code(code: str, language: str, highlighter: Optional[Highlighter] = None) -> str:
    """Return HTML markup for ``code``; never raises on highlighter gaps."""
    if highlighter is not None and highlighter.supports(language):
        return highlighter.render(code, language)
    if highlighter is not None:
        logger.debug("Highlighter does not support %r; using plain text", language)
    return escape_code(code)
