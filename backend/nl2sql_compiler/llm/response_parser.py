"""
Response Parser: validates the raw text returned by the compilation service.

Only ``generatedSql`` and ``optimizedSql`` are checked strictly; the other
stages are read tolerantly and default to empty values.
"""
from __future__ import annotations

import json
import re
from typing import Any

from nl2sql_compiler.api.schemas import CompilationResult
from nl2sql_compiler.core.errors import FORMAT_FAILURE_MESSAGE, CompilationError


class ResponseFormatError(CompilationError):
    """Raised when the reply could not be parsed as JSON."""

    user_message = FORMAT_FAILURE_MESSAGE


class ResponseShapeError(CompilationError):
    """Raised when the reply did not match the expected structure."""


_LEADING_FENCE = re.compile(r"^```json\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")

_REQUIRED_SQL_FIELDS = ("generatedSql", "optimizedSql")


def strip_code_fence(raw_text: str) -> str:
    """Remove an optional ```json ... ``` wrapper around the reply."""
    text = raw_text.strip()
    text = _LEADING_FENCE.sub("", text)
    return _TRAILING_FENCE.sub("", text)


def parse_compilation_response(raw_text: str) -> CompilationResult:
    """
    Parse the service reply into a ``CompilationResult``.

    Raises
    ------
    ResponseFormatError
        The (de-fenced) text is not valid JSON.
    ResponseShapeError
        The JSON is not an object with string ``generatedSql`` and
        ``optimizedSql`` fields.
    """
    try:
        data = json.loads(strip_code_fence(raw_text))
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Reply is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ResponseShapeError(f"Expected a JSON object, got {type(data).__name__}.")

    for name in _REQUIRED_SQL_FIELDS:
        if not isinstance(data.get(name), str):
            raise ResponseShapeError(f"Field {name!r} is missing or not a string.")

    return CompilationResult(
        lexical_tokens=_tokens(data.get("lexicalAnalysis")),
        syntax_tree=_nested_text(data.get("syntaxAnalysis"), "tree"),
        semantic_analysis=_nested_text(data.get("semanticAnalysis"), "analysis"),
        generated_sql=data["generatedSql"],
        optimized_sql=data["optimizedSql"],
        explanation=_text(data.get("explanation")),
    )


# ── Internal helpers ──────────────────────────────────────────────────────────

def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _nested_text(section: Any, key: str) -> str:
    if isinstance(section, dict):
        return _text(section.get(key))
    return _text(section)


def _tokens(section: Any) -> list[str]:
    tokens = section.get("tokens") if isinstance(section, dict) else section
    if not isinstance(tokens, list):
        return []
    return [t if isinstance(t, str) else json.dumps(t) for t in tokens]
