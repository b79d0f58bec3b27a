"""
Exception hierarchy shared by the compilation pipeline.

Every failure of a single compile attempt derives from ``CompilationError`` and
carries the message shown to the user. The concrete subclasses live next to
the code that raises them (``llm.client`` and ``llm.response_parser``).
"""
from __future__ import annotations

TRANSPORT_FAILURE_MESSAGE = (
    "Failed to compile the query. The AI model could not process the request."
)
FORMAT_FAILURE_MESSAGE = (
    "Failed to parse the AI's response. The format was unexpected."
)


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""


class CompilationError(Exception):
    """Base class for failures of one compile attempt."""

    user_message: str = TRANSPORT_FAILURE_MESSAGE
