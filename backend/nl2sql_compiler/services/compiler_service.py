"""
Compiler Service: orchestrates the NL→SQL compilation round trip.

Flow
----
1. Build the prompt from the query and schema.
2. Call the external compilation service once.
3. Validate and parse the reply into a ``CompilationResult``.

``CompilerSession`` holds the UI-side state around that flow: the user's
inputs, the last result or error, and the single in-flight request guard.
"""
from __future__ import annotations

import enum
import logging
from typing import Optional, Protocol

from starlette.concurrency import run_in_threadpool

from nl2sql_compiler.api.schemas import CompilationResult
from nl2sql_compiler.core.constants import DEFAULT_SCHEMA
from nl2sql_compiler.core.errors import TRANSPORT_FAILURE_MESSAGE, CompilationError
from nl2sql_compiler.llm.prompt_builder import CompilationPrompt, build_prompt
from nl2sql_compiler.llm.response_parser import parse_compilation_response

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    def generate(self, prompt: CompilationPrompt) -> str: ...


# ── Single compile ────────────────────────────────────────────────────────────

def compile_query(query: str, schema: str, client: CompletionClient) -> CompilationResult:
    """
    Compile one natural-language query against ``schema``.

    Raises ``CompilationError`` subclasses on transport, format or shape
    failures. Callers are expected to have rejected empty inputs already.
    """
    prompt = build_prompt(query, schema)
    logger.info(
        "Compiling query (%d chars) against schema (%d chars)",
        len(query),
        len(schema),
    )

    raw = client.generate(prompt)
    logger.debug("Raw service reply: %s", raw)

    result = parse_compilation_response(raw)
    logger.info("Compilation succeeded (%d tokens)", len(result.lexical_tokens))
    return result


# ── Session state ─────────────────────────────────────────────────────────────

class CompileState(str, enum.Enum):
    """
    IDLE is the state before the first attempt. SUCCESS and FAILED are the
    resting states after an attempt and accept a new compile just like IDLE;
    only REQUESTING blocks one.
    """

    IDLE = "IDLE"
    REQUESTING = "REQUESTING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class CompilerSession:
    """
    In-memory state for one user of the compiler page.

    At most one compile is outstanding at a time; a compile issued while
    another is pending is ignored. Result and error are never set together.
    """

    def __init__(self, client: CompletionClient, schema: str = DEFAULT_SCHEMA) -> None:
        self._client = client
        self.query = ""
        self.schema = schema
        self.state = CompileState.IDLE
        self.result: Optional[CompilationResult] = None
        self.error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.state is CompileState.REQUESTING

    @property
    def can_compile(self) -> bool:
        return not self.is_loading and bool(self.query.strip()) and bool(self.schema.strip())

    async def compile(self, query: Optional[str] = None, schema: Optional[str] = None) -> bool:
        """
        Run one compile attempt. Returns False when nothing was sent.
        """
        if self.is_loading:
            logger.info("Compile ignored: a request is already in flight")
            return False

        if query is not None:
            self.query = query
        if schema is not None:
            self.schema = schema

        if not self.can_compile:
            logger.debug("Compile skipped: query or schema is empty")
            return False

        self.state = CompileState.REQUESTING
        self.result = None
        self.error = None

        try:
            result = await run_in_threadpool(compile_query, self.query, self.schema, self._client)
        except CompilationError as exc:
            logger.warning("Compilation failed (%s): %s", type(exc).__name__, exc)
            self._fail(exc.user_message)
        except Exception as exc:
            logger.exception("Unexpected error during compilation: %s", exc)
            self._fail(TRANSPORT_FAILURE_MESSAGE)
        else:
            self.result = result
            self.state = CompileState.SUCCESS
        return True

    def _fail(self, message: str) -> None:
        self.result = None
        self.error = message
        self.state = CompileState.FAILED
