"""
API Routes: /health, /schema/default and /compile endpoints.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nl2sql_compiler.api.dependencies import get_session
from nl2sql_compiler.api.schemas import (
    CompilationResult,
    CompileRequest,
    DefaultSchemaResponse,
    ErrorResponse,
    HealthResponse,
)
from nl2sql_compiler.core.config import get_settings
from nl2sql_compiler.core.constants import DEFAULT_SCHEMA
from nl2sql_compiler.services.compiler_service import CompilerSession, CompileState

logger = logging.getLogger(__name__)

router = APIRouter()

APP_VERSION = "1.0.0"


# ── /health ───────────────────────────────────────────────────────────────────

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    tags=["Monitoring"],
)
def health_check() -> HealthResponse:
    """
    Returns the operational status of the API and the configured model.
    """
    return HealthResponse(
        status="ok",
        model=get_settings().GEMINI_MODEL,
        version=APP_VERSION,
    )


# ── /schema/default ───────────────────────────────────────────────────────────

@router.get(
    "/schema/default",
    response_model=DefaultSchemaResponse,
    summary="Default example schema",
    tags=["Compiler"],
)
def default_schema() -> DefaultSchemaResponse:
    return DefaultSchemaResponse(schema_text=DEFAULT_SCHEMA)


# ── /compile ──────────────────────────────────────────────────────────────────

@router.post(
    "/compile",
    response_model=CompilationResult,
    summary="Compile a natural language query to SQL",
    tags=["Compiler"],
    responses={
        409: {"model": ErrorResponse, "description": "A compile is already in flight"},
        422: {"description": "Validation error (empty query or schema)"},
        502: {"model": ErrorResponse, "description": "Compilation service failure"},
    },
)
async def compile_endpoint(
    request: CompileRequest,
    session: CompilerSession = Depends(get_session),
) -> CompilationResult:
    """
    Sends the query and schema to the compilation service and returns the
    six compilation stages.
    """
    accepted = await session.compile(query=request.query, schema=request.schema_text)
    if not accepted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A compilation is already in progress.",
        )

    if session.state is CompileState.FAILED or session.result is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=session.error,
        )
    return session.result
