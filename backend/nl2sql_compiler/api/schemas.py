"""
Pydantic schemas for API request/response validation.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ── Request ───────────────────────────────────────────────────────────────────

class CompileRequest(BaseModel):
    query: str = Field(
        ...,
        min_length=1,
        pattern=r"\S",
        description="Natural language question to compile into SQL.",
        examples=["List all employees hired after 2022-01-01."],
    )
    # "schema" shadows a BaseModel attribute, hence the alias
    schema_text: str = Field(
        ...,
        alias="schema",
        min_length=1,
        pattern=r"\S",
        description="Free-text SQL schema the query is compiled against.",
    )

    model_config = ConfigDict(populate_by_name=True)


# ── Compilation result ────────────────────────────────────────────────────────

class CompilationResult(BaseModel):
    """The six compilation stages returned by the external service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    lexical_tokens: List[str] = []
    syntax_tree: str = ""
    semantic_analysis: str = ""
    generated_sql: str
    optimized_sql: str
    explanation: str = ""


# ── Errors / misc ─────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    detail: str


class DefaultSchemaResponse(BaseModel):
    schema_text: str = Field(..., alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    model: str
    version: str
