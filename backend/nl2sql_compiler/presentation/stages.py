from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from nl2sql_compiler.api.schemas import CompilationResult

StageKind = Literal["tokens", "code", "text"]


@dataclass
class Stage:
    title: str
    kind: StageKind
    content: str = ""
    language: Optional[str] = None
    tokens: list[str] = field(default_factory=list)


def build_stages(result: CompilationResult) -> list[Stage]:
    """Group a compilation result into its six display stages, in order."""
    return [
        Stage("1. Lexical Analysis (Tokens)", "tokens", tokens=list(result.lexical_tokens)),
        Stage("2. Syntax Analysis (Abstract Tree)", "code", result.syntax_tree, "plaintext"),
        Stage("3. Semantic Analysis", "text", result.semantic_analysis),
        Stage("4. Intermediate Code Generation (SQL)", "code", result.generated_sql, "sql"),
        Stage("5. Code Optimization (Optimized SQL)", "code", result.optimized_sql, "sql"),
        Stage("6. Explanation", "text", result.explanation),
    ]
