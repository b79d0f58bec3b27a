"""
Prompt Builder: constructs the compilation prompt for the LLM.

The model is asked for a single JSON object describing six "compilation
stages". The declared response schema is sent alongside the prompt so the
service can constrain its output.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ── System instruction ────────────────────────────────────────────────────────

SYSTEM_INSTRUCTION = """\
You are an expert compiler that translates natural language queries into SQL, \
strictly following compiler design principles.
Your mission is to analyze a natural language query against a given database \
schema and generate a detailed JSON object representing the compilation stages.

The JSON output must conform to the provided JSON schema and contain the following fields:
1. **lexicalAnalysis**: An object with a 'tokens' array, identifying the main \
keywords, entities, and values from the query.
2. **syntaxAnalysis**: An object with a 'tree' string, describing the query's \
grammatical structure in a human-readable abstract syntax tree format.
3. **semanticAnalysis**: An object with an 'analysis' string, verifying that the \
entities and relationships in the query are valid according to the provided \
database schema. Note any ambiguities or assumptions made.
4. **generatedSql**: A string containing a standard, correct SQL query that \
directly translates the user's request.
5. **optimizedSql**: A string containing an optimized version of the generated \
SQL for clarity and performance. This should use standard JOIN syntax, proper \
aliasing, and clear formatting.
6. **explanation**: A string with a clear, step-by-step natural language \
explanation of what the final optimized SQL query does.

**Crucial Rule**: The generated SQL must be syntactically correct and \
exclusively use the tables and columns exactly as they are defined in the \
provided schema. Do not invent tables or columns.
"""

_USER_TEMPLATE = """\
DATABASE SCHEMA:
```sql
{schema}
```

NATURAL LANGUAGE QUERY:
"{query}"
"""


# ── Response shape contract ───────────────────────────────────────────────────

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "lexicalAnalysis": {
            "type": "OBJECT",
            "properties": {
                "tokens": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "Keywords, identifiers, and operators identified in the query.",
                },
            },
        },
        "syntaxAnalysis": {
            "type": "OBJECT",
            "properties": {
                "tree": {
                    "type": "STRING",
                    "description": (
                        "A high-level, human-readable description of the parsed "
                        "query structure, like an abstract syntax tree."
                    ),
                },
            },
        },
        "semanticAnalysis": {
            "type": "OBJECT",
            "properties": {
                "analysis": {
                    "type": "STRING",
                    "description": (
                        "Analysis of the query's meaning, checking for semantic "
                        "correctness against the schema (e.g., valid table/column names)."
                    ),
                },
            },
        },
        "generatedSql": {
            "type": "STRING",
            "description": "The initial, unoptimized SQL query generated from the analysis.",
        },
        "optimizedSql": {
            "type": "STRING",
            "description": "An optimized version of the SQL query for better readability and potential performance.",
        },
        "explanation": {
            "type": "STRING",
            "description": "A step-by-step natural language explanation of the final optimized SQL query.",
        },
    },
    "required": [
        "lexicalAnalysis",
        "syntaxAnalysis",
        "semanticAnalysis",
        "generatedSql",
        "optimizedSql",
        "explanation",
    ],
}


# ── Public API ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CompilationPrompt:
    contents: str
    system_instruction: str = SYSTEM_INSTRUCTION


def build_prompt(natural_language_query: str, schema_text: str) -> CompilationPrompt:
    """
    Build the prompt payload sent to the compilation service.

    Parameters
    ----------
    natural_language_query:
        The user's question, inserted verbatim.
    schema_text:
        Free-text table/column definitions, inserted verbatim.

    Returns
    -------
    CompilationPrompt
        User contents plus the fixed system instruction.
    """
    contents = _USER_TEMPLATE.format(
        schema=schema_text,
        query=natural_language_query,
    )
    return CompilationPrompt(contents=contents)
