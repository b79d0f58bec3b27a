"""
Tests for the response parser.
Run with: pytest tests/test_response_parser.py -v
"""
import json

import pytest

from conftest import EMPLOYEES_REPLY
from nl2sql_compiler.core.errors import FORMAT_FAILURE_MESSAGE, TRANSPORT_FAILURE_MESSAGE
from nl2sql_compiler.llm.response_parser import (
    ResponseFormatError,
    ResponseShapeError,
    parse_compilation_response,
    strip_code_fence,
)


# ── Well-formed replies ───────────────────────────────────────────────────────

class TestValidReplies:
    def test_sql_fields_copied_exactly(self):
        result = parse_compilation_response(EMPLOYEES_REPLY)
        expected = json.loads(EMPLOYEES_REPLY)
        assert result.generated_sql == expected["generatedSql"]
        assert result.optimized_sql == expected["optimizedSql"]

    def test_nested_stages_are_flattened(self):
        result = parse_compilation_response(EMPLOYEES_REPLY)
        assert result.lexical_tokens == ["employees", "hire_date"]
        assert result.syntax_tree == "SELECT ... WHERE hire_date > ..."
        assert result.semantic_analysis == "valid"
        assert result.explanation == "Filters employees by hire date."

    def test_sql_whitespace_is_not_touched(self):
        raw = json.dumps({"generatedSql": "  SELECT 1\n", "optimizedSql": "SELECT\n  1 "})
        result = parse_compilation_response(raw)
        assert result.generated_sql == "  SELECT 1\n"
        assert result.optimized_sql == "SELECT\n  1 "

    def test_missing_optional_stages_default_to_empty(self):
        result = parse_compilation_response('{"generatedSql": "SELECT 1", "optimizedSql": "SELECT 1"}')
        assert result.lexical_tokens == []
        assert result.syntax_tree == ""
        assert result.semantic_analysis == ""
        assert result.explanation == ""

    def test_loose_nested_fields_do_not_fail(self):
        raw = json.dumps({
            "lexicalAnalysis": {"tokens": "not a list"},
            "syntaxAnalysis": 42,
            "semanticAnalysis": None,
            "generatedSql": "SELECT 1",
            "optimizedSql": "SELECT 1",
            "explanation": ["x"],
        })
        result = parse_compilation_response(raw)
        assert result.lexical_tokens == []
        assert result.syntax_tree == ""
        assert result.explanation == ""

    def test_serialises_with_camel_case_names(self):
        data = parse_compilation_response(EMPLOYEES_REPLY).model_dump(by_alias=True)
        assert set(data) == {
            "lexicalTokens", "syntaxTree", "semanticAnalysis",
            "generatedSql", "optimizedSql", "explanation",
        }


# ── Markdown fences ───────────────────────────────────────────────────────────

class TestCodeFence:
    @pytest.mark.parametrize("wrapped", [
        f"```json\n{EMPLOYEES_REPLY}\n```",
        f"```json{EMPLOYEES_REPLY}```",
        f"   \n```json  \n\n{EMPLOYEES_REPLY}  \n ```\n\t ",
    ])
    def test_fenced_reply_equals_unfenced(self, wrapped: str):
        assert parse_compilation_response(wrapped) == parse_compilation_response(EMPLOYEES_REPLY)

    def test_strip_is_idempotent(self):
        once = strip_code_fence(f"```json\n{EMPLOYEES_REPLY}\n```")
        assert strip_code_fence(once) == once == EMPLOYEES_REPLY

    def test_unfenced_text_only_trimmed(self):
        assert strip_code_fence("  {\"a\": 1}\n") == '{"a": 1}'


# ── Failures ──────────────────────────────────────────────────────────────────

class TestMalformedReplies:
    @pytest.mark.parametrize("raw", [
        "",
        "not json at all",
        '{"generatedSql": "SELECT 1", ',
        "```sql\nSELECT 1\n```",
    ])
    def test_format_error(self, raw: str):
        with pytest.raises(ResponseFormatError) as info:
            parse_compilation_response(raw)
        assert info.value.user_message == FORMAT_FAILURE_MESSAGE

    def test_missing_optimized_sql(self):
        with pytest.raises(ResponseShapeError, match="optimizedSql"):
            parse_compilation_response('{"generatedSql": "SELECT 1"}')

    def test_missing_generated_sql(self):
        with pytest.raises(ResponseShapeError, match="generatedSql"):
            parse_compilation_response('{"optimizedSql": "SELECT 1"}')

    @pytest.mark.parametrize("value", [None, 1, ["SELECT 1"], {"sql": "SELECT 1"}])
    def test_non_string_sql_field(self, value):
        raw = json.dumps({"generatedSql": "SELECT 1", "optimizedSql": value})
        with pytest.raises(ResponseShapeError):
            parse_compilation_response(raw)

    @pytest.mark.parametrize("raw", ["[]", '"SELECT 1"', "null", "3"])
    def test_non_object_top_level(self, raw: str):
        with pytest.raises(ResponseShapeError):
            parse_compilation_response(raw)

    def test_shape_error_uses_transport_message(self):
        with pytest.raises(ResponseShapeError) as info:
            parse_compilation_response("{}")
        assert info.value.user_message == TRANSPORT_FAILURE_MESSAGE
