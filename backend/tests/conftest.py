from __future__ import annotations

import os
import threading

# Must be set before nl2sql_compiler.main is imported
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest

from nl2sql_compiler.llm.prompt_builder import CompilationPrompt

EMPLOYEES_REPLY = (
    '{"lexicalAnalysis":{"tokens":["employees","hire_date"]},'
    '"syntaxAnalysis":{"tree":"SELECT ... WHERE hire_date > ..."},'
    '"semanticAnalysis":{"analysis":"valid"},'
    '"generatedSql":"SELECT * FROM employees WHERE hire_date > \'2022-01-01\';",'
    '"optimizedSql":"SELECT * FROM employees WHERE hire_date > \'2022-01-01\';",'
    '"explanation":"Filters employees by hire date."}'
)

EMPLOYEES_SCHEMA = "CREATE TABLE employees (employee_id INT, hire_date DATE, salary DECIMAL(10, 2));"
EMPLOYEES_QUERY = "List all employees hired after 2022-01-01."


class FakeClient:
    """Stands in for GeminiClient; records every prompt it receives."""

    def __init__(self, reply: str = EMPLOYEES_REPLY, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[CompilationPrompt] = []

    def generate(self, prompt: CompilationPrompt) -> str:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class BlockingClient(FakeClient):
    """Holds the request open until ``release`` is set."""

    def __init__(self, reply: str = EMPLOYEES_REPLY) -> None:
        super().__init__(reply)
        self.started = threading.Event()
        self.release = threading.Event()

    def generate(self, prompt: CompilationPrompt) -> str:
        self.calls.append(prompt)
        self.started.set()
        self.release.wait(timeout=5)
        return self.reply


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
