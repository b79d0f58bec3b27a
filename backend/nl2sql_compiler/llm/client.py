from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from nl2sql_compiler.core.config import Settings
from nl2sql_compiler.core.errors import CompilationError, ConfigurationError
from nl2sql_compiler.llm.prompt_builder import RESPONSE_SCHEMA, CompilationPrompt

logger = logging.getLogger(__name__)


class TransportError(CompilationError):
    """Raised when the compilation service call itself fails."""


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    model: str = "gemini-2.5-pro"
    base_url: str = "https://generativelanguage.googleapis.com"
    temperature: float = 0.2
    timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiConfig":
        if not settings.GEMINI_API_KEY.strip():
            raise ConfigurationError(
                "GEMINI_API_KEY (or API_KEY) must be set to reach the compilation service."
            )
        return cls(
            api_key=settings.GEMINI_API_KEY.strip(),
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL.rstrip("/"),
            temperature=settings.TEMPERATURE,
            timeout=settings.REQUEST_TIMEOUT,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"


class GeminiClient:
    def __init__(self, config: GeminiConfig) -> None:
        self.config = config

    def generate(self, prompt: CompilationPrompt) -> str:
        """Send one generateContent request and return the raw reply text."""
        try:
            r = requests.post(
                self.config.endpoint,
                headers={"x-goog-api-key": self.config.api_key},
                json=self._payload(prompt),
                timeout=self.config.timeout,
            )
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as exc:
            logger.error("Compilation service request failed: %s", exc)
            raise TransportError(str(exc)) from exc
        except ValueError as exc:
            logger.error("Compilation service returned a non-JSON body: %s", exc)
            raise TransportError("Undecodable reply from compilation service.") from exc

        text = _candidate_text(data)
        if not text:
            logger.error("Compilation service returned no candidate text: %r", data)
            raise TransportError("Compilation service returned no content.")
        return text

    def _payload(self, prompt: CompilationPrompt) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": prompt.system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": prompt.contents}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
                "temperature": self.config.temperature,
            },
        }


def _candidate_text(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    ).strip()
