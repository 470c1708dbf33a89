"""
OpenAI chat LLM client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from openai import OpenAI

from app.config import settings
from app.errors import ConfigurationError

DEFAULT_LLM_MODEL = settings.llm_model_name
DEFAULT_TEMPERATURE = 0.2


class ChatModel(Protocol):
    def chat(self, messages: List[Dict[str, Any]], model: str | None = None) -> str:
        ...


class LLMClient:
    def __init__(
        self,
        model: str = DEFAULT_LLM_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not settings.openai_api_key:
                raise ConfigurationError("OPENAI_API_KEY not set in environment")
            self._client = OpenAI(api_key=settings.openai_api_key.get_secret_value())
        return self._client

    def chat(self, messages: List[Dict[str, Any]], model: str | None = None) -> str:
        response = self.client.chat.completions.create(
            model=model or self.model,
            temperature=self.temperature,
            messages=messages,
        )
        choice = response.choices[0].message
        return choice.content or ""


__all__ = ["ChatModel", "LLMClient", "DEFAULT_LLM_MODEL", "DEFAULT_TEMPERATURE"]
