"""
OpenAI chat LLM client.
"""

from __future__ import annotations

from typing import Any, Dict, List

from openai import OpenAI, OpenAIError

from docqa.config import Settings
from docqa.errors import CompletionProviderError

DEFAULT_LLM_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 500


class LLMClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_LLM_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float | None = None,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client or OpenAI(api_key=api_key, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        return cls(
            api_key=api_key,
            model=settings.llm_model_name,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.provider_timeout_sec,
        )

    def chat(self, messages: List[Dict[str, Any]]) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            raise CompletionProviderError(f"Completion request failed: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def complete(self, system_prompt: str, user_query: str) -> str:
        return self.chat(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_query},
            ]
        )


__all__ = ["LLMClient", "DEFAULT_LLM_MODEL", "DEFAULT_TEMPERATURE", "DEFAULT_MAX_TOKENS"]
