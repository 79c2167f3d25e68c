"""
Native OpenAI API adapter for GPT models.

Use this for the official OpenAI API (gpt-4o-mini, gpt-4o, etc.)
"""

from __future__ import annotations

from typing import Sequence

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from .base import LLMAdapter, message_text


class OpenAINativeAdapter(LLMAdapter):
    """
    Native OpenAI API adapter.

    Uses the official OpenAI API endpoint (https://api.openai.com/v1).
    Requires OPENAI_API_KEY environment variable or explicit api_key.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 200,
    ):
        self.chat = ChatOpenAI(
            model=model,
            api_key=api_key,  # None falls back to the OPENAI_API_KEY env var
            temperature=temperature,
            max_tokens=max_tokens,
        )
        self._model = model

    @property
    def provider(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    async def ainvoke(
        self,
        messages: Sequence[BaseMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        update = {}
        if temperature is not None:
            update["temperature"] = temperature
        if max_tokens is not None:
            update["max_tokens"] = max_tokens
        chat = self.chat.model_copy(update=update) if update else self.chat
        res = await chat.ainvoke(messages)
        return message_text(res)
