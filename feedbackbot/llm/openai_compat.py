from __future__ import annotations
from typing import Sequence

from langchain_core.messages import BaseMessage
from .base import LLMAdapter, message_text

from langchain_openai import ChatOpenAI


class OpenAICompatAdapter(LLMAdapter):
    """
    Any server speaking the OpenAI chat completions protocol (`/v1/chat/completions`):
    Groq, vLLM, LM Studio, ... ChatOpenAI is simply pointed at `base_url`.
    """
    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: str,
        temperature: float = 0.7,
        max_tokens: int = 200,
        provider: str = "openai_compat",
    ):
        self.chat = ChatOpenAI(
            model=model,
            base_url=base_url,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        self._model = model
        self._base_url = base_url
        self._provider = provider

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    async def ainvoke(
        self,
        messages: Sequence[BaseMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        res = await self.get_chat_model(temperature=temperature, max_tokens=max_tokens).ainvoke(messages)
        return message_text(res)

    def get_chat_model(self, *, temperature: float | None = None, max_tokens: int | None = None) -> ChatOpenAI:
        """ChatOpenAI instance with per-call sampling overrides applied."""
        update = {}
        if temperature is not None:
            update["temperature"] = temperature
        if max_tokens is not None:
            update["max_tokens"] = max_tokens
        return self.chat.model_copy(update=update) if update else self.chat
