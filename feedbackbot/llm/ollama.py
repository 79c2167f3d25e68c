from __future__ import annotations
from typing import Sequence

from langchain_core.messages import BaseMessage
from langchain_ollama import ChatOllama

from .base import LLMAdapter, message_text


class OllamaAdapter(LLMAdapter):
    def __init__(self, model: str, base_url: str, temperature: float = 0.7, max_tokens: int = 200):
        self.chat = ChatOllama(
            model=model,
            base_url=base_url,
            temperature=temperature,
            num_predict=max_tokens,
        )
        self._model = model

    @property
    def provider(self) -> str:
        return "ollama"

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
            update["num_predict"] = max_tokens
        chat = self.chat.model_copy(update=update) if update else self.chat
        res = await chat.ainvoke(messages)
        return message_text(res)
