from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import PrivateAttr


class AdapterChatModel(BaseChatModel):
    """Exposes an LLMAdapter as a langchain chat model, pinned to one set of sampling params."""

    _adapter: Any = PrivateAttr()
    _temperature: Optional[float] = PrivateAttr(default=None)
    _max_tokens: Optional[int] = PrivateAttr(default=None)

    def __init__(
        self,
        adapter: LLMAdapter,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        super().__init__()
        self._adapter = adapter
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def _llm_type(self) -> str:
        return "llm_adapter"

    @property
    def _identifying_params(self) -> dict:
        return {
            "provider": self._adapter.provider,
            "model": self._adapter.model_name,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        text = await self._adapter.ainvoke(
            messages,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        gen = ChatGeneration(message=AIMessage(content=text))
        return ChatResult(generations=[gen])

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        raise NotImplementedError("Use async: ainvoke/_agenerate")


class LLMAdapter(ABC):
    @property
    @abstractmethod
    def provider(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def model_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def ainvoke(
        self,
        messages: Sequence[BaseMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return raw text output from the model. Empty string when the model produced nothing."""
        raise NotImplementedError

    def as_chat_model(self, *, temperature: float | None = None, max_tokens: int | None = None):
        return AdapterChatModel(self, temperature=temperature, max_tokens=max_tokens)


def message_text(res: Any) -> str:
    """Flatten a chat model reply into plain text; missing content becomes ''."""
    content = getattr(res, "content", res)
    if content is None:
        return ""
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)
