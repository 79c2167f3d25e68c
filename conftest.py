"""
Shared fixtures: a scripted LLM adapter standing in for the network model.
"""
from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Sequence

import pytest
from langchain_core.messages import BaseMessage

from feedbackbot.config.settings import Settings
from feedbackbot.llm.base import LLMAdapter


def task_of(prompt: str) -> str:
    """Which of the three prompts this is, judged by its wording."""
    if prompt.startswith("Summarize"):
        return "summary"
    if "recommendations" in prompt:
        return "actions"
    return "reply"


class ScriptedAdapter(LLMAdapter):
    """
    replies:  task -> text returned for that task ("" simulates an empty choice)
    failures: task -> exception raised for that task
    delays:   task -> seconds to sleep before answering
    """

    def __init__(
        self,
        replies: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, BaseException]] = None,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.replies = {
            "reply": "Thanks so much for the kind words!",
            "summary": "The customer was happy with the service.",
            "actions": "1. Keep staff training.\n2. Share praise with the team.",
        }
        self.replies.update(replies or {})
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: List[dict] = []
        self.cancelled: List[str] = []

    @property
    def provider(self) -> str:
        return "scripted"

    @property
    def model_name(self) -> str:
        return "scripted-model"

    async def ainvoke(
        self,
        messages: Sequence[BaseMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        prompt = str(messages[-1].content)
        task = task_of(prompt)
        self.calls.append(
            {"task": task, "prompt": prompt, "temperature": temperature, "max_tokens": max_tokens}
        )
        try:
            if task in self.delays:
                await asyncio.sleep(self.delays[task])
        except asyncio.CancelledError:
            self.cancelled.append(task)
            raise
        if task in self.failures:
            raise self.failures[task]
        return self.replies.get(task, "")

    def tasks_called(self) -> List[str]:
        return [c["task"] for c in self.calls]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        llm_provider="groq",
        groq_api_key="test-key",
        submission_capacity=100,
        concurrent_generation=True,
        generation_timeout=None,
    )


@pytest.fixture
def scripted_adapter() -> ScriptedAdapter:
    return ScriptedAdapter()


@pytest.fixture
def make_adapter():
    return ScriptedAdapter
