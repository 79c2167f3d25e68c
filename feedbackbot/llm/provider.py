from __future__ import annotations

from feedbackbot.config.settings import Settings, settings as default_settings
from feedbackbot.llm.base import LLMAdapter
from feedbackbot.llm.ollama import OllamaAdapter
from feedbackbot.llm.openai_compat import OpenAICompatAdapter
from feedbackbot.llm.openai_native import OpenAINativeAdapter


def get_llm_adapter(settings: Settings | None = None) -> LLMAdapter:
    settings = settings or default_settings
    provider = settings.llm_provider.strip().lower()

    if provider == "groq":
        # Groq serves an OpenAI-compatible API.
        return OpenAICompatAdapter(
            model=settings.groq_model,
            base_url=settings.groq_base_url,
            api_key=settings.groq_api_key,
            provider="groq",
        )
    if provider == "openai":
        return OpenAINativeAdapter(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
        )
    if provider == "openai_compat":
        return OpenAICompatAdapter(
            model=settings.openai_compat_model,
            base_url=settings.openai_compat_base_url,
            api_key=settings.openai_compat_api_key,
        )
    if provider == "ollama":
        return OllamaAdapter(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
        )
    raise ValueError(f"Unknown llm_provider: {settings.llm_provider}")
