from __future__ import annotations

import asyncio

from langchain_core.runnables import Runnable

from feedbackbot.exceptions.errors import GenerationError


async def invoke_chain(chain: Runnable, payload: dict, timeout: float | None = None):
    """Run one model chain; every failure comes back as GenerationError."""
    try:
        if timeout is None:
            return await chain.ainvoke(payload)
        try:
            return await asyncio.wait_for(chain.ainvoke(payload), timeout=timeout)
        except asyncio.TimeoutError as e:
            # wait_for raises a bare TimeoutError; a provider's own one keeps its message
            raise GenerationError(str(e) or f"LLM call timed out after {timeout}s") from e
    except GenerationError:
        raise
    except Exception as e:
        raise GenerationError(str(e) or type(e).__name__) from e
