from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Optional

from langchain_core.prompts import ChatPromptTemplate

from feedbackbot.config.settings import Settings, settings as default_settings
from feedbackbot.domain.prompts.registry import PromptPack, PromptPackRegistry, TaskPrompt
from feedbackbot.domain.schemas.submission import (
    ServiceStatus,
    Submission,
    SubmissionList,
    SubmitRequest,
    SubmitResponse,
)
from feedbackbot.domain.store import SubmissionIdGenerator, SubmissionStore, compute_stats
from feedbackbot.exceptions.errors import GenerationError, InternalError, ValidationError
from feedbackbot.llm.base import LLMAdapter, message_text
from feedbackbot.llm.invoke import invoke_chain
from feedbackbot.llm.provider import get_llm_adapter
from feedbackbot.shared.context import run_id_var

logger = logging.getLogger(__name__)

INVALID_RATING_MESSAGE = "Invalid rating. Must be between 1 and 5."

DEFAULT_USER_RESPONSE = "Thank you for your feedback!"
DEFAULT_SUMMARY_TEMPLATE = "{rating}-star rating submitted."
DEFAULT_RECOMMENDED_ACTIONS = "Continue monitoring feedback."

ENDPOINTS = ["/api/submit", "/api/submissions"]


def validate_rating(value: Any) -> int:
    """Accept integers 1..5 (and integral floats like 4.0); reject everything else."""
    if isinstance(value, bool):
        raise ValidationError(INVALID_RATING_MESSAGE)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not 1 <= value <= 5:
        raise ValidationError(INVALID_RATING_MESSAGE)
    return value


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class GeneratedTexts:
    user_response: str
    summary: str
    recommended_actions: str


async def gather_fail_fast(coros: List[Awaitable[Any]]) -> List[Any]:
    """Await all coroutines concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for t in tasks:
            if not t.done():
                t.cancel()
        raise


class SubmissionService:
    """
    Intake and query for review submissions.

    - submit(): validate -> 3 model calls (reply / summary / actions) -> store
    - list_submissions(): snapshot + stats
    - status(): liveness payload for `/`

    A submission is stored only after all three generations succeed.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        store: SubmissionStore | None = None,
        adapter: LLMAdapter | None = None,
        adapter_factory: Callable[[Settings], LLMAdapter] | None = None,
        prompt_registry: PromptPackRegistry | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._settings = settings if settings is not None else default_settings
        self.store = store if store is not None else SubmissionStore(capacity=self._settings.submission_capacity)
        self._adapter = adapter
        self._adapter_factory = adapter_factory if adapter_factory is not None else get_llm_adapter
        if prompt_registry is None:
            prompt_registry = PromptPackRegistry(
                packs_dir=self._settings.prompt_packs_dir,
                default_pack=self._settings.prompt_pack,
                allowed_packs=self._settings.allowed_prompt_packs,
            )
        self._prompt_registry = prompt_registry
        # fail at startup, not on the first request, when the pack is broken
        self._pack: PromptPack = self._prompt_registry.get(self._settings.prompt_pack)
        self._new_id = id_factory if id_factory is not None else SubmissionIdGenerator()

    # --------------------
    # Operations
    # --------------------
    def status(self) -> ServiceStatus:
        return ServiceStatus(
            status="API is running",
            endpoints=list(ENDPOINTS),
            total_submissions=len(self.store),
        )

    async def submit(self, req: SubmitRequest) -> SubmitResponse:
        rating = validate_rating(req.rating)
        review = (req.review or "").strip()

        logger.info(
            "SUBMIT_START run_id=%s rating=%s review_chars=%d",
            run_id_var.get(),
            rating,
            len(review),
        )
        texts = await self.generate(rating=rating, review=review)

        submission = Submission(
            id=self._new_id(),
            rating=rating,
            review=review,
            user_response=texts.user_response,
            summary=texts.summary,
            recommended_actions=texts.recommended_actions,
            timestamp=utc_timestamp(),
        )
        self.store.add(submission)

        logger.info(
            "SUBMIT_DONE run_id=%s id=%s rating=%s stored=%d",
            run_id_var.get(),
            submission.id,
            rating,
            len(self.store),
        )
        return SubmitResponse(success=True, message=submission.user_response, submission_id=submission.id)

    def list_submissions(self) -> SubmissionList:
        try:
            items = self.store.snapshot()
            return SubmissionList(submissions=items, stats=compute_stats(items))
        except Exception as e:
            raise InternalError(str(e) or type(e).__name__) from e

    # --------------------
    # Generation
    # --------------------
    async def generate(self, *, rating: int, review: str) -> GeneratedTexts:
        adapter = self._get_adapter()
        payload = {"rating": rating, "review": review}

        tasks = (self._pack.reply, self._pack.summary, self._pack.actions)
        if self._settings.concurrent_generation:
            results = await gather_fail_fast([self._generate_task(adapter, t, payload) for t in tasks])
        else:
            results = [await self._generate_task(adapter, t, payload) for t in tasks]
        reply, summary, actions = results

        return GeneratedTexts(
            user_response=self._or_default(reply, DEFAULT_USER_RESPONSE, "reply"),
            summary=self._or_default(summary, DEFAULT_SUMMARY_TEMPLATE.format(rating=rating), "summary"),
            recommended_actions=self._or_default(actions, DEFAULT_RECOMMENDED_ACTIONS, "actions"),
        )

    async def _generate_task(self, adapter: LLMAdapter, task: TaskPrompt, payload: dict) -> Optional[str]:
        prompt = ChatPromptTemplate.from_messages([("human", task.template)])
        chain = prompt | adapter.as_chat_model(temperature=task.temperature, max_tokens=task.max_tokens)
        msg = await invoke_chain(chain, payload, timeout=self._settings.generation_timeout)
        text = message_text(msg).strip()
        return text or None

    @staticmethod
    def _or_default(text: Optional[str], default: str, task: str) -> str:
        if text:
            return text
        logger.warning("GENERATION_FALLBACK run_id=%s task=%s", run_id_var.get(), task)
        return default

    def _get_adapter(self) -> LLMAdapter:
        if self._adapter is None:
            try:
                self._adapter = self._adapter_factory(self._settings)
            except Exception as e:
                # e.g. the provider SDK refusing to start without a credential
                raise GenerationError(str(e) or type(e).__name__) from e
        return self._adapter
