"""Job search runner - preference-driven search bounded by a hard deadline."""

import asyncio
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from resumate.domain.entities.profile import JobOpportunity, SearchPreferences, UserProfile
from resumate.domain.errors import SearchTimeoutError
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.prompts import job_search_prompt

logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_SECONDS = 45.0
DEFAULT_MAX_RESULTS = 5


class JobSearchPayload(BaseModel):
    """Structured reply of the search call."""

    jobs: list[JobOpportunity] = Field(default_factory=list)


def _raw_entries(data: Any) -> list[Any]:
    """Accept {"jobs": [...]} or a bare list."""
    if isinstance(data, dict):
        data = data.get("jobs", [])
    return data if isinstance(data, list) else []


def _discard_outcome(task: asyncio.Task) -> None:
    """Consume the late outcome of a timed-out search so nothing leaks."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Discarded late search failure: %s", exc)
    else:
        logger.debug("Discarded late search result")


class JobSearchRunner:
    """Races the backend search against a deadline.

    On timeout the search task is cancelled and left behind: the caller gets
    SearchTimeoutError at the deadline even if the backend is slow to stop,
    and whatever the task produces afterwards is thrown away.
    """

    def __init__(
        self,
        backend: GenerationPort,
        model: str | None = None,
        deadline: float = DEFAULT_DEADLINE_SECONDS,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        self._backend = backend
        self._model = model
        self._deadline = deadline
        self._max_results = max_results

    async def search(
        self,
        profile: UserProfile,
        preferences: SearchPreferences | None = None,
        deadline: float | None = None,
    ) -> list[JobOpportunity]:
        """Return opportunities in backend order, or raise SearchTimeoutError."""
        prefs = preferences or profile.search_preferences
        limit = deadline if deadline is not None else self._deadline
        task = asyncio.create_task(self._fetch(profile, prefs))
        try:
            done, _ = await asyncio.wait({task}, timeout=limit)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task in done:
            return task.result()

        task.cancel()
        task.add_done_callback(_discard_outcome)
        logger.warning("Job search exceeded %.1fs deadline, cancelled", limit)
        raise SearchTimeoutError(limit)

    async def _fetch(self, profile: UserProfile, prefs: SearchPreferences) -> list[JobOpportunity]:
        prompt = job_search_prompt(profile, prefs, self._max_results)
        try:
            result = await self._backend.generate_structured(
                prompt,
                JobSearchPayload,
                model=self._model,
                web_search=True,
            )
        except Exception as e:  # noqa: BLE001
            logger.error("Job search failed: %s", e)
            return []

        jobs: list[JobOpportunity] = []
        for entry in _raw_entries(result.data):
            try:
                jobs.append(JobOpportunity.model_validate(entry))
            except ValidationError as e:
                logger.debug("Skipping malformed opportunity: %s", e)
        logger.info("Job search returned %d opportunities", len(jobs))
        return jobs
