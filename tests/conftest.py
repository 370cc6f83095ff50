"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any

import pytest
from pydantic import BaseModel

from resumate.domain.errors import BackendUnavailableError
from resumate.domain.ports.llm import GenerationResult
from resumate.infrastructure.persistence.kv_store import MemoryKeyValueStore
from resumate.infrastructure.persistence.profile_store import ProfileStore

RESUME = (
    "# Jane Doe\n\n## Experience\n- Senior Python engineer at Acme, 2019-2024\n"
    "- Built data pipelines and REST APIs\n"
)
JOB_DESCRIPTION = (
    "Staff Backend Engineer at Initech. Requirements: Python, distributed systems, "
    "mentoring, 7+ years of experience building APIs."
)


def _resolve(reply: Any) -> GenerationResult:
    if isinstance(reply, BaseException):
        raise reply
    if isinstance(reply, GenerationResult):
        return reply
    if isinstance(reply, str):
        return GenerationResult(text=reply)
    return GenerationResult(data=reply)


class FakeBackend:
    """Scripted GenerationPort.

    Text replies are consumed in call order. Structured replies are keyed by
    schema class name and reused. A reply can be a str, a GenerationResult,
    plain data for a structured call, or an exception to raise.
    """

    def __init__(self) -> None:
        self.text_replies: list[Any] = []
        self.structured: dict[str, Any] = {}
        self.delays: dict[str, float] = {}
        self.available = True
        self.calls: list[dict] = []
        self.cancelled: list[str] = []

    def calls_for(self, kind: str) -> list[dict]:
        return [c for c in self.calls if c["kind"] == kind]

    async def _maybe_wait(self, kind: str) -> None:
        delay = self.delays.get(kind)
        if not delay:
            return
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(kind)
            raise

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        self.calls.append({"kind": "text", "prompt": prompt, "model": model, "web_search": web_search})
        await self._maybe_wait("text")
        if not self.text_replies:
            raise BackendUnavailableError("No scripted text reply")
        return _resolve(self.text_replies.pop(0))

    async def generate_structured(
        self,
        prompt: str,
        schema: type[BaseModel],
        *,
        model: str | None = None,
        web_search: bool = False,
    ) -> GenerationResult:
        kind = schema.__name__
        self.calls.append({"kind": kind, "prompt": prompt, "model": model, "web_search": web_search})
        await self._maybe_wait(kind)
        if kind not in self.structured:
            raise BackendUnavailableError(f"No scripted reply for {kind}")
        return _resolve(self.structured[kind])

    async def is_available(self) -> bool:
        return self.available


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def kv_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def profile_store(kv_store) -> ProfileStore:
    return ProfileStore(kv_store)


@pytest.fixture
def resume_text() -> str:
    return RESUME


@pytest.fixture
def job_description_text() -> str:
    return JOB_DESCRIPTION
