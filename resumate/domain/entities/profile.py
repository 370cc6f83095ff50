"""Persistent user profile and job search entities."""

import math
import uuid
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from resumate.domain.services.knowledge import merge_facts


class WorkMode(str, Enum):
    """Accepted work arrangements."""

    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"


class SearchPreferences(BaseModel):
    """Criteria for the job search. Every field always has a value."""

    roles: str = ""
    locations: str = "Remote"
    salary_min: str = ""
    exclusions: str = ""
    radius: int = Field(default=50, ge=0)
    work_modes: list[WorkMode] = Field(
        default_factory=lambda: [WorkMode.REMOTE, WorkMode.HYBRID]
    )
    search_context: str = ""

    @field_validator("work_modes", mode="before")
    @classmethod
    def _unique_known_modes(cls, value: object) -> list[WorkMode]:
        """Drop unknown modes and duplicates, keep first-seen order."""
        if value is None:
            return []
        if isinstance(value, (str, WorkMode)):
            value = [value]
        known = {m.value: m for m in WorkMode}
        modes: list[WorkMode] = []
        for item in value:  # type: ignore[union-attr]
            raw = item.value if isinstance(item, WorkMode) else str(item)
            mode = known.get(raw)
            if mode is not None and mode not in modes:
                modes.append(mode)
        return modes


class UserProfile(BaseModel):
    """The single persistent aggregate: master resume, learned facts, search criteria."""

    master_resume: str = ""
    facts: list[str] = Field(default_factory=list)
    search_preferences: SearchPreferences = Field(default_factory=SearchPreferences)

    @field_validator("facts")
    @classmethod
    def _dedupe_facts(cls, value: list[str]) -> list[str]:
        return merge_facts([], value)


def default_profile() -> UserProfile:
    """Built-in profile used when nothing usable is stored."""
    return UserProfile()


class JobOpportunity(BaseModel):
    """One search hit. Ephemeral, never persisted."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    title: str
    company: str
    location: str = ""
    salary: str | None = None
    url: str | None = None
    match_score: int = 0
    reasoning: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _ensure_id(cls, value: object) -> str:
        text = str(value).strip() if value is not None else ""
        return text or uuid.uuid4().hex[:12]

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: object) -> int:
        """Backend scores are trusted for ranking but kept within 0-100."""
        try:
            score = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0
        if math.isnan(score):
            return 0
        # Clamp before rounding, round() rejects infinities.
        return round(max(0.0, min(100.0, score)))
