"""Tests for profile and workflow entities."""

import pytest
from pydantic import ValidationError

from resumate.domain.entities import (
    AnalysisResult,
    JobContext,
    JobOpportunity,
    SearchPreferences,
    UserProfile,
    WorkMode,
)
from resumate.domain.errors import SearchTimeoutError, ValidationFailure


class TestSearchPreferences:
    def test_defaults(self):
        prefs = SearchPreferences()
        assert prefs.locations == "Remote"
        assert prefs.radius == 50
        assert prefs.work_modes == [WorkMode.REMOTE, WorkMode.HYBRID]
        assert prefs.roles == ""
        assert prefs.search_context == ""

    def test_unknown_and_duplicate_modes_dropped(self):
        prefs = SearchPreferences(work_modes=["Remote", "Moon", "Remote", "On-site"])
        assert prefs.work_modes == [WorkMode.REMOTE, WorkMode.ON_SITE]

    def test_empty_work_modes_allowed(self):
        assert SearchPreferences(work_modes=[]).work_modes == []

    def test_negative_radius_rejected(self):
        with pytest.raises(ValidationError):
            SearchPreferences(radius=-1)

    def test_serializes_mode_values(self):
        data = SearchPreferences().model_dump(mode="json")
        assert data["work_modes"] == ["Remote", "Hybrid"]


class TestUserProfile:
    def test_default_profile_is_empty(self):
        profile = UserProfile()
        assert profile.master_resume == ""
        assert profile.facts == []
        assert profile.search_preferences == SearchPreferences()

    def test_duplicate_facts_collapsed(self):
        profile = UserProfile(facts=["a", "b", "a"])
        assert profile.facts == ["a", "b"]


class TestJobOpportunity:
    def test_id_generated_when_missing(self):
        job = JobOpportunity(title="Engineer", company="Acme")
        assert job.id

    def test_blank_id_replaced(self):
        job = JobOpportunity(id="  ", title="Engineer", company="Acme")
        assert job.id.strip()

    def test_ids_are_distinct(self):
        a = JobOpportunity(title="Engineer", company="Acme")
        b = JobOpportunity(title="Engineer", company="Acme")
        assert a.id != b.id

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (87, 87),
            (150, 100),
            (-5, 0),
            ("72", 72),
            (64.6, 65),
            ("n/a", 0),
            (None, 0),
            (float("inf"), 100),
            (float("-inf"), 0),
            ("1e999", 100),
            (float("nan"), 0),
        ],
    )
    def test_match_score_clamped(self, raw, expected):
        job = JobOpportunity(title="Engineer", company="Acme", match_score=raw)
        assert job.match_score == expected

    def test_title_and_company_required(self):
        with pytest.raises(ValidationError):
            JobOpportunity(title="Engineer")


class TestWorkflowEntities:
    def test_clarification_needs_questions(self):
        assert AnalysisResult(needs_info=True, questions=["Q?"]).requires_clarification
        assert not AnalysisResult(needs_info=True, questions=[]).requires_clarification
        assert not AnalysisResult(needs_info=False, questions=["Q?"]).requires_clarification

    def test_job_context_is_frozen(self):
        ctx = JobContext(resume="r", job_description="j")
        with pytest.raises(ValidationError):
            ctx.resume = "other"


class TestErrors:
    def test_search_timeout_message(self):
        err = SearchTimeoutError(45.0)
        assert err.deadline == 45.0
        assert "45s" in str(err)
        assert isinstance(err, TimeoutError)

    def test_validation_failure_carries_field(self):
        err = ValidationFailure("resume", "too short")
        assert err.field == "resume"
        assert str(err) == "too short"
        assert isinstance(err, ValueError)
