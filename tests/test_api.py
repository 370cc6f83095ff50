"""HTTP API integration tests over ASGITransport with a scripted backend."""

import pytest
from httpx import ASGITransport, AsyncClient

from resumate.api.container import Container, reset_container, set_container
from resumate.api.dependencies import limiter
from resumate.domain.errors import BackendUnavailableError
from resumate.domain.ports.config import AppConfig, WorkflowConfig
from resumate.main import app

NO_GAP = {"needs_info": False, "questions": [], "rationale": "Covered"}
GAP = {"needs_info": True, "questions": ["How large was the team?"], "rationale": "Scope missing"}


@pytest.fixture
def container(backend, kv_store):
    config = AppConfig(workflow=WorkflowConfig(search_deadline_seconds=0.05))
    container = Container(config=config, backend=backend, store=kv_store)
    set_container(container)
    limiter.enabled = False
    yield container
    limiter.enabled = True
    reset_container()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _script_generation(backend) -> None:
    backend.text_replies = ["TAILORED", "LETTER"]
    backend.structured["OutreachPayload"] = {"manager_info": "Ann Lee", "draft_message": "Hi Ann"}


@pytest.mark.asyncio
async def test_health_returns_ok(container):
    async with _client() as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["service"] == "resumate"
    assert data["llm_available"] is True
    assert data["step"] == "intake"


class TestWorkflowRoutes:
    @pytest.mark.asyncio
    async def test_direct_generation(self, container, backend, resume_text, job_description_text):
        backend.structured["GapAnalysisPayload"] = NO_GAP
        _script_generation(backend)
        async with _client() as client:
            resp = await client.post(
                "/workflow/intake",
                json={"resume": resume_text, "job_description": job_description_text},
            )
        assert resp.status_code == 200
        data = resp.json()
        assert data["step"] == "results"
        assert data["content"]["resume"] == "TAILORED"
        assert data["content"]["hiring_manager_info"] == "Ann Lee"

    @pytest.mark.asyncio
    async def test_short_input_is_422(self, container, backend, job_description_text):
        async with _client() as client:
            resp = await client.post(
                "/workflow/intake",
                json={"resume": "short", "job_description": job_description_text},
            )
        assert resp.status_code == 422
        assert resp.json()["detail"]["field"] == "resume"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_pipeline_failure_is_502(self, container, backend, resume_text, job_description_text):
        backend.structured["GapAnalysisPayload"] = NO_GAP
        backend.text_replies = [BackendUnavailableError("down")]
        async with _client() as client:
            resp = await client.post(
                "/workflow/intake",
                json={"resume": resume_text, "job_description": job_description_text},
            )
            state = await client.get("/workflow")
        assert resp.status_code == 502
        assert "resume" in resp.json()["detail"]
        assert state.json()["step"] == "intake"

    @pytest.mark.asyncio
    async def test_clarification_flow(self, container, backend, resume_text, job_description_text):
        backend.structured["GapAnalysisPayload"] = GAP
        backend.structured["LearnedFacts"] = {"facts": ["Managed 8 engineers"]}
        _script_generation(backend)
        async with _client() as client:
            intake = await client.post(
                "/workflow/intake",
                json={"resume": resume_text, "job_description": job_description_text},
            )
            answer = await client.post("/workflow/clarification/answer", json={"content": "Eight people"})
            done = await client.post("/workflow/clarification/complete")
            profile = await client.get("/profile")

        assert intake.json()["step"] == "clarification"
        assert [m["role"] for m in answer.json()["messages"]] == ["assistant", "user", "assistant"]
        assert done.json()["step"] == "results"
        assert profile.json()["facts"] == ["Managed 8 engineers"]

    @pytest.mark.asyncio
    async def test_answer_without_clarification_is_409(self, container):
        async with _client() as client:
            resp = await client.post("/workflow/clarification/answer", json={"content": "hi"})
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_navigate(self, container):
        async with _client() as client:
            ok = await client.post("/workflow/navigate", json={"step": "profile"})
            bad = await client.post("/workflow/navigate", json={"step": "results"})
        assert ok.json()["step"] == "profile"
        assert bad.status_code == 409


class TestProfileRoutes:
    @pytest.mark.asyncio
    async def test_save_and_edit_profile(self, container, kv_store):
        async with _client() as client:
            saved = await client.put("/profile", json={"master_resume": "# Me", "facts": ["a"]})
            added = await client.post("/profile/facts", json={"fact": "b"})
            removed = await client.delete("/profile/facts/0")
            missing = await client.delete("/profile/facts/9")
            prefs = await client.put(
                "/profile/search-preferences",
                json={"roles": "SRE", "work_modes": ["On-site", "Moon"]},
            )

        assert saved.json()["persisted"] is True
        assert added.json()["facts"] == ["a", "b"]
        assert removed.json()["facts"] == ["b"]
        assert missing.status_code == 404
        assert prefs.json()["search_preferences"]["work_modes"] == ["On-site"]
        assert kv_store.get("resumate_profile_v3") is not None


class TestJobRoutes:
    @pytest.mark.asyncio
    async def test_search_and_select(self, container, backend):
        backend.structured["JobSearchPayload"] = {
            "jobs": [{"title": "SRE", "company": "Hooli", "match_score": 88, "url": "https://h.test"}]
        }
        async with _client() as client:
            await client.put("/profile", json={"master_resume": "# Master"})
            found = await client.post("/jobs/search")
            job = found.json()[0]
            selected = await client.post("/jobs/select", json=job)

        assert found.status_code == 200
        assert job["match_score"] == 88
        data = selected.json()
        assert data["step"] == "intake"
        assert data["job_context"]["resume"] == "# Master"
        assert data["job_context"]["job_description"].startswith("SRE at Hooli")

    @pytest.mark.asyncio
    async def test_search_timeout_is_504(self, container, backend):
        backend.structured["JobSearchPayload"] = {"jobs": []}
        backend.delays["JobSearchPayload"] = 5.0
        async with _client() as client:
            resp = await client.post("/jobs/search", json={"preferences": {"roles": "SRE"}})
        assert resp.status_code == 504
        assert "timed out" in resp.json()["detail"]
