"""Tests for the LangGraph generation pipeline."""

import pytest

from resumate.domain.errors import BackendUnavailableError
from resumate.infrastructure.workflow import build_pipeline_graph, compile_pipeline_graph
from resumate.infrastructure.workflow.graph import _route_after_stage


class TestRouting:
    def test_failed_stage_aborts(self):
        assert _route_after_stage({"failed_stage": "resume"}) == "abort"

    def test_clean_state_continues(self):
        assert _route_after_stage({"tailored_resume": "x"}) == "next"


class TestPipelineGraph:
    @pytest.mark.asyncio
    async def test_runs_all_stages_in_order(self, backend):
        backend.text_replies = ["RESUME", "LETTER"]
        backend.structured["OutreachPayload"] = {"manager_info": "Ann", "draft_message": "Hi"}
        statuses = []

        graph = compile_pipeline_graph(build_pipeline_graph(backend, "pro", on_status=statuses.append))
        final = await graph.ainvoke({"resume": "r", "job_description": "j", "context": "c"})

        assert final["tailored_resume"] == "RESUME"
        assert final["cover_letter"] == "LETTER"
        assert final["outreach_message"] == "Hi"
        assert statuses == ["Drafting tailored resume...", "Writing cover letter...", "Finding hiring manager..."]
        assert [c["kind"] for c in backend.calls] == ["text", "text", "OutreachPayload"]

    @pytest.mark.asyncio
    async def test_resume_failure_stops_pipeline(self, backend):
        backend.text_replies = [BackendUnavailableError("down")]

        graph = compile_pipeline_graph(build_pipeline_graph(backend))
        final = await graph.ainvoke({"resume": "r", "job_description": "j", "context": ""})

        assert final["failed_stage"] == "resume"
        assert len(backend.calls) == 1

    @pytest.mark.asyncio
    async def test_cover_letter_failure_skips_outreach(self, backend):
        backend.text_replies = ["RESUME", BackendUnavailableError("down")]

        graph = compile_pipeline_graph(build_pipeline_graph(backend))
        final = await graph.ainvoke({"resume": "r", "job_description": "j", "context": ""})

        assert final["failed_stage"] == "cover_letter"
        assert backend.calls_for("OutreachPayload") == []
