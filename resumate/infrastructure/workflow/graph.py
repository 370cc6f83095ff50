"""LangGraph pipeline - tailored resume → cover letter → outreach."""

from collections.abc import Callable
from typing import Literal

from langgraph.graph import END, START, StateGraph

from resumate.domain.entities.pipeline_state import PipelineState
from resumate.domain.ports.llm import GenerationPort
from resumate.infrastructure.agents.cover_letter_writer import cover_letter_node
from resumate.infrastructure.agents.outreach import outreach_node
from resumate.infrastructure.agents.resume_writer import resume_writer_node


def _route_after_stage(state: PipelineState) -> Literal["abort", "next"]:
    """Route: failed aborting stage → END, else → next stage."""
    return "abort" if state.get("failed_stage") else "next"


def build_pipeline_graph(
    backend: GenerationPort,
    model: str | None = None,
    on_status: Callable[[str], None] | None = None,
) -> StateGraph:
    """Build pipeline graph with injected dependencies."""

    async def resume_wrapper(state: PipelineState) -> PipelineState:
        return await resume_writer_node(state, backend, model, on_status=on_status)

    async def cover_letter_wrapper(state: PipelineState) -> PipelineState:
        return await cover_letter_node(state, backend, model, on_status=on_status)

    async def outreach_wrapper(state: PipelineState) -> PipelineState:
        return await outreach_node(state, backend, model, on_status=on_status)

    builder = StateGraph(PipelineState)
    builder.add_node("resume", resume_wrapper)
    builder.add_node("cover_letter", cover_letter_wrapper)
    builder.add_node("outreach", outreach_wrapper)

    builder.add_edge(START, "resume")
    builder.add_conditional_edges(
        "resume",
        _route_after_stage,
        path_map={"abort": END, "next": "cover_letter"},
    )
    builder.add_conditional_edges(
        "cover_letter",
        _route_after_stage,
        path_map={"abort": END, "next": "outreach"},
    )
    builder.add_edge("outreach", END)

    return builder


def compile_pipeline_graph(builder: StateGraph):
    """Compile graph. No checkpointer: a pipeline run is never resumed."""
    return builder.compile()
