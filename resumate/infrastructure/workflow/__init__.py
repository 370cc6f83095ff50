"""Generation pipeline graph - LangGraph."""

from resumate.infrastructure.workflow.graph import (
    build_pipeline_graph,
    compile_pipeline_graph,
)

__all__ = ["build_pipeline_graph", "compile_pipeline_graph"]
