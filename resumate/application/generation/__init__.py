"""Generation application layer."""

from resumate.application.generation.dto import PipelineResult
from resumate.application.generation.pipeline import GenerationPipeline

__all__ = ["GenerationPipeline", "PipelineResult"]
