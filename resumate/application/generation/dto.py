"""Generation pipeline DTOs."""

from pydantic import BaseModel, model_validator

from resumate.domain.entities.workflow_state import GeneratedContent


class PipelineResult(BaseModel):
    """Outcome of one pipeline run: content on success, the failed stage otherwise."""

    ok: bool
    content: GeneratedContent | None = None
    failed_stage: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _content_iff_ok(self) -> "PipelineResult":
        if self.ok and self.content is None:
            raise ValueError("successful result needs content")
        if not self.ok and self.content is not None:
            raise ValueError("failed result must not carry content")
        return self

    @classmethod
    def success(cls, content: GeneratedContent) -> "PipelineResult":
        return cls(ok=True, content=content)

    @classmethod
    def failure(cls, stage: str, error: str) -> "PipelineResult":
        return cls(ok=False, failed_stage=stage, error=error)
