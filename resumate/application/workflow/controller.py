"""Workflow controller - the step state machine behind every user action.

Intake → (analysis) → Clarification? → Generating → Results, with free
navigation to Profile and JobSearch. The controller is the only place the
current step changes.
"""

import logging

from resumate.application.analysis.gate import AnalysisGate
from resumate.application.generation.dto import PipelineResult
from resumate.application.generation.pipeline import GenerationPipeline
from resumate.application.learning.fact_extractor import FactExtractor
from resumate.application.search.runner import JobSearchRunner
from resumate.application.workflow.clarification import ClarificationSession
from resumate.application.workflow.dto import WorkflowSnapshot
from resumate.domain.entities.profile import JobOpportunity, SearchPreferences, UserProfile
from resumate.domain.entities.workflow_state import (
    AnalysisResult,
    GeneratedContent,
    JobContext,
    WorkflowStep,
)
from resumate.domain.errors import SearchTimeoutError, ValidationFailure, WorkflowStateError
from resumate.domain.services.knowledge import merge_facts
from resumate.infrastructure.persistence.profile_store import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_MIN_INPUT_CHARS = 50

# Steps reachable from anywhere through the navigation bar.
NAVIGABLE_STEPS = frozenset({WorkflowStep.INTAKE, WorkflowStep.PROFILE, WorkflowStep.JOB_SEARCH})


def combine_context(additional_context: str, facts: list[str]) -> str:
    """User-typed context followed by every known fact."""
    return f"{additional_context}\n\nKNOWN FACTS:\n" + "\n".join(facts)


def job_description_from(job: JobOpportunity) -> str:
    """Seed text for intake when a search result is selected."""
    lines = [f"{job.title} at {job.company}"]
    if job.location:
        lines.append(f"Location: {job.location}")
    if job.salary:
        lines.append(f"Salary: {job.salary}")
    lines.append(f"URL: {job.url or ''}")
    return "\n".join(lines)


class WorkflowController:
    """Single source of truth for where the user is and what has been produced."""

    def __init__(
        self,
        profile_store: ProfileStore,
        analysis_gate: AnalysisGate,
        pipeline: GenerationPipeline,
        fact_extractor: FactExtractor,
        search_runner: JobSearchRunner,
        min_input_chars: int = DEFAULT_MIN_INPUT_CHARS,
    ) -> None:
        self._profiles = profile_store
        self._gate = analysis_gate
        self._pipeline = pipeline
        self._extractor = fact_extractor
        self._runner = search_runner
        self._min_input_chars = min_input_chars

        self._step = WorkflowStep.INTAKE
        self.profile: UserProfile = profile_store.load()
        self.job_context = JobContext()
        self.analysis: AnalysisResult | None = None
        self.content: GeneratedContent | None = None
        self.clarification: ClarificationSession | None = None
        self.opportunities: list[JobOpportunity] = []
        self.loading = False
        self.status_text = ""
        self.last_error: str | None = None

    @property
    def step(self) -> WorkflowStep:
        return self._step

    def _transition(self, step: WorkflowStep) -> None:
        if step is not self._step:
            logger.info("Workflow step %s -> %s", self._step.value, step.value)
        self._step = step

    def _set_status(self, text: str) -> None:
        self.status_text = text

    def _begin(self, status: str) -> None:
        if self.loading:
            raise WorkflowStateError("Another action is still running")
        self.loading = True
        self.last_error = None
        self._set_status(status)

    def _end(self) -> None:
        self.loading = False
        self.status_text = ""

    def _validate_intake(self, resume: str, job_description: str) -> None:
        if len(resume.strip()) <= self._min_input_chars:
            raise ValidationFailure(
                "resume", f"Resume must be longer than {self._min_input_chars} characters"
            )
        if len(job_description.strip()) <= self._min_input_chars:
            raise ValidationFailure(
                "job_description",
                f"Job description must be longer than {self._min_input_chars} characters",
            )

    # --- Intake and generation ---

    async def submit_intake(self, resume: str, job_description: str) -> WorkflowStep:
        """Analyze the gap, then clarify or generate directly."""
        self._validate_intake(resume, job_description)
        self._begin("Checking your knowledge base & analyzing the gap...")
        try:
            self.job_context = JobContext(resume=resume, job_description=job_description)
            self.analysis = None
            self.content = None
            self.clarification = None

            analysis = await self._gate.analyze(resume, job_description, list(self.profile.facts))
            self.analysis = analysis
            if analysis.requires_clarification:
                self.clarification = ClarificationSession(analysis)
                self._transition(WorkflowStep.CLARIFICATION)
            else:
                await self._perform_generation("")
        finally:
            self._end()
        return self._step

    def answer_clarification(self, content: str) -> None:
        """Append a user answer to the running clarification dialogue."""
        if self.clarification is None:
            raise WorkflowStateError("No clarification in progress")
        self.clarification.answer(content)

    async def complete_clarification(
        self,
        context: str | None = None,
        transcript: str | None = None,
    ) -> WorkflowStep:
        """Generate with the clarification answers, then learn facts from the dialogue.

        context and transcript default to what the session recorded.
        """
        session = self.clarification
        if session is None:
            raise WorkflowStateError("No clarification in progress")
        additional = context if context is not None else session.user_context()
        dialogue = transcript if transcript is not None else session.transcript()

        self._begin("Preparing generation...")
        try:
            self.clarification = None
            await self._perform_generation(additional)
        finally:
            self._end()

        # Runs after the pipeline finished; never touches the published results.
        await self._learn_from(dialogue)
        return self._step

    async def _perform_generation(self, additional_context: str) -> PipelineResult:
        self.job_context = self.job_context.model_copy(update={"additional_context": additional_context})
        self._transition(WorkflowStep.GENERATING)
        ctx = self.job_context
        try:
            result = await self._pipeline.generate(
                ctx.resume,
                ctx.job_description,
                combine_context(additional_context, self.profile.facts),
                on_status=self._set_status,
            )
        except Exception as e:  # noqa: BLE001
            logger.exception("Generation pipeline crashed")
            result = PipelineResult.failure("pipeline", str(e) or type(e).__name__)

        if result.ok:
            self.content = result.content
            self._transition(WorkflowStep.RESULTS)
        else:
            self.content = None
            self.last_error = (
                f"Generation failed at the {result.failed_stage} stage: {result.error}. "
                "Please submit again."
            )
            self._transition(WorkflowStep.INTAKE)
        return result

    async def _learn_from(self, transcript: str) -> None:
        try:
            facts = await self._extractor.extract(transcript)
            if not facts:
                return
            self.profile = self._profiles.learn_facts(facts)
            logger.info("Learned facts from clarification: %s", facts)
        except Exception:  # noqa: BLE001
            logger.exception("Learning from clarification failed")

    # --- Navigation ---

    def navigate(self, step: WorkflowStep) -> WorkflowStep:
        """Free navigation; the job context is kept."""
        if step not in NAVIGABLE_STEPS:
            raise WorkflowStateError(f"Cannot navigate directly to {step.value}")
        self._transition(step)
        return self._step

    def restart(self) -> WorkflowStep:
        """Back to intake, keeping the current resume and job description."""
        self.clarification = None
        self.last_error = None
        self._transition(WorkflowStep.INTAKE)
        return self._step

    def select_opportunity(self, job: JobOpportunity) -> JobContext:
        """Seed a new intake from a search result, re-based on the master resume."""
        self.job_context = JobContext(
            resume=self.profile.master_resume,
            job_description=job_description_from(job),
        )
        self.analysis = None
        self.clarification = None
        self._transition(WorkflowStep.INTAKE)
        return self.job_context

    # --- Profile ---

    def save_profile(self, profile: UserProfile) -> bool:
        """Keep the profile in memory and persist it (best effort)."""
        self.profile = profile
        return self._profiles.save(profile)

    def add_fact(self, fact: str) -> UserProfile:
        text = fact.strip()
        if not text:
            return self.profile
        facts = merge_facts(self.profile.facts, [text])
        if facts != self.profile.facts:
            self.save_profile(self.profile.model_copy(update={"facts": facts}))
        return self.profile

    def remove_fact(self, index: int) -> UserProfile:
        if not 0 <= index < len(self.profile.facts):
            raise IndexError(f"No fact at index {index}")
        facts = [f for i, f in enumerate(self.profile.facts) if i != index]
        self.save_profile(self.profile.model_copy(update={"facts": facts}))
        return self.profile

    def save_search_preferences(self, preferences: SearchPreferences) -> UserProfile:
        self.save_profile(self.profile.model_copy(update={"search_preferences": preferences}))
        return self.profile

    # --- Discovery ---

    async def run_search(
        self,
        profile: UserProfile | None = None,
        preferences: SearchPreferences | None = None,
    ) -> list[JobOpportunity]:
        """Run the job sweep. SearchTimeoutError propagates; retry by calling again."""
        self._begin("Scanning job boards...")
        self._transition(WorkflowStep.JOB_SEARCH)
        self.opportunities = []
        try:
            jobs = await self._runner.search(profile or self.profile, preferences)
        except SearchTimeoutError as e:
            self.last_error = str(e)
            raise
        finally:
            self._end()
        self.opportunities = jobs
        return jobs

    def snapshot(self) -> WorkflowSnapshot:
        """Everything the presentation layer needs to render the current step."""
        return WorkflowSnapshot(
            step=self._step,
            loading=self.loading,
            status_text=self.status_text,
            job_context=self.job_context,
            analysis=self.analysis,
            content=self.content if self._step is WorkflowStep.RESULTS else None,
            messages=self.clarification.messages if self.clarification else [],
            opportunities=list(self.opportunities),
            last_error=self.last_error,
        )
