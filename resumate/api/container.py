"""Dependency Injection Container - centralized service management."""

from functools import cached_property

from resumate.application.analysis.gate import AnalysisGate
from resumate.application.generation.pipeline import GenerationPipeline
from resumate.application.learning.fact_extractor import FactExtractor
from resumate.application.search.runner import JobSearchRunner
from resumate.application.workflow.controller import WorkflowController
from resumate.domain.ports.config import AppConfig
from resumate.domain.ports.llm import GenerationPort
from resumate.domain.ports.store import KeyValueStore
from resumate.infrastructure.config import load_config
from resumate.infrastructure.persistence.kv_store import FileKeyValueStore, MemoryKeyValueStore
from resumate.infrastructure.persistence.profile_store import ProfileStore


class Container:
    """Dependency Injection Container with lazy initialization.

    All dependencies are created on first access and cached. Tests pass a
    config, backend or store to replace the real ones.

    Usage:
        container = Container()
        controller = container.workflow_controller
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        backend: GenerationPort | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        """Initialize container with optional overrides."""
        self._config_override = config
        self._backend_override = backend
        self._store_override = store

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override is not None:
            return self._config_override
        return load_config()

    @cached_property
    def backend(self) -> GenerationPort:
        """Generation adapter based on config provider."""
        if self._backend_override is not None:
            return self._backend_override
        if self.config.llm.provider == "openai_compatible":
            from resumate.infrastructure.llm.openai_compatible import OpenAICompatibleAdapter

            return OpenAICompatibleAdapter(self.config.openai_compatible, default_model=self.config.models.writer)

        from resumate.infrastructure.llm.gemini import GeminiAdapter

        return GeminiAdapter(self.config.gemini)

    @cached_property
    def kv_store(self) -> KeyValueStore:
        """Key-value substrate; empty store_path keeps everything in memory."""
        if self._store_override is not None:
            return self._store_override
        path = self.config.persistence.store_path.strip()
        if not path:
            return MemoryKeyValueStore()
        return FileKeyValueStore(path)

    @cached_property
    def profile_store(self) -> ProfileStore:
        return ProfileStore(self.kv_store)

    @cached_property
    def analysis_gate(self) -> AnalysisGate:
        return AnalysisGate(
            self.backend,
            model=self.config.writer_model,
            max_questions=self.config.workflow.max_questions,
        )

    @cached_property
    def generation_pipeline(self) -> GenerationPipeline:
        return GenerationPipeline(self.backend, model=self.config.writer_model)

    @cached_property
    def fact_extractor(self) -> FactExtractor:
        return FactExtractor(self.backend, model=self.config.writer_model)

    @cached_property
    def search_runner(self) -> JobSearchRunner:
        return JobSearchRunner(
            self.backend,
            model=self.config.search_model,
            deadline=self.config.workflow.search_deadline_seconds,
        )

    @cached_property
    def workflow_controller(self) -> WorkflowController:
        """One controller per process: single user, single device."""
        return WorkflowController(
            profile_store=self.profile_store,
            analysis_gate=self.analysis_gate,
            pipeline=self.generation_pipeline,
            fact_extractor=self.fact_extractor,
            search_runner=self.search_runner,
            min_input_chars=self.config.workflow.min_input_chars,
        )

    def reset(self) -> None:
        """Reset all cached instances (useful for testing)."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install a prepared container (tests, embedding)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None
