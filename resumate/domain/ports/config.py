"""Config Port - interface for configuration access."""

from typing import Protocol

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Generation backend selection."""

    provider: str = "gemini"  # "gemini" | "openai_compatible"


class GeminiConfig(BaseModel):
    """Google Gemini connection configuration."""

    api_key: str = ""
    # Pro-class model for writing and reasoning, flash-class for the job sweep.
    writer_model: str = "gemini-2.5-pro"
    search_model: str = "gemini-2.5-flash"
    timeout: int = 120


class OpenAICompatibleConfig(BaseModel):
    """LM Studio, vLLM, Ollama /v1, OpenAI - OpenAI-compatible API."""

    base_url: str = "http://localhost:1234/v1"
    api_key: str = ""
    timeout: int = 120
    # Optional: max tokens to generate. None = server/model default.
    max_tokens: int | None = None


class ModelConfig(BaseModel):
    """Model IDs for the OpenAI-compatible provider."""

    writer: str = "default"
    search: str = "default"


class PersistenceConfig(BaseModel):
    """Persistence settings."""

    store_path: str = "output/store.json"


class WorkflowConfig(BaseModel):
    """Workflow limits."""

    # Resume and job description need more than this many characters.
    min_input_chars: int = Field(default=50, ge=0)
    search_deadline_seconds: float = Field(default=45.0, gt=0)
    max_questions: int = Field(default=3, ge=1)


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:5173"]


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    llm: LLMConfig = LLMConfig()
    gemini: GeminiConfig = GeminiConfig()
    openai_compatible: OpenAICompatibleConfig = OpenAICompatibleConfig()
    models: ModelConfig = ModelConfig()
    persistence: PersistenceConfig = PersistenceConfig()
    workflow: WorkflowConfig = WorkflowConfig()
    security: SecurityConfig = SecurityConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3

    @property
    def writer_model(self) -> str:
        """Model used for analysis, documents and fact extraction."""
        if self.llm.provider == "openai_compatible":
            return self.models.writer
        return self.gemini.writer_model

    @property
    def search_model(self) -> str:
        """Model used for the job sweep."""
        if self.llm.provider == "openai_compatible":
            return self.models.search
        return self.gemini.search_model


class ConfigPort(Protocol):
    """Interface for configuration providers."""

    def get_config(self) -> AppConfig:
        """Get the full application configuration."""
        ...
