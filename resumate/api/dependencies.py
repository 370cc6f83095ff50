"""FastAPI dependencies - thin getters over the DI container."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from resumate.api.container import get_container
from resumate.application.workflow.controller import WorkflowController
from resumate.domain.ports.config import AppConfig
from resumate.domain.ports.llm import GenerationPort

limiter = Limiter(key_func=get_remote_address)


def get_config() -> AppConfig:
    """Config of the active container."""
    return get_container().config


def get_backend() -> GenerationPort:
    return get_container().backend


def get_workflow_controller() -> WorkflowController:
    """The process-wide workflow controller."""
    return get_container().workflow_controller
