"""Error taxonomy shared by all layers."""


class ResumateError(Exception):
    """Base class for application errors."""


class BackendUnavailableError(ResumateError):
    """Generation backend failed: network, HTTP status or unparseable payload."""


class SearchTimeoutError(ResumateError, TimeoutError):
    """Job search did not finish before its deadline. Safe to retry."""

    def __init__(self, deadline: float) -> None:
        self.deadline = deadline
        super().__init__(
            f"Search timed out after {deadline:g}s. The network might be slow, try again."
        )


class ValidationFailure(ResumateError, ValueError):
    """Input rejected before any backend call."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class PersistenceError(ResumateError):
    """Key-value store read or write failed."""


class WorkflowStateError(ResumateError):
    """Action is not allowed in the current workflow step."""
