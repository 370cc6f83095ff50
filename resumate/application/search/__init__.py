"""Job search application layer."""

from resumate.application.search.runner import JobSearchRunner

__all__ = ["JobSearchRunner"]
