"""Pure domain services."""

from resumate.domain.services.knowledge import merge_facts

__all__ = ["merge_facts"]
