"""Knowledge learning application layer."""

from resumate.application.learning.fact_extractor import FactExtractor

__all__ = ["FactExtractor"]
