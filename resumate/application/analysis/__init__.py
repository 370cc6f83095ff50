"""Analysis application layer."""

from resumate.application.analysis.gate import AnalysisGate

__all__ = ["AnalysisGate"]
