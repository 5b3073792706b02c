"""Multi-strategy framework detection."""

from .aggregator import (
    AnalysisReport,
    DetectionResult,
    DivergenceFlags,
    StrategyFailure,
    analyze,
    compute_divergence,
    reduce_frameworks,
    summarize,
)
from .simulation import RestoreSimulator
from .strategies import STRATEGIES, detect_by_enumeration, detect_from_manifest, detect_from_pattern_sets

__all__ = [
    "AnalysisReport",
    "DetectionResult",
    "DivergenceFlags",
    "RestoreSimulator",
    "STRATEGIES",
    "StrategyFailure",
    "analyze",
    "compute_divergence",
    "detect_by_enumeration",
    "detect_from_manifest",
    "detect_from_pattern_sets",
    "reduce_frameworks",
    "summarize",
]
