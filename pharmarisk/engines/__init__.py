"""Core scoring engines."""

from pharmarisk.engines.batch_risk_scorer import BatchRiskScorer
from pharmarisk.engines.complaint_pattern_analyzer import ComplaintPatternAnalyzer
from pharmarisk.engines.price_anomaly_scorer import PriceAnomalyScorer
from pharmarisk.engines.price_strategies import (
    IqrStrategy,
    IsolationDepthStrategy,
    PriceAnomalyStrategy,
    StrategyKind,
    ZScoreSigmoidStrategy,
    build_strategy,
)

__all__ = [
    "BatchRiskScorer",
    "ComplaintPatternAnalyzer",
    "PriceAnomalyScorer",
    "PriceAnomalyStrategy",
    "StrategyKind",
    "IsolationDepthStrategy",
    "ZScoreSigmoidStrategy",
    "IqrStrategy",
    "build_strategy",
]
