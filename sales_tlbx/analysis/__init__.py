"""Analysis modules: descriptive statistics, correlation and OLS regression."""

from .correlation_analyzer import CorrelationAnalyzer, CorrelationResult, pair_correlation
from .descriptive_stats import ColumnStats, DescriptiveStatsAnalyzer, DescriptiveStatsResult
from .ols_regression import RegressionAnalyzer, RegressionResult, fit_regression, validate_selection
from .trained_model import ModelResults, TrainedModel


__all__ = [
    "ColumnStats",
    "CorrelationAnalyzer",
    "CorrelationResult",
    "DescriptiveStatsAnalyzer",
    "DescriptiveStatsResult",
    "ModelResults",
    "RegressionAnalyzer",
    "RegressionResult",
    "TrainedModel",
    "fit_regression",
    "pair_correlation",
    "validate_selection",
]
