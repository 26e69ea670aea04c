from .config import AnalysisConfig, CorrelationMissing
from .logging_config import configure_logging


__all__ = [
    "AnalysisConfig",
    "CorrelationMissing",
    "configure_logging",
]
