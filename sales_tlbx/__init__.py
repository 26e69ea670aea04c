"""Sales analytics toolbox: coercion, statistics, correlation, OLS regression and prediction."""

from .analysis import (
    CorrelationAnalyzer,
    DescriptiveStatsAnalyzer,
    ModelResults,
    RegressionAnalyzer,
    TrainedModel,
    fit_regression,
)
from .data import SalesDataset, coerce_rows
from .errors import (
    AdvisoryBusyError,
    AdvisoryFailure,
    DimensionMismatchError,
    EmptyDatasetError,
    InsufficientDataError,
    SalesToolboxError,
    SingularMatrixError,
    ZeroVarianceError,
)
from .workbench import SalesWorkbench, WorkbenchState


__all__ = [
    "AdvisoryBusyError",
    "AdvisoryFailure",
    "CorrelationAnalyzer",
    "DescriptiveStatsAnalyzer",
    "DimensionMismatchError",
    "EmptyDatasetError",
    "InsufficientDataError",
    "ModelResults",
    "RegressionAnalyzer",
    "SalesDataset",
    "SalesToolboxError",
    "SalesWorkbench",
    "SingularMatrixError",
    "TrainedModel",
    "WorkbenchState",
    "ZeroVarianceError",
    "coerce_rows",
    "fit_regression",
]
