"""Multivariate OLS fitting with in-sample evaluation.

The fit follows classical ordinary least squares with an intercept column and
reports :math:`R^2`, adjusted :math:`R^2` and RMSE on the same clean rows used
for fitting. Degenerate inputs are rejected up front:

- too few clean rows for the number of predictors (:class:`InsufficientDataError`),
- collinear predictors (:class:`SingularMatrixError`),
- a constant dependent variable (:class:`ZeroVarianceError`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.metrics import mean_squared_error, r2_score

from sales_tlbx.data.sales_dataset import SalesDataset
from sales_tlbx.errors import InsufficientDataError, SingularMatrixError, ZeroVarianceError

from .base_analyser import BaseAnalyser
from .trained_model import ModelResults, TrainedModel


logger = logging.getLogger(__name__)

_INTERCEPT_COL = "const"


@dataclass(frozen=True, eq=False)
class RegressionResult:
    """Packaged OLS fit: the trained model, its metrics and the data behind them."""

    model: TrainedModel
    metrics: ModelResults
    design_matrix: pd.DataFrame
    """Clean-row design matrix; column 0 is the intercept (named ``const`` unless a predictor uses that name)."""
    y: pd.Series
    predictions: pd.Series
    residuals: pd.Series
    ols: sm.regression.linear_model.RegressionResultsWrapper

    @property
    def r2(self) -> float:
        """Coefficient of determination :math:`R^2` of the fitted model."""
        return self.metrics.r_squared

    @property
    def adj_r2(self) -> float:
        """Adjusted :math:`R^2` correcting for the number of regressors."""
        return self.metrics.r_squared_adjusted

    @property
    def rmse(self) -> float:
        """Root mean squared error (RMSE) of the in-sample residuals."""
        return self.metrics.rmse

    @property
    def n_obs(self) -> int:
        return self.metrics.n_obs

    def summary(self) -> str:
        """statsmodels summary table as text."""
        return str(self.ols.summary())


def validate_selection(
    dataset: SalesDataset,
    dependent_var: str,
    independent_vars: Iterable[str],
) -> tuple[str, tuple[str, ...]]:
    """Check that the chosen variables can be regressed on each other.

    Raises:
        KeyError: If a variable is not a dataset header.
        ValueError: If a variable is not numeric, no independent variable is given,
            or the independents repeat or contain the dependent variable.
    """
    independents = tuple(independent_vars)
    if not dependent_var:
        raise ValueError("Select a dependent variable.")
    if not independents:
        raise ValueError("Select at least one independent variable.")

    for var in (dependent_var, *independents):
        if var not in dataset.headers:
            raise KeyError(f"Unknown column '{var}'.")
        if var not in dataset.numeric_headers:
            raise ValueError(f"Column '{var}' is not numeric.")

    if dependent_var in independents:
        raise ValueError(f"Dependent variable '{dependent_var}' cannot also be independent.")
    if len(set(independents)) != len(independents):
        raise ValueError(f"Independent variables must be distinct, got {list(independents)}.")
    return dependent_var, independents


def intercept_column(independent_vars: Iterable[str]) -> str:
    """Name for the intercept column that no predictor already uses."""
    taken = set(independent_vars)
    name = _INTERCEPT_COL
    while name in taken:
        name = f"_{name}"
    return name


def clean_rows(dataset: SalesDataset, variables: Iterable[str]) -> pd.DataFrame:
    """Rows where every listed variable is a valid number."""
    return dataset.numeric_frame.loc[:, list(variables)].dropna(axis=0, how="any")


def fit_regression(
    dataset: SalesDataset,
    dependent_var: str,
    independent_vars: Iterable[str],
) -> RegressionResult:
    """Fit ``dependent_var ~ independent_vars`` by OLS on the clean rows of ``dataset``.

    Args:
        dataset: Coerced dataset.
        dependent_var: Numeric column to predict.
        independent_vars: Numeric predictor columns; their order fixes the
            coefficient order of the returned model.

    Returns:
        RegressionResult bundling the :class:`TrainedModel` and in-sample :class:`ModelResults`.

    Raises:
        InsufficientDataError: Fewer than ``k + 2`` clean rows.
        SingularMatrixError: Predictors (with the intercept) are linearly dependent,
            or the fit produced non-finite coefficients.
        ZeroVarianceError: The dependent variable is constant over the clean rows.
    """
    dependent_var, independents = validate_selection(dataset, dependent_var, independent_vars)
    variables = (dependent_var, *independents)

    clean = clean_rows(dataset, variables)
    n, k = int(clean.shape[0]), len(independents)
    if n < k + 2:
        raise InsufficientDataError(n_clean=n, n_required=k + 2, variables=variables)

    y = clean[dependent_var].astype(float)
    design = clean.loc[:, list(independents)].astype(float)
    design.insert(0, intercept_column(independents), 1.0)

    if np.linalg.matrix_rank(design.to_numpy()) < design.shape[1]:
        raise SingularMatrixError(independents, detail="design matrix is rank deficient")

    ols = sm.OLS(y, design).fit()
    params = ols.params
    if not np.isfinite(params.to_numpy()).all():
        raise SingularMatrixError(independents, detail="non-finite coefficients")

    if y.nunique() < 2:
        raise ZeroVarianceError(dependent_var, n)

    predictions = pd.Series(ols.fittedvalues, index=clean.index, name=f"predicted_{dependent_var}")
    residuals = (y - predictions).rename("residual")
    r_squared = float(r2_score(y, predictions))
    r_squared_adjusted = 1.0 - (1.0 - r_squared) * (n - 1) / (n - k - 1)
    rmse = float(np.sqrt(mean_squared_error(y, predictions)))

    # Column 0 is the intercept; the rest follow `independents`.
    intercept = float(params.iloc[0])
    coefficients = tuple(float(c) for c in params.iloc[1:])
    model = TrainedModel(
        dependent_var=dependent_var,
        independent_vars=independents,
        intercept=intercept,
        coefficients=coefficients,
    )
    metrics = ModelResults(
        coefficients=coefficients,
        intercept=intercept,
        r_squared=r_squared,
        r_squared_adjusted=float(r_squared_adjusted),
        rmse=rmse,
        n_obs=n,
    )
    logger.info("Fitted %s on %d rows: %r", model.equation(), n, metrics)

    return RegressionResult(
        model=model,
        metrics=metrics,
        design_matrix=design,
        y=y,
        predictions=predictions,
        residuals=residuals,
        ols=ols,
    )


class RegressionAnalyzer(BaseAnalyser):
    """Analyzer wrapper around :func:`fit_regression`.

    Example:
        >>> from sales_tlbx.data import SalesDataset
        >>> ds = SalesDataset.from_csv("sales.csv")
        >>> res = ds.make_regression_analyzer("sales", ["ads", "price"]).fit().result()
        >>> res.metrics.r_squared, res.model.predict([12.0, 9.5])
    """

    def __init__(self, dataset: SalesDataset, dependent_var: str, independent_vars: Iterable[str]):
        self._dataset = dataset
        self._dependent_var = dependent_var
        self._independent_vars = tuple(independent_vars)
        self._result: RegressionResult | None = None

    def fit(self) -> Self:
        self._result = fit_regression(self._dataset, self._dependent_var, self._independent_vars)
        return self

    def result(self) -> RegressionResult:
        if self._result is None:
            raise ValueError("Call fit() first")
        return self._result
