"""Fitted linear model value objects and prediction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from sales_tlbx.errors import DimensionMismatchError


@dataclass(frozen=True)
class TrainedModel:
    r"""Immutable linear model :math:`\hat{y} = b_0 + \sum_j b_j x_j`.

    ``coefficients[j]`` belongs to ``independent_vars[j]``; this order is fixed at
    fit time and every prediction input is read in it. Retraining produces a new
    instance instead of changing this one.
    """

    dependent_var: str
    independent_vars: tuple[str, ...]
    intercept: float
    coefficients: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.coefficients) != len(self.independent_vars):
            raise ValueError(
                f"Got {len(self.coefficients)} coefficients for {len(self.independent_vars)} independent variables.",
            )

    @property
    def k(self) -> int:
        """Number of independent variables."""
        return len(self.independent_vars)

    @property
    def coefficient_map(self) -> dict[str, float]:
        return dict(zip(self.independent_vars, self.coefficients, strict=True))

    def predict(self, values: Sequence[float]) -> float:
        """Predict the dependent variable from one value per independent variable.

        Args:
            values: Inputs in the order of ``independent_vars``.

        Raises:
            DimensionMismatchError: If ``len(values) != k``.
            ValueError: If any input is not a finite number.
        """
        values = list(values)
        if len(values) != self.k:
            raise DimensionMismatchError(self.independent_vars, len(values))
        x = np.asarray(values, dtype=float)
        if not np.isfinite(x).all():
            raise ValueError(f"Prediction inputs must be finite numbers, got {values}.")
        return float(self.intercept + np.dot(np.asarray(self.coefficients, dtype=float), x))

    def predict_named(self, inputs: Mapping[str, float]) -> float:
        """Predict from ``{variable: value}``; extra keys are ignored."""
        missing = [v for v in self.independent_vars if v not in inputs]
        if missing:
            raise DimensionMismatchError(self.independent_vars, missing)
        return self.predict([inputs[v] for v in self.independent_vars])

    def predict_frame(self, df: pd.DataFrame) -> pd.Series:
        """Vectorized prediction for every row of ``df`` (NaN where an input is missing)."""
        missing = [v for v in self.independent_vars if v not in df.columns]
        if missing:
            raise DimensionMismatchError(self.independent_vars, missing)
        x = df.loc[:, list(self.independent_vars)].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
        y_hat = self.intercept + x @ np.asarray(self.coefficients, dtype=float)
        return pd.Series(y_hat, index=df.index, name=f"predicted_{self.dependent_var}")

    def equation(self, decimals: int = 4) -> str:
        """Human-readable fitted equation, e.g. ``sales = 3.0000 + 2.0000*ads - 1.0000*price``."""
        terms = [f"{self.intercept:.{decimals}f}"]
        for name, coef in zip(self.independent_vars, self.coefficients, strict=True):
            sign = "-" if coef < 0 else "+"
            terms.append(f"{sign} {abs(coef):.{decimals}f}*{name}")
        return f"{self.dependent_var} = " + " ".join(terms)


@dataclass(frozen=True)
class ModelResults:
    r"""In-sample evaluation snapshot of a :class:`TrainedModel`.

    Key equations (with :math:`n` clean rows and :math:`k` predictors):

    - :math:`R^2 = 1 - \frac{SS_{res}}{SS_{tot}}`
    - :math:`\bar{R}^2 = 1 - (1 - R^2)\frac{n-1}{n-k-1}`
    - :math:`\text{RMSE} = \sqrt{\frac{SS_{res}}{n}}`
    """

    coefficients: tuple[float, ...]
    intercept: float
    r_squared: float
    r_squared_adjusted: float
    rmse: float
    n_obs: int

    def __repr__(self) -> str:
        def fmt(value: float, decimals: int = 3) -> str:
            return f"{value:.{decimals}f}"

        coefs = ", ".join(fmt(c) for c in self.coefficients)
        return (
            "ModelResults("
            f"intercept={fmt(self.intercept)}, "
            f"coefficients=[{coefs}], "
            f"r2={fmt(self.r_squared)}, "
            f"adj_r2={fmt(self.r_squared_adjusted)}, "
            f"rmse={fmt(self.rmse)}, "
            f"n={self.n_obs})"
        )
