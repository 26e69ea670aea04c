"""Correlation analysis for numeric dataset columns."""

from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd
from scipy import stats

from sales_tlbx.data.views import DatasetView
from sales_tlbx.utils.config import AnalysisConfig, CorrelationMissing

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class CorrelationResult:
    """Correlation analysis outputs grouped for reporting.

    Attributes:
        matrix: Pearson correlation matrix (rows/cols = numeric columns in view order).
            Symmetric, diagonal exactly 1.0, NaN where a pair is undefined.
        feature_pairs: DataFrame with columns `feature_a`, `feature_b`, `correlation`,
            `abs_correlation`, `pair`; sorted by strongest absolute correlations.
        target_correlations: Optional DataFrame with columns `feature`, `correlation`
            for feature-vs-target correlations (sorted descending).
        missing_policy: How invalid cells were handled (``"pairwise"`` or ``"propagate"``).
    """

    matrix: pd.DataFrame
    feature_pairs: pd.DataFrame
    target_correlations: pd.DataFrame | None = None
    missing_policy: CorrelationMissing = "pairwise"

    def get(self, col_a: str, col_b: str) -> float:
        """Correlation for one column pair."""
        return float(self.matrix.loc[col_a, col_b])


def pair_correlation(a: pd.Series, b: pd.Series, missing: CorrelationMissing = "pairwise") -> float:
    """Pearson sample correlation of two aligned float columns.

    With ``missing="pairwise"`` only rows where both values are present are used.
    With ``missing="propagate"`` any ``NaN`` in either column yields ``NaN``.
    The result is ``NaN`` when fewer than two rows remain or either side is constant.
    """
    if missing == "propagate":
        if a.isna().any() or b.isna().any():
            return float("nan")
        x, y = a.to_numpy(dtype=float), b.to_numpy(dtype=float)
    else:
        joint = a.notna() & b.notna()
        x, y = a[joint].to_numpy(dtype=float), b[joint].to_numpy(dtype=float)

    if x.shape[0] < 2 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return float("nan")
    r = stats.pearsonr(x, y).statistic
    return float(np.clip(r, -1.0, 1.0))


class CorrelationAnalyzer(BaseAnalyser):
    """Analyzer for computing pairwise column correlations.

    Each unordered pair is computed once and mirrored, so the matrix is symmetric
    by construction.

    Example:
        >>> from sales_tlbx.data import SalesDataset
        >>> ds = SalesDataset.from_csv("sales.csv")
        >>> corr_res = ds.make_correlation_analyzer(target_col="sales").fit().result()
        >>> corr_res.matrix.loc["ads", "sales"]
        >>> corr_res.target_correlations.head()
    """

    def __init__(self, view: DatasetView, config: AnalysisConfig | None = None):
        """Initialize the correlation analyzer with a dataset view."""
        self._view = view
        self._config = config or AnalysisConfig()
        self._corr_mat: pd.DataFrame | None = None

    @property
    def missing_policy(self) -> CorrelationMissing:
        return self._config.correlation_missing

    def get_correlation_matrix(self) -> pd.DataFrame:
        """Compute the Pearson correlation matrix, one computation per unordered pair."""
        if self._corr_mat is None:
            cols = list(self._view.numeric_cols)
            frame = self._view.df
            values = np.eye(len(cols), dtype=float)
            for i, col_a in enumerate(cols):
                for j in range(i + 1, len(cols)):
                    r = pair_correlation(frame[col_a], frame[cols[j]], self.missing_policy)
                    values[i, j] = values[j, i] = r
            self._corr_mat = pd.DataFrame(values, index=cols, columns=cols)
        return self._corr_mat

    def get_top_correlated_pairs(self, n: int = 20) -> pd.DataFrame:
        """Return the strongest absolute Pearson correlations between column pairs.

        The symmetric matrix is reduced to its upper triangle (excluding the diagonal)
        with :func:`np.triu_indices`. Undefined (NaN) pairs are dropped.
        """
        corr_matrix = self.get_correlation_matrix()
        if corr_matrix.shape[0] < 2:
            return pd.DataFrame(columns=["feature_a", "feature_b", "correlation", "abs_correlation", "pair"])
        rows, cols = np.triu_indices(corr_matrix.shape[0], k=1)
        labels = corr_matrix.columns.to_numpy()

        # Built positionally so column names never collide with the output labels.
        pairs = (
            pd.DataFrame(
                {
                    "feature_a": labels[rows],
                    "feature_b": labels[cols],
                    "correlation": corr_matrix.to_numpy()[rows, cols],
                },
            )
            .dropna(subset=["correlation"])
            .assign(
                abs_correlation=lambda d: d.correlation.abs(),
                pair=lambda d: d.feature_a + " vs " + d.feature_b,
            )
            .sort_values("abs_correlation", ascending=False, kind="stable")
            .head(n)
            .reset_index(drop=True)
        )
        return pairs

    def get_target_correlations(self) -> pd.DataFrame:
        """Return correlations between each column and the configured target.

        Returns:
            DataFrame of features and their correlation with the target variable,
            sorted descending; undefined correlations are listed last.
        """
        if not self._view.target_col:
            raise ValueError("Dataset view has no target column configured.")

        corr_matrix = self.get_correlation_matrix()

        if self._view.target_col not in corr_matrix.index:
            raise ValueError(f"Target column '{self._view.target_col}' not found in data")

        return (
            corr_matrix.loc[self._view.target_col]
            .drop(self._view.target_col)
            .sort_values(ascending=False, na_position="last")
            .to_frame(name="correlation")
            .assign(feature=lambda d: d.index)
            .reset_index(drop=True)
        )

    def fit(self) -> Self:
        """Compute correlation matrix."""
        self.get_correlation_matrix()

        return self

    def result(self, *, top_n_pairs: int | None = None) -> CorrelationResult:
        if self._corr_mat is None:
            raise ValueError("Call fit() first")
        matrix = self.get_correlation_matrix()
        pairs = self.get_top_correlated_pairs(n=top_n_pairs or self._config.top_n_pairs)

        target_corr = (
            self.get_target_correlations() if self._view.target_col and self._view.target_col in matrix.index else None
        )

        return CorrelationResult(
            matrix=matrix,
            feature_pairs=pairs,
            target_correlations=target_corr,
            missing_policy=self.missing_policy,
        )
