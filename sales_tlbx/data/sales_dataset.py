"""Typed, immutable container for coerced sales records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import numpy as np
import pandas as pd

from .views import DatasetView


if TYPE_CHECKING:
    from sales_tlbx.analysis.correlation_analyzer import CorrelationAnalyzer
    from sales_tlbx.analysis.descriptive_stats import DescriptiveStatsAnalyzer
    from sales_tlbx.analysis.ols_regression import RegressionAnalyzer
    from sales_tlbx.utils.config import AnalysisConfig


@dataclass(frozen=True, eq=False)
class SalesDataset:
    """Rows, headers and numeric classification produced by type coercion.

    Instances are never mutated: loading new data creates a new dataset. ``df``
    keeps rows in insertion order; numeric columns hold floats, mixed columns hold
    floats for parsed cells and the original text elsewhere, and missing cells are
    ``NaN``.

    Example:
        >>> ds = SalesDataset.from_records(
        ...     [{"month": "Jan", "ads": "10", "sales": "120"}, {"month": "Feb", "ads": "12", "sales": "131"}],
        ... )
        >>> ds.numeric_headers
        ('ads', 'sales')
        >>> stats = ds.make_descriptive_stats_analyzer().fit().result()
    """

    df: pd.DataFrame
    headers: tuple[str, ...]
    numeric_headers: tuple[str, ...]

    def __post_init__(self) -> None:
        unknown = [h for h in self.numeric_headers if h not in self.headers]
        if unknown:
            raise ValueError(f"Numeric headers {unknown} are not dataset headers.")
        if list(self.df.columns) != list(self.headers):
            raise ValueError("DataFrame columns must match headers in order.")

    # ------------------------------------------------------------------ constructors
    @classmethod
    def from_records(cls, rows: Iterable[Mapping[str, object]] | pd.DataFrame) -> SalesDataset:
        """Coerce raw rows (or a raw-cell DataFrame) into a dataset."""
        from .coercion import coerce_rows

        return coerce_rows(rows)

    @classmethod
    def from_csv(cls, csv_path: str | Path, **read_kwargs: object) -> SalesDataset:
        """Load a CSV file with a header row and coerce its cells."""
        from .loaders import load_csv

        return load_csv(csv_path, **read_kwargs)

    @classmethod
    def from_excel(cls, xlsx_path: str | Path, sheet_name: str | int = 0) -> SalesDataset:
        """Load the given sheet (first by default) of an XLSX workbook."""
        from .loaders import load_excel

        return load_excel(xlsx_path, sheet_name=sheet_name)

    # ------------------------------------------------------------------ accessors
    @property
    def n_rows(self) -> int:
        return int(self.df.shape[0])

    @cached_property
    def numeric_frame(self) -> pd.DataFrame:
        """Numeric columns as ``float64``; every cell that is not a valid number is ``NaN``."""
        from .coercion import parse_number

        return pd.DataFrame(
            {h: self.df[h].map(parse_number).astype(float) for h in self.numeric_headers},
            index=self.df.index,
            columns=list(self.numeric_headers),
        )

    def valid_values(self, column: str) -> pd.Series:
        """Return the valid numbers of a numeric column (invalid cells dropped)."""
        if column not in self.numeric_headers:
            raise KeyError(f"Column '{column}' is not numeric.")
        return self.numeric_frame[column].dropna()

    def records(self, n: int | None = None) -> list[dict[str, object]]:
        """Return rows as plain dicts (``NaN`` mapped to ``None``), optionally the first ``n``."""
        from .coercion import is_missing

        frame = self.df if n is None else self.df.head(n)
        return [
            {k: None if is_missing(v) else (v.item() if isinstance(v, np.generic) else v) for k, v in row.items()}
            for row in frame.to_dict(orient="records")
        ]

    def view(
        self,
        columns: Iterable[str] | None = None,
        target_col: str | None = None,
        missing_strategy: Literal["keep", "drop"] = "keep",
    ) -> DatasetView:
        """Build an immutable numeric view for analyzers.

        Args:
            columns: Numeric columns to include (defaults to all numeric headers).
            target_col: Optional target column reference.
            missing_strategy: ``"keep"`` leaves ``NaN`` cells in place; ``"drop"`` removes
                rows with any ``NaN`` in the selected columns.
        """
        selected = list(columns) if columns is not None else list(self.numeric_headers)
        not_numeric = [c for c in selected if c not in self.numeric_headers]
        if not_numeric:
            raise KeyError(f"Columns {not_numeric} are not numeric headers.")
        if target_col is not None and target_col not in selected:
            raise KeyError(f"Target column '{target_col}' is not part of the view.")

        frame = self.numeric_frame.loc[:, selected]
        if missing_strategy == "drop":
            frame = frame.dropna(axis=0, how="any")
        elif missing_strategy != "keep":
            raise ValueError(f"Invalid missing_strategy='{missing_strategy}'. Use 'keep' or 'drop'.")

        return DatasetView(df=frame, numeric_cols=selected, target_col=target_col, n_rows=self.n_rows)

    # ------------------------------------------------------------------ analyzer factories
    def make_descriptive_stats_analyzer(self, columns: Iterable[str] | None = None) -> DescriptiveStatsAnalyzer:
        """Instantiate a descriptive statistics analyzer for this dataset."""
        from sales_tlbx.analysis.descriptive_stats import DescriptiveStatsAnalyzer

        return DescriptiveStatsAnalyzer(self.view(columns=columns))

    def make_correlation_analyzer(
        self,
        columns: Iterable[str] | None = None,
        target_col: str | None = None,
        config: AnalysisConfig | None = None,
    ) -> CorrelationAnalyzer:
        """Instantiate a correlation analyzer configured for this dataset."""
        from sales_tlbx.analysis.correlation_analyzer import CorrelationAnalyzer

        return CorrelationAnalyzer(self.view(columns=columns, target_col=target_col), config=config)

    def make_regression_analyzer(
        self,
        dependent_var: str,
        independent_vars: Iterable[str],
    ) -> RegressionAnalyzer:
        """Instantiate an OLS regression analyzer for the chosen variables."""
        from sales_tlbx.analysis.ols_regression import RegressionAnalyzer

        return RegressionAnalyzer(self, dependent_var=dependent_var, independent_vars=independent_vars)
