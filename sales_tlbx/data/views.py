"""Task-specific views over dataset content."""

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of numeric dataset content handed to analyzers.

    Attributes:
        df: Float dataframe; cells that are not valid numbers are ``NaN``.
        numeric_cols: Ordered list of numeric column names present in ``df``.
        target_col: Optional name of the target variable used for analysis.
        n_rows: Number of rows in the source dataset before any filtering.
    """

    df: pd.DataFrame
    """Float dataframe; cells that are not valid numbers are ``NaN``."""
    numeric_cols: list[str]
    target_col: str | None = None
    n_rows: int | None = None

    @property
    def features(self) -> pd.DataFrame:
        """Return view over numeric feature columns."""
        cols = self.numeric_cols or self.df.columns.tolist()
        return self.df.loc[:, cols]
