"""Descriptive statistics per numeric column."""

from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from typing import Self

import pandas as pd

from sales_tlbx.data.views import DatasetView

from .base_analyser import BaseAnalyser


STAT_NAMES: tuple[str, ...] = ("count", "min", "max", "mean", "median", "std")


@dataclass(frozen=True)
class ColumnStats:
    """Summary of the valid numbers of one column.

    ``std`` is the sample standard deviation (divisor ``n - 1``) and is ``NaN``
    when ``count == 1``.
    """

    count: int
    min: float
    max: float
    mean: float
    median: float
    std: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class DescriptiveStatsResult:
    """Per-column statistics keyed by numeric header.

    Columns without a single valid number are absent rather than zero-filled.
    """

    stats: Mapping[str, ColumnStats]
    n_rows: int

    def __getitem__(self, column: str) -> ColumnStats:
        return self.stats[column]

    def __contains__(self, column: object) -> bool:
        return column in self.stats

    def __iter__(self) -> Iterator[str]:
        return iter(self.stats)

    def __len__(self) -> int:
        return len(self.stats)

    @property
    def columns(self) -> list[str]:
        return list(self.stats)

    def to_frame(self) -> pd.DataFrame:
        """Metric x column table (rows ``count`` .. ``std``)."""
        return pd.DataFrame(
            {col: [getattr(s, name) for name in STAT_NAMES] for col, s in self.stats.items()},
            index=list(STAT_NAMES),
        )

    def to_records(self) -> dict[str, dict[str, float]]:
        """Plain nested dicts, e.g. for advisory payloads."""
        return {col: s.as_dict() for col, s in self.stats.items()}


def summarize(values: pd.Series) -> ColumnStats | None:
    """Compute :class:`ColumnStats` over the non-null entries of ``values``."""
    clean = values.dropna().astype(float)
    if clean.empty:
        return None
    vmin, vmax = float(clean.min()), float(clean.max())
    # Float summation can push the mean of near-identical values just outside [min, max].
    mean = min(max(float(clean.mean()), vmin), vmax)
    return ColumnStats(
        count=int(clean.shape[0]),
        min=vmin,
        max=vmax,
        mean=mean,
        median=float(clean.median()),
        std=float(clean.std(ddof=1)),
    )


class DescriptiveStatsAnalyzer(BaseAnalyser):
    """Count, min, max, mean, median and sample std for every numeric column.

    Example:
        >>> from sales_tlbx.data import SalesDataset
        >>> ds = SalesDataset.from_records([{"sales": "10"}, {"sales": "n/a"}, {"sales": "14"}])
        >>> res = ds.make_descriptive_stats_analyzer().fit().result()
        >>> res["sales"].count, res["sales"].mean
        (2, 12.0)
    """

    def __init__(self, view: DatasetView):
        self._view = view
        self._stats: dict[str, ColumnStats] | None = None

    def fit(self) -> Self:
        stats: dict[str, ColumnStats] = {}
        for col in self._view.numeric_cols:
            summary = summarize(self._view.df[col])
            if summary is not None:
                stats[col] = summary
        self._stats = stats
        return self

    def result(self) -> DescriptiveStatsResult:
        if self._stats is None:
            raise ValueError("Call fit() first")
        n_rows = self._view.n_rows if self._view.n_rows is not None else int(self._view.df.shape[0])
        return DescriptiveStatsResult(stats=dict(self._stats), n_rows=n_rows)
