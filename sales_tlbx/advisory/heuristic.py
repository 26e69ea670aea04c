"""Offline advisory collaborator built on the toolbox's own statistics."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

from sales_tlbx.data.coercion import coerce_rows
from sales_tlbx.errors import EmptyDatasetError
from sales_tlbx.utils.config import AnalysisConfig


logger = logging.getLogger(__name__)

_MIN_ROWS_FOR_CORRELATION = 3


class HeuristicAdvisor:
    """Rule-based stand-in for an LLM advisor.

    Insights are a short markdown digest of the summary statistics. Suggestions
    pick the dependent variable by sales-like column names (falling back to the
    last numeric column) and keep independents whose absolute correlation with it
    on the sample rows reaches ``config.suggestion_min_abs_corr``.
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()

    def generate_insights(
        self,
        headers: Sequence[str],
        stats: Mapping[str, Mapping[str, float]],
        sample_rows: Sequence[Mapping[str, object]],
    ) -> str:
        lines = [
            "## Dataset overview",
            "",
            f"- Columns: {len(headers)} ({len(stats)} numeric with data)",
            f"- Sample rows reviewed: {len(sample_rows)}",
        ]
        if not stats:
            lines += ["", "No numeric columns were found, so no regression can be trained."]
            return "\n".join(lines)

        lines += ["", "## Numeric columns", ""]
        for col, s in stats.items():
            lines.append(
                f"- **{col}**: n={int(s['count'])}, mean={s['mean']:.2f}, median={s['median']:.2f}, "
                f"range=[{s['min']:.2f}, {s['max']:.2f}]",
            )

        notes = []
        for col, s in stats.items():
            std = s["std"]
            if math.isnan(std) or std == 0:
                notes.append(f"- **{col}** does not vary; it cannot serve as a regression target.")
            elif abs(s["mean"] - s["median"]) > 0.5 * std:
                direction = "right" if s["mean"] > s["median"] else "left"
                notes.append(f"- **{col}** looks {direction}-skewed (mean and median differ by more than half a std).")
        if notes:
            lines += ["", "## Notes", "", *notes]
        return "\n".join(lines)

    def suggest_variables(
        self,
        headers: Sequence[str],
        rows: Sequence[Mapping[str, object]],
    ) -> dict[str, object]:
        try:
            dataset = coerce_rows([{h: row.get(h) for h in headers} for row in rows])
        except EmptyDatasetError:
            return {"dependentVar": None, "independentVars": []}

        numeric = list(dataset.numeric_headers)
        if not numeric:
            return {"dependentVar": None, "independentVars": []}

        dependent = self._pick_dependent(numeric)
        candidates = [h for h in numeric if h != dependent]
        independents = candidates
        if dataset.n_rows >= _MIN_ROWS_FOR_CORRELATION and candidates:
            target_corr = (
                dataset.make_correlation_analyzer(target_col=dependent, config=self._config)
                .fit()
                .get_target_correlations()
                .dropna()
            )
            strong = target_corr[target_corr.correlation.abs() >= self._config.suggestion_min_abs_corr]
            if not strong.empty:
                independents = strong.sort_values("correlation", key=abs, ascending=False).feature.tolist()

        logger.debug("Heuristic suggestion: %s ~ %s", dependent, independents)
        return {"dependentVar": dependent, "independentVars": independents}

    def _pick_dependent(self, numeric: Sequence[str]) -> str:
        for keyword in self._config.sales_keywords:
            for header in numeric:
                if keyword in header.lower():
                    return header
        return numeric[-1]
