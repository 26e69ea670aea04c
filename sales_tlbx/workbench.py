"""Application-level context: load data, inspect it, train and predict.

The workbench holds one immutable :class:`WorkbenchState`. Every transition
(load, suggestion, train) builds a new state and swaps it in whole; a transition
that raises leaves the previous state untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Future
from dataclasses import dataclass, replace
from pathlib import Path

import pandas as pd

from .advisory.base import AdvisoryCollaborator
from .advisory.session import AdvisorySession
from .advisory.suggestions import VariableSuggestion, validate_suggestion
from .analysis.correlation_analyzer import CorrelationResult
from .analysis.descriptive_stats import DescriptiveStatsResult
from .analysis.ols_regression import RegressionResult, fit_regression
from .data.loaders import load_table
from .data.sales_dataset import SalesDataset
from .utils.config import AnalysisConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class WorkbenchState:
    """Snapshot of everything derived from the currently loaded dataset."""

    dataset: SalesDataset | None = None
    stats: DescriptiveStatsResult | None = None
    correlation: CorrelationResult | None = None
    suggestion: VariableSuggestion | None = None
    regression: RegressionResult | None = None

    @property
    def has_data(self) -> bool:
        return self.dataset is not None

    @property
    def has_model(self) -> bool:
        return self.regression is not None


class SalesWorkbench:
    """Load → analyze → train → predict workflow over immutable snapshots.

    Example:
        >>> wb = SalesWorkbench(advisor=HeuristicAdvisor())
        >>> wb.load_file("sales.csv")
        >>> wb.apply_suggestion(wb.request_suggestion().result())
        >>> wb.train()
        >>> wb.predict({"ads": 12.0, "price": 9.5})
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        advisor: AdvisoryCollaborator | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self._state = WorkbenchState()
        self._session = AdvisorySession(advisor, config=self.config) if advisor is not None else None

    @property
    def state(self) -> WorkbenchState:
        return self._state

    # ------------------------------------------------------------------ data
    def load(self, rows: Iterable[Mapping[str, object]] | pd.DataFrame | SalesDataset) -> WorkbenchState:
        """Replace the dataset; statistics are recomputed and any model or suggestion is discarded."""
        dataset = rows if isinstance(rows, SalesDataset) else SalesDataset.from_records(rows)
        stats = dataset.make_descriptive_stats_analyzer().fit().result()
        correlation = dataset.make_correlation_analyzer(config=self.config).fit().result()
        self._state = WorkbenchState(dataset=dataset, stats=stats, correlation=correlation)
        logger.info(
            "Loaded dataset: %d rows, %d columns, numeric=%s",
            dataset.n_rows,
            len(dataset.headers),
            list(dataset.numeric_headers),
        )
        return self._state

    def load_file(self, path: str | Path) -> WorkbenchState:
        """Load a ``.csv`` or ``.xlsx`` file."""
        return self.load(load_table(path))

    # ------------------------------------------------------------------ variable selection
    def apply_suggestion(self, suggestion: VariableSuggestion | Mapping[str, object] | str) -> VariableSuggestion:
        """Re-validate a suggestion against the current dataset and store it."""
        dataset = self._require_dataset()
        raw = suggestion.as_payload() if isinstance(suggestion, VariableSuggestion) else suggestion
        validated = validate_suggestion(raw, dataset)
        self._state = replace(self._state, suggestion=validated)
        return validated

    # ------------------------------------------------------------------ model
    def train(
        self,
        dependent_var: str | None = None,
        independent_vars: Sequence[str] | None = None,
    ) -> RegressionResult:
        """Fit a new model; missing arguments fall back to the stored suggestion.

        On failure the exception propagates and the previously trained model stays.
        """
        dataset = self._require_dataset()
        suggestion = self._state.suggestion
        if dependent_var is None and suggestion is not None:
            dependent_var = suggestion.dependent_var
        if independent_vars is None and suggestion is not None:
            independent_vars = suggestion.independent_vars
        if dependent_var is None or not independent_vars:
            raise ValueError("Select the dependent variable and at least one independent variable.")

        result = fit_regression(dataset, dependent_var, independent_vars)
        self._state = replace(self._state, regression=result)
        return result

    def predict(self, inputs: Mapping[str, float] | Sequence[float]) -> float:
        """Predict with the current model from named or positional inputs."""
        if self._state.regression is None:
            raise ValueError("No trained model. Call train() first.")
        model = self._state.regression.model
        if isinstance(inputs, Mapping):
            return model.predict_named(inputs)
        return model.predict(inputs)

    # ------------------------------------------------------------------ advisory
    def request_insights(self) -> Future[str]:
        """Start an insights request; failures only affect the returned future."""
        dataset = self._require_dataset()
        return self._require_session().request_insights(dataset, self._state.stats)

    def request_suggestion(self) -> Future[VariableSuggestion]:
        """Start a suggestion request; pass the result to :meth:`apply_suggestion`."""
        return self._require_session().request_suggestion(self._require_dataset())

    def is_busy(self) -> bool:
        return self._session is not None and bool(self._session.busy_capabilities)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()

    # ------------------------------------------------------------------ helpers
    def _require_dataset(self) -> SalesDataset:
        if self._state.dataset is None:
            raise ValueError("No dataset loaded. Call load() or load_file() first.")
        return self._state.dataset

    def _require_session(self) -> AdvisorySession:
        if self._session is None:
            raise ValueError("No advisory collaborator configured.")
        return self._session
