"""Request/result wrapper around an advisory collaborator.

Each capability allows one outstanding request. A second request while the first
is pending is rejected with :class:`AdvisoryBusyError`. Results are delivered as
:class:`concurrent.futures.Future` objects; a caller may drop a future, but the
collaborator call still runs to completion on its worker thread.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING, TypeVar

from sales_tlbx.errors import AdvisoryBusyError, AdvisoryFailure
from sales_tlbx.utils.config import AnalysisConfig

from .base import CAPABILITIES, AdvisoryCollaborator, AdvisoryPayload, Capability, build_advisory_payload
from .suggestions import VariableSuggestion, validate_suggestion


if TYPE_CHECKING:
    from sales_tlbx.analysis.descriptive_stats import DescriptiveStatsResult
    from sales_tlbx.data.sales_dataset import SalesDataset


logger = logging.getLogger(__name__)

T = TypeVar("T")


class AdvisorySession:
    """Single-flight access to an :class:`AdvisoryCollaborator`.

    Example:
        >>> with AdvisorySession(HeuristicAdvisor()) as session:
        ...     future = session.request_suggestion(dataset)
        ...     session.is_busy("suggestions")
        ...     suggestion = future.result(timeout=30)
    """

    def __init__(
        self,
        collaborator: AdvisoryCollaborator,
        config: AnalysisConfig | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._collaborator = collaborator
        self._config = config or AnalysisConfig()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=len(CAPABILITIES),
            thread_name_prefix="sales-tlbx-advisory",
        )
        self._lock = threading.Lock()
        self._pending: dict[Capability, Future] = {}

    # ------------------------------------------------------------------ state
    def is_busy(self, capability: Capability) -> bool:
        """True while a request for ``capability`` is in flight."""
        with self._lock:
            future = self._pending.get(capability)
            return future is not None and not future.done()

    @property
    def busy_capabilities(self) -> list[Capability]:
        return [cap for cap in CAPABILITIES if self.is_busy(cap)]

    # ------------------------------------------------------------------ requests
    def request_insights(
        self,
        dataset: SalesDataset,
        stats: DescriptiveStatsResult | None = None,
    ) -> Future[str]:
        """Ask the collaborator for free-text insights on ``dataset``."""
        payload = build_advisory_payload(dataset, stats, sample_rows=self._config.sample_rows)
        return self._submit("insights", lambda: self._run_insights(payload))

    def request_suggestion(self, dataset: SalesDataset) -> Future[VariableSuggestion]:
        """Ask for a dependent/independent split, validated against ``dataset``."""
        payload = build_advisory_payload(dataset, sample_rows=self._config.sample_rows)
        return self._submit("suggestions", lambda: self._run_suggestion(payload, dataset))

    def generate_insights(
        self,
        dataset: SalesDataset,
        stats: DescriptiveStatsResult | None = None,
        timeout: float | None = None,
    ) -> str:
        """Blocking variant of :meth:`request_insights`."""
        return self._wait("insights", self.request_insights(dataset, stats), timeout)

    def suggest_variables(self, dataset: SalesDataset, timeout: float | None = None) -> VariableSuggestion:
        """Blocking variant of :meth:`request_suggestion`."""
        return self._wait("suggestions", self.request_suggestion(dataset), timeout)

    def close(self, wait: bool = False) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> AdvisorySession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close(wait=True)

    # ------------------------------------------------------------------ internals
    def _submit(self, capability: Capability, call: Callable[[], T]) -> Future[T]:
        with self._lock:
            pending = self._pending.get(capability)
            if pending is not None and not pending.done():
                raise AdvisoryBusyError(capability)
            future = self._executor.submit(call)
            self._pending[capability] = future
        future.add_done_callback(lambda f: self._release(capability, f))
        logger.debug("Submitted %s request", capability)
        return future

    def _release(self, capability: Capability, future: Future) -> None:
        with self._lock:
            if self._pending.get(capability) is future:
                del self._pending[capability]

    @staticmethod
    def _wait(capability: Capability, future: Future[T], timeout: float | None) -> T:
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as err:
            raise AdvisoryFailure(capability, f"no response within {timeout}s") from err

    def _run_insights(self, payload: AdvisoryPayload) -> str:
        try:
            text = self._collaborator.generate_insights(payload.headers, payload.stats, payload.sample_rows)
        except AdvisoryFailure:
            raise
        except Exception as err:
            logger.exception("Insights request failed")
            raise AdvisoryFailure("insights", str(err) or type(err).__name__) from err
        if not isinstance(text, str):
            raise AdvisoryFailure("insights", f"expected text, got {type(text).__name__}")
        return text

    def _run_suggestion(self, payload: AdvisoryPayload, dataset: SalesDataset) -> VariableSuggestion:
        try:
            raw = self._collaborator.suggest_variables(payload.headers, payload.sample_rows)
        except AdvisoryFailure:
            raise
        except Exception as err:
            logger.exception("Suggestion request failed")
            raise AdvisoryFailure("suggestions", str(err) or type(err).__name__) from err
        return validate_suggestion(raw, dataset)
