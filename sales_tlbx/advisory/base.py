"""Contract for advisory collaborators and the bounded payload sent to them."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable


if TYPE_CHECKING:
    from sales_tlbx.analysis.descriptive_stats import DescriptiveStatsResult
    from sales_tlbx.data.sales_dataset import SalesDataset


Capability = Literal["insights", "suggestions"]
CAPABILITIES: tuple[Capability, ...] = ("insights", "suggestions")


@runtime_checkable
class AdvisoryCollaborator(Protocol):
    """External text/suggestion service (an LLM client, a rules engine, ...).

    Implementations may block, fail or time out. Their output is untrusted:
    suggestion payloads are validated against the live dataset before use.
    """

    def generate_insights(
        self,
        headers: Sequence[str],
        stats: Mapping[str, Mapping[str, float]],
        sample_rows: Sequence[Mapping[str, object]],
    ) -> str:
        """Return free-form (markdown) commentary on the dataset."""
        ...

    def suggest_variables(
        self,
        headers: Sequence[str],
        rows: Sequence[Mapping[str, object]],
    ) -> object:
        """Return a raw ``{"dependentVar": ..., "independentVars": [...]}`` payload (mapping or JSON text)."""
        ...


@dataclass(frozen=True)
class AdvisoryPayload:
    """Bounded request content: headers, summary stats and a few leading rows."""

    headers: tuple[str, ...]
    stats: dict[str, dict[str, float]]
    sample_rows: list[dict[str, object]]


def build_advisory_payload(
    dataset: SalesDataset,
    stats: DescriptiveStatsResult | None = None,
    sample_rows: int = 5,
) -> AdvisoryPayload:
    """Assemble the request payload without shipping the full dataset."""
    if sample_rows < 1:
        raise ValueError(f"sample_rows must be >= 1, got {sample_rows}")
    if stats is None:
        stats = dataset.make_descriptive_stats_analyzer().fit().result()
    return AdvisoryPayload(
        headers=tuple(dataset.headers),
        stats=stats.to_records(),
        sample_rows=dataset.records(n=sample_rows),
    )
