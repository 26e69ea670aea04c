"""Tests for the offline HeuristicAdvisor."""

import pytest

from sales_tlbx.advisory import AdvisorySession, HeuristicAdvisor, build_advisory_payload
from sales_tlbx.data import SalesDataset
from sales_tlbx.utils.config import AnalysisConfig


class TestHeuristicSuggestions:
    """Variable suggestion rules."""

    def test_picks_sales_like_dependent(self, linear_rows) -> None:
        advisor = HeuristicAdvisor()
        headers = list(linear_rows[0])

        raw = advisor.suggest_variables(headers, linear_rows)

        assert raw["dependentVar"] == "sales"
        assert set(raw["independentVars"]) == {"ads", "price"}

    def test_keyword_order_wins_over_column_order(self) -> None:
        rows = [{"revenue": str(i), "units_sold": str(2 * i + i % 2), "x": str(i * i)} for i in range(6)]
        raw = HeuristicAdvisor().suggest_variables(["revenue", "units_sold", "x"], rows)

        assert raw["dependentVar"] == "revenue"

    def test_falls_back_to_last_numeric_column(self) -> None:
        rows = [{"a": str(i), "b": str(3 * i + 1), "label": "x"} for i in range(5)]
        raw = HeuristicAdvisor().suggest_variables(["a", "b", "label"], rows)

        assert raw["dependentVar"] == "b"
        assert raw["independentVars"] == ["a"]

    def test_fallback_uses_header_order_not_first_parse(self) -> None:
        rows = [{"a": "n/a", "b": "1"}, {"a": "2", "b": "3"}, {"a": "4", "b": "4"}, {"a": "5", "b": "8"}]
        raw = HeuristicAdvisor().suggest_variables(["a", "b"], rows)

        assert raw["dependentVar"] == "b"

    def test_weak_predictors_filtered(self) -> None:
        rows = [
            {"ads": str(a), "noise": str(n), "sales": str(2 * a + 1)}
            for a, n in zip([1, 2, 3, 4, 5, 6], [3, 1, 3, 1, 3, 1], strict=True)
        ]
        config = AnalysisConfig(suggestion_min_abs_corr=0.5)
        raw = HeuristicAdvisor(config).suggest_variables(["ads", "noise", "sales"], rows)

        assert raw["independentVars"] == ["ads"]

    def test_no_numeric_columns(self) -> None:
        raw = HeuristicAdvisor().suggest_variables(["name"], [{"name": "a"}, {"name": "b"}])

        assert raw == {"dependentVar": None, "independentVars": []}

    def test_no_rows(self) -> None:
        assert HeuristicAdvisor().suggest_variables(["a"], []) == {"dependentVar": None, "independentVars": []}


class TestHeuristicInsights:
    """Markdown digest."""

    def test_sections_present(self, noisy_dataset: SalesDataset) -> None:
        payload = build_advisory_payload(noisy_dataset)
        text = HeuristicAdvisor().generate_insights(payload.headers, payload.stats, payload.sample_rows)

        assert text.startswith("## Dataset overview")
        assert "## Numeric columns" in text
        assert "**sales**" in text

    def test_constant_column_noted(self) -> None:
        stats = {"v": {"count": 3, "min": 1.0, "max": 1.0, "mean": 1.0, "median": 1.0, "std": 0.0}}
        text = HeuristicAdvisor().generate_insights(["v"], stats, [])

        assert "does not vary" in text

    def test_no_numeric_columns(self) -> None:
        text = HeuristicAdvisor().generate_insights(["name"], {}, [{"name": "a"}])

        assert "No numeric columns" in text


class TestHeuristicThroughSession:
    def test_session_validates_heuristic_output(self, linear_dataset: SalesDataset) -> None:
        with AdvisorySession(HeuristicAdvisor(), config=AnalysisConfig(sample_rows=8)) as session:
            suggestion = session.suggest_variables(linear_dataset, timeout=10)

        assert suggestion.dependent_var == "sales"
        assert suggestion.is_complete
        assert suggestion.rejected == ()

    @pytest.mark.parametrize("sample_rows", [1, 2])
    def test_small_samples_keep_all_candidates(self, linear_dataset: SalesDataset, sample_rows: int) -> None:
        with AdvisorySession(HeuristicAdvisor(), config=AnalysisConfig(sample_rows=sample_rows)) as session:
            suggestion = session.suggest_variables(linear_dataset, timeout=10)

        assert suggestion.independent_vars == ("ads", "price")
