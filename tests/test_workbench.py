"""Tests for the SalesWorkbench workflow."""

import pytest

from sales_tlbx import SalesWorkbench, WorkbenchState
from sales_tlbx.advisory import HeuristicAdvisor, VariableSuggestion
from sales_tlbx.errors import DimensionMismatchError, EmptyDatasetError, SingularMatrixError


@pytest.fixture
def workbench():
    wb = SalesWorkbench(advisor=HeuristicAdvisor())
    yield wb
    wb.close()


class TestWorkbenchData:
    def test_initial_state_is_empty(self, workbench: SalesWorkbench) -> None:
        assert isinstance(workbench.state, WorkbenchState)
        assert not workbench.state.has_data
        assert not workbench.state.has_model

    def test_load_computes_statistics(self, workbench: SalesWorkbench, linear_rows) -> None:
        state = workbench.load(linear_rows)

        assert state.has_data
        assert state.stats.columns == ["ads", "price", "sales"]
        assert state.correlation.matrix.shape == (3, 3)
        assert state.suggestion is None

    def test_failed_load_keeps_previous_dataset(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)

        with pytest.raises(EmptyDatasetError):
            workbench.load([])
        assert workbench.state.dataset.n_rows == 8

    def test_load_with_header_named_correlation(self, workbench: SalesWorkbench) -> None:
        rows = [{"sales": str(3 * i + i % 2), "ads": str(i), "correlation": str(10 - i)} for i in range(6)]

        state = workbench.load(rows)

        assert state.correlation.matrix.shape == (3, 3)
        assert len(state.correlation.feature_pairs) == 3

    def test_load_file(self, workbench: SalesWorkbench, tmp_path) -> None:
        path = tmp_path / "sales.csv"
        path.write_text("ads,sales\n1,5\n2,7\n3,9\n", encoding="utf-8")

        assert workbench.load_file(path).dataset.numeric_headers == ("ads", "sales")


class TestWorkbenchModel:
    def test_predict_before_train(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)

        with pytest.raises(ValueError, match=r"No trained model"):
            workbench.predict([1.0, 2.0])

    def test_train_requires_dataset(self, workbench: SalesWorkbench) -> None:
        with pytest.raises(ValueError, match=r"No dataset loaded"):
            workbench.train("sales", ["ads"])

    def test_train_requires_selection(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)

        with pytest.raises(ValueError, match=r"Select the dependent variable"):
            workbench.train()

    def test_train_and_predict(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        result = workbench.train("sales", ["ads", "price"])

        assert workbench.state.has_model
        assert result.r2 == pytest.approx(1.0)
        assert workbench.predict([4.0, 3.0]) == pytest.approx(8.0)
        assert workbench.predict({"price": 3.0, "ads": 4.0}) == pytest.approx(8.0)

    def test_predict_dimension_mismatch(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        workbench.train("sales", ["ads", "price"])

        with pytest.raises(DimensionMismatchError):
            workbench.predict([4.0])

    def test_failed_train_keeps_previous_model(self, workbench: SalesWorkbench, linear_rows) -> None:
        for row in linear_rows:
            row["ads_twice"] = str(2 * float(row["ads"]))
        workbench.load(linear_rows)
        first = workbench.train("sales", ["ads"])

        with pytest.raises(SingularMatrixError):
            workbench.train("sales", ["ads", "ads_twice"])
        assert workbench.state.regression is first

    def test_load_discards_model(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        workbench.train("sales", ["ads"])
        workbench.load(linear_rows)

        assert not workbench.state.has_model
        with pytest.raises(ValueError, match=r"No trained model"):
            workbench.predict([1.0])


class TestWorkbenchSuggestions:
    def test_apply_suggestion_then_train(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        applied = workbench.apply_suggestion({"dependentVar": "sales", "independentVars": ["ads", "month"]})

        assert applied.independent_vars == ("ads",)
        assert workbench.state.suggestion is applied
        result = workbench.train()
        assert result.model.independent_vars == ("ads",)

    def test_suggestion_revalidated_against_current_dataset(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        stale = VariableSuggestion("sales", ("ads", "tv"))

        assert workbench.apply_suggestion(stale).independent_vars == ("ads",)

    def test_advisor_round_trip(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)
        suggestion = workbench.request_suggestion().result(timeout=10)
        workbench.apply_suggestion(suggestion)
        result = workbench.train()

        assert result.model.dependent_var == "sales"
        assert not workbench.is_busy()

    def test_insights(self, workbench: SalesWorkbench, linear_rows) -> None:
        workbench.load(linear_rows)

        assert "## Dataset overview" in workbench.request_insights().result(timeout=10)

    def test_no_advisor_configured(self, linear_rows) -> None:
        wb = SalesWorkbench()
        wb.load(linear_rows)

        with pytest.raises(ValueError, match=r"No advisory collaborator"):
            wb.request_suggestion()
        assert not wb.is_busy()
