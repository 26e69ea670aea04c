"""Tests for the type coercion layer."""

import math

import numpy as np
import pandas as pd
import pytest

from sales_tlbx.data.coercion import coerce_rows, is_valid_number, parse_number
from sales_tlbx.errors import EmptyDatasetError


class TestParseNumber:
    """Cell-level parsing."""

    @pytest.mark.parametrize(
        ("cell", "expected"),
        [("12", 12.0), (" 3.5 ", 3.5), ("-2e3", -2000.0), (".5", 0.5), ("+7.", 7.0), (4, 4.0), (2.25, 2.25)],
    )
    def test_parses_numbers(self, cell: object, expected: float) -> None:
        assert parse_number(cell) == expected

    @pytest.mark.parametrize(
        "cell",
        ["", "abc", "12abc", "1,5", "nan", "inf", "1e999", "\uff13", "\u0663.5", None, True, float("nan")],
    )
    def test_rejects_non_numbers(self, cell: object) -> None:
        assert parse_number(cell) is None

    def test_is_valid_number(self) -> None:
        assert is_valid_number(1)
        assert is_valid_number(np.float64(2.5))
        assert not is_valid_number(False)
        assert not is_valid_number(float("nan"))
        assert not is_valid_number(float("inf"))
        assert not is_valid_number("3")


class TestCoerceRows:
    """Row-level coercion into a SalesDataset."""

    def test_empty_input_raises(self) -> None:
        with pytest.raises(EmptyDatasetError):
            coerce_rows([])

    def test_empty_dataframe_raises(self) -> None:
        with pytest.raises(EmptyDatasetError):
            coerce_rows(pd.DataFrame({"a": []}))

    def test_headers_follow_first_row(self) -> None:
        rows = [
            {"b": "1", "a": "x"},
            {"a": "y", "b": "2", "extra": "9"},
        ]
        ds = coerce_rows(rows)

        assert ds.headers == ("b", "a")
        assert ds.numeric_headers == ("b",)
        assert "extra" not in ds.df.columns

    def test_missing_cells_become_nan(self) -> None:
        ds = coerce_rows([{"a": "1", "b": "2"}, {"a": "3"}])

        assert math.isnan(ds.df.loc[1, "b"])
        assert ds.numeric_headers == ("a", "b")
        assert ds.df["b"].dtype == float

    def test_mixed_column_keeps_original_text(self) -> None:
        ds = coerce_rows([{"sales": "10"}, {"sales": "n/a"}, {"sales": "12.5"}])

        assert ds.numeric_headers == ("sales",)
        assert ds.df.loc[0, "sales"] == 10.0
        assert ds.df.loc[1, "sales"] == "n/a"
        assert ds.df.loc[2, "sales"] == 12.5
        assert ds.numeric_frame["sales"].isna().tolist() == [False, True, False]

    def test_column_is_numeric_if_any_cell_parses(self) -> None:
        ds = coerce_rows([{"c": "x"}, {"c": "y"}, {"c": "5"}])

        assert ds.numeric_headers == ("c",)
        assert ds.valid_values("c").tolist() == [5.0]

    def test_text_columns_stay_strings(self) -> None:
        ds = coerce_rows([{"region": "north", "units": 3}, {"region": "south", "units": 4}])

        assert ds.numeric_headers == ("units",)
        assert ds.df["region"].tolist() == ["north", "south"]
        assert ds.df["units"].tolist() == [3.0, 4.0]

    def test_non_string_cells_are_stringified_when_not_numeric(self) -> None:
        ds = coerce_rows([{"flag": True}, {"flag": False}])

        assert ds.numeric_headers == ()
        assert ds.df["flag"].tolist() == ["True", "False"]

    def test_accepts_raw_dataframe(self) -> None:
        raw = pd.DataFrame({"qty": ["1", "2", "x"], "name": ["a", "b", "c"]})
        ds = coerce_rows(raw)

        assert ds.headers == ("qty", "name")
        assert ds.numeric_headers == ("qty",)

    def test_numeric_headers_subset_of_headers_with_valid_values(self, noisy_dataset) -> None:
        assert set(noisy_dataset.numeric_headers) <= set(noisy_dataset.headers)
        for header in noisy_dataset.numeric_headers:
            assert noisy_dataset.valid_values(header).shape[0] >= 1

    def test_numeric_headers_follow_header_order(self) -> None:
        ds = coerce_rows([{"a": "x", "b": "1", "c": "y"}, {"a": "2", "b": "3", "c": "z"}])

        assert ds.numeric_headers == ("a", "b")

    def test_row_order_preserved(self) -> None:
        rows = [{"i": str(i)} for i in range(10, 0, -1)]
        ds = coerce_rows(rows)

        assert ds.df["i"].tolist() == [float(i) for i in range(10, 0, -1)]
