"""File readers that hand raw cells to type coercion."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .coercion import coerce_rows
from .sales_dataset import SalesDataset


logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".csv", ".xlsx")


def load_csv(csv_path: str | Path, **read_kwargs: object) -> SalesDataset:
    """Read a CSV file with a header row and coerce it.

    Cells are read as text (no pandas NA inference) so the coercion layer sees the
    raw values; blank lines are skipped.
    """
    csv_path = Path(csv_path)
    kwargs: dict[str, object] = {"dtype": str, "keep_default_na": False, "skip_blank_lines": True}
    kwargs.update(read_kwargs)
    raw = pd.read_csv(csv_path, **kwargs)  # type: ignore[arg-type]
    logger.info("Read %d rows from %s", raw.shape[0], csv_path)
    return coerce_rows(raw)


def load_excel(xlsx_path: str | Path, sheet_name: str | int = 0) -> SalesDataset:
    """Read one sheet of an XLSX workbook (first sheet by default) and coerce it."""
    xlsx_path = Path(xlsx_path)
    raw = pd.read_excel(xlsx_path, sheet_name=sheet_name, dtype=object, engine="openpyxl")
    logger.info("Read %d rows from %s[%s]", raw.shape[0], xlsx_path, sheet_name)
    return coerce_rows(raw)


def load_table(path: str | Path) -> SalesDataset:
    """Dispatch on file extension to :func:`load_csv` or :func:`load_excel`."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return load_csv(path)
    if suffix == ".xlsx":
        return load_excel(path)
    raise ValueError(f"Unsupported file format '{suffix}'. Use one of {list(SUPPORTED_SUFFIXES)}.")
