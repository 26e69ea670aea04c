"""Type coercion from raw tabular cells to a typed :class:`SalesDataset`.

Raw rows come from CSV/XLSX readers or API payloads, so cells are usually strings
(sometimes already numbers). A column is classified numeric as soon as one of its
cells parses; cells that do not parse keep their original text so mixed columns
survive coercion intact.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from numbers import Real

import numpy as np
import pandas as pd

from ..errors import EmptyDatasetError
from .sales_dataset import SalesDataset


logger = logging.getLogger(__name__)

# Plain decimal / scientific notation with "." as separator and ASCII digits only.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def is_missing(value: object) -> bool:
    """Return True for ``None``/``NaN``/``pd.NA`` cells."""
    return value is None or (pd.api.types.is_scalar(value) and bool(pd.isna(value)))


def is_valid_number(value: object) -> bool:
    """Return True if ``value`` is a finite real number (bools excluded)."""
    if isinstance(value, bool | np.bool_) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def parse_number(value: object) -> float | None:
    """Parse a single cell into a finite float, or ``None`` if it is not a number.

    Strings are stripped and must match a plain decimal literal in full, so
    ``"12abc"``, ``"1,5"``, ``"nan"`` and ``"inf"`` are rejected.
    """
    if is_valid_number(value):
        return float(value)  # type: ignore[arg-type]
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.fullmatch(text):
            number = float(text)
            return number if math.isfinite(number) else None
    return None


def _original_text(value: object) -> object:
    if is_missing(value):
        return np.nan
    return value if isinstance(value, str) else str(value)


def _raw_frame(rows: Iterable[Mapping[str, object]] | pd.DataFrame) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        if rows.columns.duplicated().any():
            dupes = rows.columns[rows.columns.duplicated()].tolist()
            raise ValueError(f"Duplicate column names in input: {dupes}")
        return rows.set_axis([str(c) for c in rows.columns], axis=1).reset_index(drop=True)

    records = [{str(key): value for key, value in row.items()} for row in rows]
    if not records:
        return pd.DataFrame()
    # Header set is fixed by the first row; later rows are read against it.
    headers = list(records[0])
    return pd.DataFrame(
        [[row.get(header, np.nan) for header in headers] for row in records],
        columns=headers,
        dtype=object,
    )


def coerce_column(raw: pd.Series) -> tuple[pd.Series, bool]:
    """Coerce one raw column.

    Returns:
        The coerced column and whether it is numeric. Fully numeric columns (missing
        cells aside) come back as ``float64``; mixed columns as ``object`` holding
        floats for parsed cells and the original text elsewhere.
    """
    numbers = raw.map(parse_number)
    parsed = numbers.notna()
    text = raw.map(_original_text)
    if not parsed.any():
        return text.astype(object), False

    leftover = ~parsed & text.notna()
    if not leftover.any():
        return numbers.astype(float), True
    return numbers.astype(object).where(parsed, text), True


def coerce_rows(rows: Iterable[Mapping[str, object]] | pd.DataFrame) -> SalesDataset:
    """Convert raw rows into a typed :class:`SalesDataset`.

    Args:
        rows: Sequence of ``{column: cell}`` mappings or a DataFrame of raw cells.

    Returns:
        Dataset with typed cells, headers in first-row order and the numeric subset
        in header order (not in the order columns first parse as numbers).

    Raises:
        EmptyDatasetError: If there are no rows.
    """
    raw = _raw_frame(rows)
    if raw.shape[0] == 0:
        raise EmptyDatasetError

    columns: dict[str, pd.Series] = {}
    numeric_headers: list[str] = []
    for header in raw.columns:
        columns[header], is_numeric = coerce_column(raw[header])
        if is_numeric:
            numeric_headers.append(header)

    df = pd.DataFrame(columns, index=raw.index, columns=list(raw.columns))
    logger.debug(
        "Coerced %d rows x %d columns (%d numeric: %s)",
        df.shape[0],
        df.shape[1],
        len(numeric_headers),
        numeric_headers,
    )
    return SalesDataset(df=df, headers=tuple(raw.columns), numeric_headers=tuple(numeric_headers))
