"""Data module: coercion, dataset container, views and file loaders."""

from .coercion import coerce_rows, is_valid_number, parse_number
from .loaders import load_csv, load_excel, load_table
from .sales_dataset import SalesDataset
from .views import DatasetView


__all__ = [
    "DatasetView",
    "SalesDataset",
    "coerce_rows",
    "is_valid_number",
    "load_csv",
    "load_excel",
    "load_table",
    "parse_number",
]
