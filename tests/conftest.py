"""Test configuration for the sales toolbox."""

from pathlib import Path
import sys

import numpy as np
import pytest


# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def linear_rows() -> list[dict[str, str]]:
    """Noise-free rows generated from ``sales = 3 + 2*ads - price`` as raw text cells."""
    x1 = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]
    x2 = [2.0, 1.0, 4.0, 3.0, 6.0, 5.0, 9.0, 7.0]
    return [
        {"month": f"m{i + 1}", "ads": str(a), "price": str(p), "sales": str(3 + 2 * a - p)}
        for i, (a, p) in enumerate(zip(x1, x2, strict=True))
    ]


@pytest.fixture
def linear_dataset(linear_rows):
    """Coerced dataset of :func:`linear_rows`."""
    from sales_tlbx.data import SalesDataset

    return SalesDataset.from_records(linear_rows)


@pytest.fixture
def noisy_dataset():
    """Larger dataset with noise, a text column and a few invalid numeric cells."""
    from sales_tlbx.data import SalesDataset

    rng = np.random.default_rng(7)
    n = 60
    ads = rng.uniform(5, 50, n)
    price = rng.uniform(8, 12, n)
    sales = 100 + 4.0 * ads - 6.0 * price + rng.normal(0, 3, n)
    rows = [
        {"region": ["north", "south", "east"][i % 3], "ads": f"{a:.3f}", "price": f"{p:.3f}", "sales": f"{s:.3f}"}
        for i, (a, p, s) in enumerate(zip(ads, price, sales, strict=True))
    ]
    rows[3]["ads"] = "n/a"
    rows[10]["sales"] = ""
    return SalesDataset.from_records(rows)
