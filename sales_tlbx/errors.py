"""Exception taxonomy for dataset, model and advisory failures.

Dataset and model errors subclass :class:`ValueError` so callers that already
guard analysis calls with ``except ValueError`` keep working. Each error keeps
the context needed to correct the input (variables involved, row counts).
"""

from __future__ import annotations

from collections.abc import Sequence


class SalesToolboxError(Exception):
    """Base class for all toolbox errors."""


class EmptyDatasetError(SalesToolboxError, ValueError):
    """Raised when there are no rows to analyze."""

    def __init__(self, message: str = "Dataset is empty: no rows to analyze.") -> None:
        super().__init__(message)


class InsufficientDataError(SalesToolboxError, ValueError):
    """Raised when too few clean rows remain for the selected variables."""

    def __init__(self, n_clean: int, n_required: int, variables: Sequence[str]) -> None:
        self.n_clean = n_clean
        self.n_required = n_required
        self.variables = tuple(variables)
        super().__init__(
            f"Not enough clean rows to fit {list(self.variables)}: "
            f"found {n_clean}, need at least {n_required}.",
        )


class SingularMatrixError(SalesToolboxError, ValueError):
    """Raised when predictors are collinear and OLS coefficients are not identifiable."""

    def __init__(self, independent_vars: Sequence[str], detail: str = "") -> None:
        self.independent_vars = tuple(independent_vars)
        suffix = f" ({detail})" if detail else ""
        super().__init__(
            f"Design matrix for {list(self.independent_vars)} is singular; "
            f"check for identical or perfectly correlated predictors{suffix}.",
        )


class ZeroVarianceError(SalesToolboxError, ValueError):
    """Raised when the dependent variable is constant over the clean rows."""

    def __init__(self, variable: str, n_clean: int) -> None:
        self.variable = variable
        self.n_clean = n_clean
        super().__init__(
            f"Dependent variable '{variable}' has zero variance over {n_clean} clean rows; R² is undefined.",
        )


class DimensionMismatchError(SalesToolboxError, ValueError):
    """Raised when a prediction input does not match the model's predictors."""

    def __init__(self, expected: Sequence[str], got: int | Sequence[str]) -> None:
        self.expected = tuple(expected)
        self.got = got
        if isinstance(got, int):
            detail = f"got {got} values"
        else:
            detail = f"missing {list(got)}"
        super().__init__(f"Model expects {len(self.expected)} inputs {list(self.expected)}, {detail}.")


class AdvisoryFailure(SalesToolboxError):
    """Raised when an advisory call fails or returns unusable data."""

    def __init__(self, capability: str, message: str) -> None:
        self.capability = capability
        super().__init__(f"[{capability}] {message}")


class AdvisoryBusyError(AdvisoryFailure):
    """Raised when a capability already has a request in flight."""

    def __init__(self, capability: str) -> None:
        super().__init__(capability, "a request is already pending; wait for it to finish")
