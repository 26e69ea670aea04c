"""Analysis configuration shared by analyzers, advisory helpers and the workbench."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Literal

from .logging_config import configure_logging


CorrelationMissing = Literal["pairwise", "propagate"]

_ENV_PREFIX = "SALES_TLBX_"
_DEFAULT_SALES_KEYWORDS: tuple[str, ...] = (
    "sales",
    "revenue",
    "ventas",
    "ingresos",
    "income",
    "turnover",
    "units_sold",
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Knobs for the analysis pipeline.

    Attributes:
        sample_rows: Number of leading rows sent to advisory collaborators.
        correlation_missing: ``"pairwise"`` correlates only rows where both values are
            valid numbers; ``"propagate"`` keeps raw alignment so any invalid cell turns
            the pair into NaN.
        top_n_pairs: Number of strongest pairs reported by the correlation analyzer.
        suggestion_min_abs_corr: Minimum absolute correlation for the heuristic advisor
            to propose an independent variable.
        sales_keywords: Lower-case name fragments that mark a likely dependent variable.
        log_level: Level name passed to :func:`sales_tlbx.utils.configure_logging`.
    """

    sample_rows: int = 5
    correlation_missing: CorrelationMissing = "pairwise"
    top_n_pairs: int = 20
    suggestion_min_abs_corr: float = 0.3
    sales_keywords: tuple[str, ...] = field(default=_DEFAULT_SALES_KEYWORDS)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.sample_rows < 1:
            raise ValueError(f"sample_rows must be >= 1, got {self.sample_rows}")
        if self.correlation_missing not in ("pairwise", "propagate"):
            raise ValueError(
                f"Invalid correlation_missing='{self.correlation_missing}'. Use 'pairwise' or 'propagate'.",
            )
        if not 0.0 <= self.suggestion_min_abs_corr <= 1.0:
            raise ValueError("suggestion_min_abs_corr must lie in [0, 1]")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log_level='{self.log_level}'")

    def configure_logging(self) -> logging.Logger:
        """Apply ``log_level`` through :func:`sales_tlbx.utils.configure_logging`."""
        return configure_logging(self.log_level)

    def with_overrides(self, **changes: object) -> AnalysisConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AnalysisConfig:
        """Build a config from ``SALES_TLBX_*`` environment variables.

        Example:
            >>> AnalysisConfig.from_env({"SALES_TLBX_SAMPLE_ROWS": "10"}).sample_rows
            10
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if (raw := env.get(f"{_ENV_PREFIX}SAMPLE_ROWS")) is not None:
            kwargs["sample_rows"] = int(raw)
        if (raw := env.get(f"{_ENV_PREFIX}CORRELATION_MISSING")) is not None:
            kwargs["correlation_missing"] = raw.strip().lower()
        if (raw := env.get(f"{_ENV_PREFIX}TOP_N_PAIRS")) is not None:
            kwargs["top_n_pairs"] = int(raw)
        if (raw := env.get(f"{_ENV_PREFIX}SUGGESTION_MIN_ABS_CORR")) is not None:
            kwargs["suggestion_min_abs_corr"] = float(raw)
        if (raw := env.get(f"{_ENV_PREFIX}SALES_KEYWORDS")) is not None:
            kwargs["sales_keywords"] = tuple(k.strip().lower() for k in raw.split(",") if k.strip())
        if (raw := env.get(f"{_ENV_PREFIX}LOG_LEVEL")) is not None:
            kwargs["log_level"] = raw.strip().upper()
        return cls(**kwargs)  # type: ignore[arg-type]
