"""Parsing and schema validation of variable suggestions."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sales_tlbx.errors import AdvisoryFailure


if TYPE_CHECKING:
    from sales_tlbx.data.sales_dataset import SalesDataset


logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


class SuggestionPayload(BaseModel):
    """Wire shape of a suggestion. Fields of the wrong type are dropped, not fatal."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    dependent_var: str | None = Field(default=None, alias="dependentVar")
    independent_vars: list[str] = Field(default_factory=list, alias="independentVars")

    @field_validator("dependent_var", mode="before")
    @classmethod
    def _drop_non_string(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("independent_vars", mode="before")
    @classmethod
    def _keep_strings(cls, value: Any) -> list[str]:
        if not isinstance(value, list | tuple):
            return []
        return [v for v in value if isinstance(v, str)]


@dataclass(frozen=True)
class VariableSuggestion:
    """Suggestion after validation against a dataset schema.

    Attributes:
        dependent_var: Accepted dependent variable, or None if the suggested one was rejected.
        independent_vars: Accepted independents (present, numeric, distinct, not the dependent).
        rejected: Names that were suggested but dropped.
    """

    dependent_var: str | None
    independent_vars: tuple[str, ...] = ()
    rejected: tuple[str, ...] = field(default=())

    @property
    def is_complete(self) -> bool:
        """True when a dependent and at least one independent variable survived."""
        return self.dependent_var is not None and len(self.independent_vars) > 0

    def as_payload(self) -> dict[str, object]:
        return {"dependentVar": self.dependent_var, "independentVars": list(self.independent_vars)}


def parse_suggestion(raw: object) -> SuggestionPayload:
    """Parse a raw collaborator response (mapping, JSON text or payload model).

    Raises:
        AdvisoryFailure: If the response is not a JSON object / mapping.
    """
    if isinstance(raw, SuggestionPayload):
        return raw
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            match = _CODE_FENCE_RE.match(raw)
            return SuggestionPayload.model_validate_json(match.group(1) if match else raw)
        if isinstance(raw, Mapping):
            return SuggestionPayload.model_validate(dict(raw))
    except (ValidationError, UnicodeDecodeError) as err:
        raise AdvisoryFailure("suggestions", f"invalid suggestion payload: {err}") from err
    raise AdvisoryFailure("suggestions", f"unsupported suggestion payload type {type(raw).__name__}")


def validate_suggestion(raw: object, dataset: SalesDataset) -> VariableSuggestion:
    """Validate a suggestion field by field against ``dataset``.

    The dependent variable is kept only if it is a numeric header. Each independent
    variable is kept only if it is a numeric header, differs from the suggested
    dependent variable and was not listed before. Anything else is dropped silently
    (and logged at INFO).
    """
    payload = parse_suggestion(raw)
    numeric = set(dataset.numeric_headers)
    rejected: list[str] = []

    dependent = payload.dependent_var
    if dependent is not None and dependent not in numeric:
        rejected.append(dependent)
        dependent = None

    independents: list[str] = []
    for name in payload.independent_vars:
        if name in numeric and name != payload.dependent_var and name not in independents:
            independents.append(name)
        else:
            rejected.append(name)

    if rejected:
        logger.info("Dropped suggested variables not usable for regression: %s", rejected)
    return VariableSuggestion(
        dependent_var=dependent,
        independent_vars=tuple(independents),
        rejected=tuple(rejected),
    )
