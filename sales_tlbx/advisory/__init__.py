"""Advisory collaborator contract, suggestion validation and request handling."""

from .base import CAPABILITIES, AdvisoryCollaborator, AdvisoryPayload, Capability, build_advisory_payload
from .heuristic import HeuristicAdvisor
from .session import AdvisorySession
from .suggestions import SuggestionPayload, VariableSuggestion, parse_suggestion, validate_suggestion


__all__ = [
    "CAPABILITIES",
    "AdvisoryCollaborator",
    "AdvisoryPayload",
    "AdvisorySession",
    "Capability",
    "HeuristicAdvisor",
    "SuggestionPayload",
    "VariableSuggestion",
    "build_advisory_payload",
    "parse_suggestion",
    "validate_suggestion",
]
