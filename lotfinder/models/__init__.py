"""
Pydantic models for lotfinder.
All data contracts are defined here for strict validation.
"""

from .listing import Listing, MILES_TO_KM
from .query import ListingQuery, OdometerRange, ODOMETER_BUCKETS
from .preferences import (
    PreferenceSet,
    SingleChoiceQuestion,
    MultiChoiceQuestion,
    QUESTIONS,
    build_questions,
    resolve_preferences,
    toggle_multi,
)
from .scoring import MatchResult, CatalogSummary, RunMetadata, AdvisorRun

__all__ = [
    # Listing
    "Listing",
    "MILES_TO_KM",
    # Query
    "ListingQuery",
    "OdometerRange",
    "ODOMETER_BUCKETS",
    # Preferences
    "PreferenceSet",
    "SingleChoiceQuestion",
    "MultiChoiceQuestion",
    "QUESTIONS",
    "build_questions",
    "resolve_preferences",
    "toggle_multi",
    # Scoring
    "MatchResult",
    "CatalogSummary",
    "RunMetadata",
    "AdvisorRun",
]
