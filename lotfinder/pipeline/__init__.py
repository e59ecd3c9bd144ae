"""Pipeline modules for search and ranking."""

from .text import normalize, tokenize
from .fuzzy import levenshtein, token_matches
from .filter import ListingFilter, filter_listings
from .scoring import PreferenceScorer, rank_listings, score_listing
from .orchestrator import run_advisor, run_search

__all__ = [
    "normalize",
    "tokenize",
    "levenshtein",
    "token_matches",
    "ListingFilter",
    "filter_listings",
    "PreferenceScorer",
    "rank_listings",
    "score_listing",
    "run_advisor",
    "run_search",
]
