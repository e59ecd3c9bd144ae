"""
Pipeline orchestrator - runs catalog search and advisor ranking.
"""
import logging
import uuid
from datetime import datetime
from typing import Mapping, Optional, Sequence

import numpy as np

from ..config import get_config
from ..models.listing import Listing
from ..models.preferences import AnswerValue, resolve_preferences
from ..models.query import ListingQuery
from ..models.scoring import AdvisorRun, CatalogSummary, RunMetadata

from .filter import ListingFilter
from .scoring import PreferenceScorer


logger = logging.getLogger(__name__)


def summarize_catalog(listings: Sequence[Listing]) -> CatalogSummary:
    """Price statistics over the advisor price of every listing."""
    prices = [l.advisor_price for l in listings if l.advisor_price]
    if not prices:
        return CatalogSummary(total_listings=len(listings))

    return CatalogSummary(
        total_listings=len(listings),
        with_price=len(prices),
        median_price=float(np.median(prices)),
        min_price=float(np.min(prices)),
        max_price=float(np.max(prices)),
    )


def run_search(listings: Sequence[Listing], query: ListingQuery) -> list[Listing]:
    """Filter the catalog for the browse view."""
    return ListingFilter().filter(listings, query)


def run_advisor(
    listings: Sequence[Listing],
    answers: Mapping[str, AnswerValue],
    manual_location: str = "",
    top_n: Optional[int] = None,
) -> AdvisorRun:
    """
    Run the advisor end to end.

    Pipeline steps:
    1. Resolve questionnaire answers into a full preference set
    2. Score and rank every listing
    3. Summarize catalog prices

    Args:
        listings: The loaded catalog
        answers: Raw questionnaire answers, keyed by question id
        manual_location: Location text typed by the user
        top_n: Number of matches (config default when None)

    Returns:
        AdvisorRun with matches and metadata
    """
    config = get_config()
    run_id = str(uuid.uuid4())[:8]
    started_at = datetime.now()
    top_n = config.advisor.top_n if top_n is None else top_n

    logger.info(f"Starting advisor run {run_id} with {len(listings)} listings")

    preferences = resolve_preferences(answers, manual_location=manual_location)
    scorer = PreferenceScorer(max_reasons=config.advisor.max_reasons)
    matches = scorer.rank(listings, preferences, top_n=top_n)

    run = AdvisorRun(
        metadata=RunMetadata(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(),
            total_listings=len(listings),
            top_n=top_n,
        ),
        preferences=preferences,
        matches=matches,
        catalog_summary=summarize_catalog(listings),
    )

    logger.info(f"Advisor run {run_id} completed: {len(matches)} matches")
    return run
