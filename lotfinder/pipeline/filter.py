"""
Listing filter - free-text fuzzy search combined with discrete catalog filters.
"""
import logging
from typing import Sequence

from ..models.listing import Listing
from ..models.query import ListingQuery
from .fuzzy import token_matches
from .text import normalize, tokenize


logger = logging.getLogger(__name__)


def build_haystack(listing: Listing) -> str:
    """Normalized searchable text for a listing. Empty fields are skipped."""
    fields = [
        listing.make,
        listing.model,
        listing.year,
        listing.lot_number,
        listing.color,
        listing.condition,
        listing.primary_damage,
        listing.secondary_damage,
        listing.location,
        listing.base_site,
    ]
    return normalize(" ".join(str(f) for f in fields if f))


def matches_text(listing: Listing, normalized_query: str, tokens: Sequence[str]) -> bool:
    """
    Text condition for one listing.

    A listing matches when its haystack contains the whole query, or when
    every query token fuzzy-matches at least one haystack word.
    """
    haystack = build_haystack(listing)
    if not haystack:
        return False
    if normalized_query in haystack:
        return True

    words = haystack.split()
    return all(
        any(token_matches(token, word) for word in words)
        for token in tokens
    )


def matches_filters(listing: Listing, query: ListingQuery) -> bool:
    """Check every discrete filter that is set on the query."""
    if query.company and listing.company != query.company:
        return False
    if query.brand and listing.make != query.brand:
        return False
    if query.model and listing.model != query.model:
        return False
    if query.color and listing.color != query.color:
        return False
    if query.interior_color and listing.interior_color != query.interior_color:
        return False
    if query.fuel_type and listing.fuel != query.fuel_type:
        return False
    if query.transmission and listing.transmission != query.transmission:
        return False
    if query.condition and listing.condition != query.condition:
        return False

    if query.buy_now == "available" and not listing.has_buy_now:
        return False
    if query.buy_now == "not_available" and listing.has_buy_now:
        return False

    if query.odometer_range is not None:
        # Unknown odometer readings count as zero km
        odometer_km = listing.odometer_km or 0.0
        if not query.odometer_range.contains(odometer_km):
            return False

    if query.year_from is not None and listing.year < query.year_from:
        return False
    if query.year_to is not None and listing.year > query.year_to:
        return False

    return True


class ListingFilter:
    """
    Filters the catalog by free text and discrete filters.
    The result is a stable subsequence of the input.
    """

    def filter(
        self,
        listings: Sequence[Listing],
        query: ListingQuery,
    ) -> list[Listing]:
        """
        Filter listings against a query.

        Args:
            listings: The loaded catalog
            query: Free text and discrete filters

        Returns:
            Listings passing every condition, in original order
        """
        if query.is_empty:
            return list(listings)

        normalized_query = normalize(query.text)
        tokens = tokenize(query.text)

        result = [
            listing
            for listing in listings
            if (not normalized_query or matches_text(listing, normalized_query, tokens))
            and matches_filters(listing, query)
        ]

        logger.info(f"Filtered {len(listings)} listings to {len(result)}")
        return result


def filter_listings(listings: Sequence[Listing], query: ListingQuery) -> list[Listing]:
    """Convenience wrapper around ListingFilter."""
    return ListingFilter().filter(listings, query)
