"""
Facet option lists for the browse filters.
"""
from typing import Callable, Optional, Sequence

from ..models.listing import Listing


def _unique_sorted(
    listings: Sequence[Listing],
    getter: Callable[[Listing], Optional[str]],
) -> list[str]:
    return sorted({value for value in map(getter, listings) if value})


def brands(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.make)


def models_for_brand(listings: Sequence[Listing], brand: Optional[str]) -> list[str]:
    """Models of one brand. Empty until a brand is chosen."""
    if not brand:
        return []
    return _unique_sorted([l for l in listings if l.make == brand], lambda l: l.model)


def colors(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.color)


def conditions(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.condition)


def companies(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.company)


def interior_colors(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.interior_color)


def fuel_types(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.fuel)


def transmissions(listings: Sequence[Listing]) -> list[str]:
    return _unique_sorted(listings, lambda l: l.transmission)


def available_years(listings: Sequence[Listing]) -> list[int]:
    """Known model years, newest first."""
    return sorted({l.year for l in listings if l.year}, reverse=True)


def buy_now_options(listings: Sequence[Listing]) -> list[tuple[str, str]]:
    """(value, label) pairs for the buy-now filter, only for states present."""
    options = []
    if any(l.has_buy_now for l in listings):
        options.append(("available", "Buy Now Available"))
    if any(not l.has_buy_now for l in listings):
        options.append(("not_available", "Buy Now Not Available"))
    return options
