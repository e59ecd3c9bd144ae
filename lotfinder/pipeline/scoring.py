"""
Preference scorer - rule-based advisor scoring with human-readable reasons.
"""
import logging
from typing import Optional, Sequence

from ..models.listing import Listing
from ..models.preferences import PreferenceSet
from ..models.scoring import MatchResult
from .risk import listing_risk, repair_factor, tolerance_factor


logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 6
MAX_REASONS = 4

# Inclusive (min, max) model years
YEAR_BANDS = {
    "newer": (2018, 2050),
    "mid": (2012, 2017),
    "older": (2000, 2011),
    "any": (0, 3000),
}

LOW_KM_MAX = 96_000
HIGH_KM_MIN = 193_000
MILEAGE_BANDS: dict[str, tuple[Optional[float], Optional[float]]] = {
    "low": (None, LOW_KM_MAX),
    "medium": (LOW_KM_MAX, HIGH_KM_MIN),
    "high": (HIGH_KM_MIN, None),
    "any": (None, None),
}


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _money(amount: float) -> str:
    return f"{amount:,.0f}"


class PreferenceScorer:
    """
    Deterministic advisor scoring.

    Scores start at 0 and every preference dimension adds or subtracts
    independently. Higher is better; scores can be negative.
    """

    def __init__(self, max_reasons: int = MAX_REASONS):
        self.max_reasons = max_reasons

    def score(self, listing: Listing, prefs: PreferenceSet) -> MatchResult:
        """
        Score one listing against resolved preferences.

        Args:
            listing: The listing to score
            prefs: Fully resolved preferences

        Returns:
            MatchResult with the raw score and capped reasons
        """
        reasons: list[str] = []
        year = listing.year
        odometer_km = listing.odometer_km
        price = listing.advisor_price
        retail = listing.estimated_retail_value

        score = 0.0
        score += self._budget(price, prefs, reasons)
        score += self._year(year, prefs, reasons)
        score += self._mileage(odometer_km, prefs, reasons)
        score += self._brand(listing, prefs, reasons)
        score += self._color(listing, prefs, reasons)
        score += self._photos(listing, prefs, reasons)
        score += self._location(listing, prefs, reasons)
        score += self._buy_now(listing, prefs, reasons)

        risk = listing_risk(listing)
        score += self._damage(risk, prefs, reasons)
        score += self._avoid_damage(listing, prefs, reasons)

        score += self._goal(prefs, year, odometer_km, price, retail, risk)
        score += self._value_focus(prefs, year, odometer_km, price, retail)

        final_reasons = reasons[: self.max_reasons] if prefs.wants_explanations else []
        return MatchResult(listing=listing, score=score, reasons=final_reasons)

    def _budget(self, price: Optional[float], prefs: PreferenceSet, reasons: list[str]) -> float:
        budget = prefs.budget_max
        if not budget:
            return 0.0
        if not price:
            reasons.append("Price not listed; harder to match your budget.")
            return -5.0
        if price <= budget:
            reasons.append(f"Within budget (≈ ${_money(price)}).")
            return 20.0
        over = (price - budget) / budget
        reasons.append(f"Above budget (≈ ${_money(price)}).")
        return -clamp(over * 25, 5, 30)

    def _year(self, year: int, prefs: PreferenceSet, reasons: list[str]) -> float:
        lo, hi = YEAR_BANDS[prefs.year_pref]
        if lo <= year <= hi:
            reasons.append(f"Year matches your preference ({year}).")
            return 18.0
        if year > 0:
            return 6.0
        return 0.0

    def _mileage(self, km: Optional[float], prefs: PreferenceSet, reasons: list[str]) -> float:
        if km is None:
            return -3.0

        lo, hi = MILEAGE_BANDS[prefs.mileage]
        km_text = f"{round(km):,}"
        if lo is None and hi is not None:
            if km <= hi:
                reasons.append(f"Low km ({km_text} km).")
                return 16.0
        elif lo is not None and hi is not None:
            if lo <= km <= hi:
                reasons.append(f"KM in your range ({km_text} km).")
                return 14.0
            return -6.0
        elif lo is not None and km >= lo:
            reasons.append(f"High km OK ({km_text} km).")
            return 10.0
        return 6.0

    def _brand(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        if not prefs.brands:
            return 0.0
        if listing.make in prefs.brands:
            reasons.append(f"Preferred brand ({listing.make}).")
            return 14.0
        return -4.0

    def _color(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        if prefs.color == "any":
            return 0.0
        if (listing.color or "").lower() == prefs.color.lower():
            reasons.append(f"Color match ({listing.color}).")
            return 6.0
        return -2.0

    def _photos(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        if not prefs.wants_photos:
            return 0.0
        if listing.photo_count >= 12:
            reasons.append(f"Many photos ({listing.photo_count}).")
            return 6.0
        return -2.0

    def _location(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        needle = prefs.location_text.strip().lower()
        if not needle:
            return 0.0
        if needle in (listing.location or "").lower():
            reasons.append(f"Matches location preference ({listing.location}).")
            return 6.0
        return -2.0

    def _buy_now(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        if not prefs.wants_buy_now:
            return 0.0
        if listing.buy_it_now_price is not None:
            reasons.append("Has Buy It Now price.")
            return 10.0
        return -10.0

    def _damage(self, risk: float, prefs: PreferenceSet, reasons: list[str]) -> float:
        contribution = (
            (1 - risk) * 20
            * tolerance_factor(prefs.damage_tolerance)
            * repair_factor(prefs.repair_budget)
        )
        if risk >= 0.85:
            reasons.append("Higher damage risk; might need bigger repairs.")
        elif risk <= 0.25:
            reasons.append("Looks like lighter damage overall.")
        return contribution

    def _avoid_damage(self, listing: Listing, prefs: PreferenceSet, reasons: list[str]) -> float:
        if not prefs.avoid_damage:
            return 0.0
        damage = f"{listing.primary_damage or ''} {listing.secondary_damage or ''}".upper()
        if any(keyword.upper() in damage for keyword in prefs.avoid_damage):
            reasons.append("Contains a damage type you wanted to avoid.")
            return -10.0
        return 0.0

    def _goal(
        self,
        prefs: PreferenceSet,
        year: int,
        km: Optional[float],
        price: Optional[float],
        retail: Optional[float],
        risk: float,
    ) -> float:
        adjustment = 0.0
        if prefs.goal == "budget" and price is not None:
            adjustment += clamp(25_000 / max(price, 1), 0, 20)
        if prefs.goal in ("family", "commute"):
            if year >= 2016:
                adjustment += 6
            if km is not None and km <= 145_000:
                adjustment += 4
        if prefs.goal == "project" and risk >= 0.55:
            adjustment += 8
        if prefs.goal == "value" and retail is not None and price is not None:
            adjustment += clamp((retail - price) / 1000, -10, 20)
        return adjustment

    def _value_focus(
        self,
        prefs: PreferenceSet,
        year: int,
        km: Optional[float],
        price: Optional[float],
        retail: Optional[float],
    ) -> float:
        focus = prefs.value_focus
        if focus == "cheap" and price is not None:
            return clamp(18_000 / max(price, 1), 0, 18)
        if focus == "newer":
            return clamp((year - 2000) / 2.2, 0, 20)
        if focus == "miles" and km is not None:
            return clamp(193_000 / max(km, 1), 0, 18)
        if focus == "retail" and retail is not None:
            return clamp(retail / 2000, 0, 18)
        return 0.0

    def rank(
        self,
        listings: Sequence[Listing],
        prefs: PreferenceSet,
        top_n: int = DEFAULT_TOP_N,
    ) -> list[MatchResult]:
        """
        Score and rank listings.

        Sorting is stable, so equal scores keep catalog order.

        Args:
            listings: Listings to rank
            prefs: Resolved preferences
            top_n: Number of matches to return

        Returns:
            At most top_n MatchResults, best first
        """
        scored = [self.score(listing, prefs) for listing in listings]
        scored.sort(key=lambda m: m.score, reverse=True)

        logger.info(f"Ranked {len(scored)} listings, returning top {min(top_n, len(scored))}")
        return scored[: max(top_n, 0)]


def score_listing(listing: Listing, prefs: PreferenceSet) -> MatchResult:
    return PreferenceScorer().score(listing, prefs)


def rank_listings(
    listings: Sequence[Listing],
    prefs: PreferenceSet,
    top_n: int = DEFAULT_TOP_N,
) -> list[MatchResult]:
    return PreferenceScorer().rank(listings, prefs, top_n=top_n)
