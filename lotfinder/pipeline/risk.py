"""
Damage risk: map damage descriptions to a severity estimate in [0, 1].
"""
from enum import Enum
from typing import Optional

from ..models.listing import Listing


class DamageBucket(str, Enum):
    UNKNOWN = "unknown"
    LIGHT = "light"
    COLLISION = "collision"
    HAIL = "hail"
    FLOOD = "flood"
    FIRE = "fire"
    OTHER = "other"


# Checked in order, first match wins. A description mentioning both
# FRONT and WATER resolves to COLLISION.
BUCKET_KEYWORDS: list[tuple[DamageBucket, tuple[str, ...]]] = [
    (DamageBucket.LIGHT, ("NORMAL", "MINOR", "DENT", "SCRATCH")),
    (DamageBucket.COLLISION, ("FRONT", "REAR", "SIDE")),
    (DamageBucket.HAIL, ("HAIL",)),
    (DamageBucket.FLOOD, ("WATER", "FLOOD")),
    (DamageBucket.FIRE, ("BURN", "FIRE")),
]

BUCKET_RISK = {
    DamageBucket.UNKNOWN: 0.45,
    DamageBucket.LIGHT: 0.20,
    DamageBucket.COLLISION: 0.55,
    DamageBucket.HAIL: 0.50,
    DamageBucket.FLOOD: 0.85,
    DamageBucket.FIRE: 0.90,
    DamageBucket.OTHER: 0.55,
}

TOLERANCE_FACTORS = {"low": 0.45, "medium": 0.70, "high": 1.0}
REPAIR_FACTORS = {"low": 0.55, "medium": 0.80, "high": 1.0}


def classify_damage(description: Optional[str]) -> DamageBucket:
    text = (description or "").upper()
    if not text:
        return DamageBucket.UNKNOWN
    for bucket, keywords in BUCKET_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return bucket
    return DamageBucket.OTHER


def damage_risk(description: Optional[str]) -> float:
    return BUCKET_RISK[classify_damage(description)]


def listing_risk(listing: Listing) -> float:
    """Worst of primary and secondary damage risk."""
    return max(damage_risk(listing.primary_damage), damage_risk(listing.secondary_damage))


def tolerance_factor(level: str) -> float:
    return TOLERANCE_FACTORS.get(level, 1.0)


def repair_factor(level: str) -> float:
    return REPAIR_FACTORS.get(level, 1.0)
