"""
Query models - free-text search plus discrete catalog filters.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class OdometerRange(BaseModel):
    """Inclusive odometer bucket in kilometres. No max means unbounded above."""
    min_km: float = 0
    max_km: Optional[float] = None

    @classmethod
    def parse(cls, value: str) -> "OdometerRange":
        """
        Parse a bucket string such as "40000-80000" or "160000-".

        A zero or missing upper bound is treated as open-ended.
        """
        lower, _, upper = value.partition("-")
        try:
            min_km = float(lower.strip()) if lower.strip() else 0.0
        except ValueError:
            min_km = 0.0
        try:
            max_km = float(upper.strip()) if upper.strip() else None
        except ValueError:
            max_km = None
        return cls(min_km=min_km, max_km=max_km or None)

    def contains(self, km: float) -> bool:
        if km < self.min_km:
            return False
        if self.max_km is not None and km > self.max_km:
            return False
        return True


# Bucket values offered by the browse view
ODOMETER_BUCKETS = {
    "0-40000": "0 - 40k km",
    "40000-80000": "40k - 80k km",
    "80000-120000": "80k - 120k km",
    "120000-160000": "120k - 160k km",
    "160000-999999": "160k+ km",
}


class ListingQuery(BaseModel):
    """
    A catalog query. All set filters are ANDed, and ANDed with the text.
    Empty strings are treated as "not set".
    """
    text: str = Field(default="", description="Free-text search")

    company: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    interior_color: Optional[str] = None
    condition: Optional[str] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None

    year_from: Optional[int] = None
    year_to: Optional[int] = None
    odometer_range: Optional[OdometerRange] = None
    buy_now: Optional[Literal["available", "not_available"]] = None

    @field_validator(
        "company", "brand", "model", "color", "interior_color",
        "condition", "fuel_type", "transmission", "buy_now",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v:
            return None
        return v

    @field_validator("year_from", "year_to", mode="before")
    @classmethod
    def parse_year(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return None
        return v

    @field_validator("odometer_range", mode="before")
    @classmethod
    def parse_odometer_range(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return OdometerRange.parse(v)
        return v

    @property
    def is_empty(self) -> bool:
        """True when the query would keep every listing."""
        return not self.text.strip() and not any(
            getattr(self, name) is not None
            for name in type(self).model_fields
            if name != "text"
        )
