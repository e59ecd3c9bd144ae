"""
Listing model - one auction vehicle from the catalog snapshot.
"""
import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MILES_TO_KM = 1.60934

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_number(v: Any) -> Optional[float]:
    """Parse a finite number from int/float/str, else None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return float(v) if math.isfinite(v) else None
    if isinstance(v, str):
        try:
            n = float(v.strip())
        except ValueError:
            return None
        return n if math.isfinite(n) else None
    return None


def parse_money(v: Any) -> Optional[float]:
    """Parse a strictly positive amount, else None."""
    n = parse_number(v)
    if n is None or n <= 0:
        return None
    return n


class Listing(BaseModel):
    """
    Auction vehicle listing.

    Read-only input for filtering and scoring. Numeric fields that cannot be
    parsed are stored as None rather than rejected.
    """
    model_config = ConfigDict(frozen=True)

    lot_number: str
    make: str = "Unknown"
    model: str = "Unknown"
    year: int = 0
    odometer: Optional[float] = Field(default=None, description="Odometer in miles")
    item_url: str = ""

    color: Optional[str] = None
    condition: Optional[str] = None
    primary_damage: Optional[str] = None
    secondary_damage: Optional[str] = None
    location: Optional[str] = None
    base_site: Optional[str] = None

    buy_it_now_price: Optional[float] = None
    estimated_retail_value: Optional[float] = None

    images: list[str] = Field(default_factory=list)
    auction_date: Optional[float] = None
    highlights: list[str] = Field(default_factory=list)

    fuel: Optional[str] = None
    transmission: Optional[str] = None
    interior_color: Optional[str] = None

    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("lot_number", mode="before")
    @classmethod
    def parse_lot_number(cls, v: Any) -> str:
        if v is None:
            return "0"
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v).strip() or "0"

    @field_validator("year", mode="before")
    @classmethod
    def parse_year(cls, v: Any) -> int:
        """Unknown or unparsable years become 0."""
        n = parse_number(v)
        if n is None:
            return 0
        return max(0, round(n))

    @field_validator("odometer", mode="before")
    @classmethod
    def parse_odometer(cls, v: Any) -> Optional[float]:
        """Odometer text such as "12,345 mi" keeps its digits only."""
        if isinstance(v, str):
            digits = _NON_DIGITS.sub("", v)
            return float(digits) if digits else None
        return parse_number(v)

    @field_validator("auction_date", mode="before")
    @classmethod
    def parse_optional_number(cls, v: Any) -> Optional[float]:
        return parse_number(v)

    @field_validator("buy_it_now_price", "estimated_retail_value", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Optional[float]:
        return parse_money(v)

    @property
    def odometer_km(self) -> Optional[float]:
        if self.odometer is None:
            return None
        return self.odometer * MILES_TO_KM

    @property
    def photo_count(self) -> int:
        return len(self.images)

    @property
    def has_buy_now(self) -> bool:
        return self.buy_it_now_price is not None and self.buy_it_now_price > 0

    @property
    def advisor_price(self) -> Optional[float]:
        """Price the advisor compares against a budget."""
        if self.buy_it_now_price is not None:
            return self.buy_it_now_price
        return self.estimated_retail_value

    @property
    def company(self) -> Optional[str]:
        if not self.base_site or not self.base_site.strip():
            return None
        return self.base_site.strip().lower()

    @property
    def title(self) -> str:
        parts = [str(self.year) if self.year else "", self.make, self.model]
        return " ".join(p for p in parts if p)
