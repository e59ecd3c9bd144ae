"""
Side-by-side comparison, lot details and saved favorites.
"""
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from .models.listing import Listing


logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"
DETAIL_PHOTO_LIMIT = 12

_USER_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def format_auction_date(timestamp_ms: Optional[float]) -> str:
    """Epoch milliseconds as e.g. "January 8, 2025" (UTC)."""
    if not timestamp_ms:
        return NOT_AVAILABLE
    try:
        moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return NOT_AVAILABLE
    return f"{moment:%B} {moment.day}, {moment.year}"


def _money(amount: Optional[float]) -> str:
    return f"${amount:,.0f}" if amount else NOT_AVAILABLE


def _odometer(listing: Listing) -> str:
    if listing.odometer_km is None:
        return NOT_AVAILABLE
    return f"{listing.odometer_km:,.0f} km"


def company_label(listing: Listing) -> str:
    return "IAAI" if listing.company == "iaai" else "Copart"


def detail_rows(listing: Listing) -> list[tuple[str, str]]:
    """
    Field-by-field description of one lot.

    Every row is present for every listing, so rows line up across a
    comparison. Missing values read "Not available".
    """
    return [
        ("Lot Number", listing.lot_number),
        ("Company", company_label(listing)),
        ("Sale Date", format_auction_date(listing.auction_date)),
        ("Year", str(listing.year) if listing.year else NOT_AVAILABLE),
        ("Make", listing.make),
        ("Model", listing.model),
        ("Odometer", _odometer(listing)),
        ("Exterior Color", listing.color or NOT_AVAILABLE),
        ("Interior Color", listing.interior_color or NOT_AVAILABLE),
        ("Transmission", listing.transmission or NOT_AVAILABLE),
        ("Fuel", listing.fuel or NOT_AVAILABLE),
        ("Condition", listing.condition or NOT_AVAILABLE),
        ("Primary Damage", listing.primary_damage or NOT_AVAILABLE),
        ("Secondary Damage", listing.secondary_damage or NOT_AVAILABLE),
        ("Buy Now Price", _money(listing.buy_it_now_price)),
        ("Est. Retail Value", _money(listing.estimated_retail_value)),
        ("Location", listing.location or NOT_AVAILABLE),
        ("Photos", str(listing.photo_count)),
        ("Highlights", ", ".join(listing.highlights) or NOT_AVAILABLE),
    ]


def comparison_rows(listings: Sequence[Listing]) -> list[tuple[str, list[str]]]:
    """Detail rows of several lots, one value per lot in pick order."""
    if not listings:
        return []
    per_listing = [detail_rows(l) for l in listings]
    labels = [label for label, _ in per_listing[0]]
    return [
        (label, [rows[i][1] for rows in per_listing])
        for i, label in enumerate(labels)
    ]


class ComparisonSet:
    """Listings picked for side-by-side comparison, in pick order."""

    def __init__(self):
        self.selected: list[Listing] = []

    def contains(self, lot_number: str) -> bool:
        return any(l.lot_number == lot_number for l in self.selected)

    def toggle(self, listing: Listing) -> None:
        """Add the listing, or remove it when already selected."""
        if self.contains(listing.lot_number):
            self.selected = [l for l in self.selected if l.lot_number != listing.lot_number]
        else:
            self.selected = self.selected + [listing]

    def swap(self) -> None:
        """Swap the first two picks. Fewer than two is a no-op."""
        if len(self.selected) < 2:
            return
        self.selected = [self.selected[1], self.selected[0]]

    def clear(self) -> None:
        self.selected = []


class FavoritesStore:
    """
    Saved lot numbers, persisted as a JSON list.
    An unreadable file is treated as no favorites.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def for_user(cls, directory: Union[str, Path], user_id: str) -> "FavoritesStore":
        """
        One favorites file per user under directory.

        The user id is reduced to letters, digits, "_" and "-" so it
        cannot escape the directory.
        """
        safe_id = _USER_ID_UNSAFE.sub("", user_id or "")[:64]
        if not safe_id:
            raise ValueError(f"Unusable favorites user id: {user_id!r}")
        return cls(Path(directory) / f"{safe_id}.json")

    def ids(self) -> list[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable favorites file {self.path}: {e}")
            return []
        if not isinstance(data, list):
            return []
        return [str(x) for x in data]

    def _write(self, ids: Sequence[str]) -> None:
        unique = list(dict.fromkeys(ids))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(unique), encoding="utf-8")

    def contains(self, lot_number: str) -> bool:
        return lot_number in self.ids()

    def add(self, lot_number: str) -> None:
        self._write(self.ids() + [lot_number])

    def remove(self, lot_number: str) -> None:
        self._write([i for i in self.ids() if i != lot_number])

    def toggle(self, lot_number: str) -> bool:
        """Flip a favorite. Returns True when the lot is now saved."""
        if self.contains(lot_number):
            self.remove(lot_number)
            return False
        self.add(lot_number)
        return True

    def clear(self) -> None:
        self._write([])

    def select(self, listings: Sequence[Listing]) -> list[Listing]:
        """Favorite listings, in catalog order."""
        saved = set(self.ids())
        return [l for l in listings if l.lot_number in saved]
