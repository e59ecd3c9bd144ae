"""
Catalog client - loads the bundled lot snapshot into Listing models.
"""
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import quote

from pydantic import ValidationError

from ..errors import CatalogError
from ..models.listing import Listing, parse_money, parse_number


logger = logging.getLogger(__name__)

MAX_PHOTOS = 40

# Size variants of the same media: _thb, _ful, _hrs and video variants
_MEDIA_SIZE_SUFFIX = re.compile(r"_(?:thb|ful|hrs|vthb|vful|vhrs)(\.[a-z0-9]+)$", re.IGNORECASE)


def as_string(value: Any) -> Optional[str]:
    """Trimmed non-empty string, else None."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def _as_identifier(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return as_string(value)


def unique_strings(values: list[Optional[str]]) -> list[str]:
    out = []
    for value in values:
        if value and value not in out:
            out.append(value)
    return out


def media_identity(url: str) -> str:
    """Key identifying one photo regardless of size variant or query string."""
    cleaned = url.split("#")[0].split("?")[0].strip().lower()
    return _MEDIA_SIZE_SUFFIX.sub(r"\1", cleaned)


def unique_media_urls(values: list[Optional[str]]) -> list[str]:
    out = []
    seen = set()
    for value in values:
        if not value:
            continue
        key = media_identity(value)
        if key in seen:
            continue
        seen.add(key)
        out.append(value)
    return out


def parse_model_from_title(title: Optional[str]) -> Optional[str]:
    """'2015 TOYOTA CAMRY LE' -> 'CAMRY LE'."""
    if not title:
        return None
    parts = title.split()
    if len(parts) < 3:
        return None
    return " ".join(parts[2:])


def parse_city_from_yard(yard_name: Optional[str]) -> Optional[str]:
    """'TX - DALLAS' -> 'DALLAS'."""
    if not yard_name:
        return None
    parts = yard_name.split("-")
    if len(parts) < 2:
        return None
    return "-".join(parts[1:]).strip() or None


def build_lot_url(lot: str) -> str:
    return f"https://www.copart.com/lot/{quote(lot, safe='')}"


def parse_auction_date(item: dict[str, Any]) -> Optional[float]:
    """Auction time in epoch milliseconds."""
    ts = parse_number(item.get("auction_date_ts"))
    if ts is not None:
        return ts
    iso = as_string(item.get("auction_date_iso"))
    if not iso:
        return None
    try:
        parsed = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.timestamp() * 1000


def extract_photo_urls(item: dict[str, Any]) -> list[str]:
    """One best URL per photo, deduplicated across size variants."""
    images = item.get("images") or {}
    data = images.get("data") if isinstance(images, dict) else None
    images_list = (data or {}).get("imagesList") if isinstance(data, dict) else None
    entries = (images_list or {}).get("IMAGE") if isinstance(images_list, dict) else None

    urls: list[Optional[str]] = []
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            urls.append(
                as_string(entry.get("highResUrl"))
                or as_string(entry.get("fullUrl"))
                or as_string(entry.get("thumbnailUrl"))
            )

    if not urls:
        urls.append(as_string(item.get("thumbnail_url")))

    return unique_media_urls(urls)[:MAX_PHOTOS]


def extract_highlights(item: dict[str, Any]) -> list[str]:
    damage = item.get("damage_highlights")
    from_damage = [as_string(h) for h in damage] if isinstance(damage, list) else []
    extra = [
        as_string(item.get("sale_status_text")),
        as_string(item.get("title_brand")),
        as_string(item.get("title_type")),
        as_string(item.get("fuel")),
    ]
    return unique_strings(from_damage + extra)


def _interior_color(item: dict[str, Any]) -> Optional[str]:
    """Interior colour, estimated from the exterior when not listed."""
    for key in ("int_color", "interior_color", "interiorColor"):
        value = as_string(item.get(key))
        if value:
            return value
    for key in ("ext_color", "clr", "exterior_color", "color"):
        value = as_string(item.get(key))
        if value:
            return f"{value} (estimated)"
    return None


def to_listing(item: dict[str, Any]) -> Listing:
    """
    Convert one raw lot-detail record to a Listing.

    Safely extracts fields with null fallbacks for missing data.
    """
    lot = _as_identifier(item.get("lot")) or _as_identifier(item.get("lot_number_numeric")) or "0"

    city = parse_city_from_yard(as_string(item.get("yard_name")))
    location = ", ".join(unique_strings([
        city,
        as_string(item.get("state")),
        as_string(item.get("country")),
        as_string(item.get("yard_name")),
    ])) or None

    return Listing(
        lot_number=lot,
        make=as_string(item.get("make")) or "Unknown",
        model=(
            as_string(item.get("model"))
            or parse_model_from_title(as_string(item.get("full_title")))
            or "Unknown"
        ),
        year=item.get("year"),
        odometer=item.get("odometer_value"),
        item_url=as_string(item.get("lot_url")) or build_lot_url(lot),
        color=as_string(item.get("color")),
        condition=as_string(item.get("condition_note")),
        primary_damage=as_string(item.get("primary_damage")),
        secondary_damage=as_string(item.get("secondary_damage")),
        location=location,
        base_site="copart",
        buy_it_now_price=parse_money(item.get("buy_now_price")),
        estimated_retail_value=parse_money(item.get("estimated_retail_value")),
        images=extract_photo_urls(item),
        auction_date=parse_auction_date(item),
        highlights=extract_highlights(item),
        fuel=as_string(item.get("fuel")) or as_string(item.get("ft")),
        transmission=as_string(item.get("tsmn")) or as_string(item.get("transmission")),
        interior_color=_interior_color(item),
        raw=item,
    )


class CatalogClient:
    """
    Loads the listing snapshot once and keeps it in memory.
    The snapshot is the JSON document written by the sync command.
    """

    def __init__(self, snapshot_path: Union[str, Path]):
        self.snapshot_path = Path(snapshot_path)
        self._listings: Optional[list[Listing]] = None

    def _read_items(self) -> list[Any]:
        try:
            payload = json.loads(self.snapshot_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise CatalogError(f"Snapshot not found: {self.snapshot_path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not read snapshot {self.snapshot_path}: {e}") from e

        items = payload.get("items") if isinstance(payload, dict) else None
        return items if isinstance(items, list) else []

    def load_all_listings(self) -> list[Listing]:
        """Return every listing in the snapshot, reading the file only once."""
        if self._listings is not None:
            return self._listings

        listings = []
        for index, item in enumerate(self._read_items()):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object item at index {index}")
                continue
            try:
                listings.append(to_listing(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid lot at index {index}: {e}")

        logger.info(f"Loaded {len(listings)} listings from {self.snapshot_path}")
        self._listings = listings
        return listings

    def get_by_lot_number(self, lot_number: str) -> Optional[Listing]:
        return next(
            (l for l in self.load_all_listings() if l.lot_number == lot_number),
            None,
        )
