"""
Result card component - renders listings and advisor matches.
"""
from typing import Callable, Optional

import streamlit as st

from ...models.listing import Listing
from ...models.scoring import MatchResult


def _price_text(listing: Listing) -> str:
    if listing.buy_it_now_price:
        return f"Buy now ${listing.buy_it_now_price:,.0f}"
    if listing.estimated_retail_value:
        return f"Est. retail ${listing.estimated_retail_value:,.0f}"
    return "Price not listed"


def render_listing_card(
    listing: Listing,
    score: Optional[float] = None,
    on_compare: Optional[Callable[[Listing], None]] = None,
    on_favorite: Optional[Callable[[Listing], None]] = None,
    on_details: Optional[Callable[[Listing], None]] = None,
    key_prefix: str = "card",
):
    """Render one listing card with optional score badge and actions."""
    odometer = f"{listing.odometer_km:,.0f} km" if listing.odometer_km is not None else "Odometer unknown"
    damage = " / ".join(d for d in (listing.primary_damage, listing.secondary_damage) if d)
    badge = f'<span class="score-badge">{score:.1f}</span>' if score is not None else ""

    st.markdown(f"""
    <div class="lot-card">
        {badge}
        <div class="title">{listing.title}</div>
        <div>Lot #{listing.lot_number} · {odometer} · {listing.color or 'Color unknown'}</div>
        <div class="price">{_price_text(listing)}</div>
        <div class="damage">{damage or 'No damage listed'}</div>
        <div>📍 {listing.location or 'Unknown location'} · 📷 {listing.photo_count}</div>
    </div>
    """, unsafe_allow_html=True)

    if listing.images:
        st.image(listing.images[0], use_container_width=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        if on_details is not None:
            if st.button("Details", key=f"{key_prefix}_det_{listing.lot_number}", use_container_width=True):
                on_details(listing)
        else:
            st.link_button("Open lot", listing.item_url, use_container_width=True)
    if on_compare is not None:
        with col2:
            if st.button("Compare", key=f"{key_prefix}_cmp_{listing.lot_number}", use_container_width=True):
                on_compare(listing)
    if on_favorite is not None:
        with col3:
            if st.button("♥", key=f"{key_prefix}_fav_{listing.lot_number}", use_container_width=True):
                on_favorite(listing)


def render_matches(matches: list[MatchResult], **card_kwargs):
    """Render advisor matches with their reasons."""
    if not matches:
        st.info("No cars found to recommend. Try relaxing constraints (budget, brand, or damage limits).")
        return

    for match in matches:
        render_listing_card(match.listing, score=match.score, key_prefix="match", **card_kwargs)
        if match.reasons:
            st.markdown("**Why this match**")
            st.markdown("\n".join(f"- {r}" for r in match.reasons))
