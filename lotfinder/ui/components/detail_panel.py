"""
Detail panel component - full lot view and side-by-side comparison table.
"""
import streamlit as st
from typing import Optional, Sequence

from ...comparison import DETAIL_PHOTO_LIMIT, comparison_rows, detail_rows, format_auction_date
from ...models.listing import Listing


def render_detail_panel(listing: Optional[Listing]):
    """
    Render every field of one lot with its photo gallery.

    Args:
        listing: The lot to show, None when the lot number is unknown
    """
    if listing is None:
        st.info("This lot is no longer in the catalog.")
        return

    st.markdown(f"## {listing.title}")
    st.markdown(f"Lot #{listing.lot_number} • Sale date {format_auction_date(listing.auction_date)}")

    if listing.images:
        st.image(listing.images[0], use_container_width=True)
        gallery = listing.images[1:DETAIL_PHOTO_LIMIT + 1]
        if gallery:
            st.image(gallery, width=160)
        if listing.photo_count > DETAIL_PHOTO_LIMIT + 1:
            st.caption(f"{listing.photo_count} photos in total")

    col1, col2 = st.columns(2)
    rows = detail_rows(listing)
    half = (len(rows) + 1) // 2
    for col, chunk in ((col1, rows[:half]), (col2, rows[half:])):
        with col:
            st.markdown("\n".join(f"- **{label}:** {value}" for label, value in chunk))

    # Highlights
    if listing.highlights:
        st.markdown("### Highlights")
        for highlight in listing.highlights:
            st.markdown(f"- {highlight}")

    if listing.item_url:
        st.link_button("Open lot page", listing.item_url)


def render_comparison_table(listings: Sequence[Listing]):
    """Field-by-field table, one column per picked lot."""
    rows = comparison_rows(listings)
    if not rows:
        return

    headers = [f"{l.title} (#{l.lot_number})" for l in listings]
    table = {"Field": [label for label, _ in rows]}
    for i, header in enumerate(headers):
        table[header] = [values[i] for _, values in rows]
    st.dataframe(table, hide_index=True, use_container_width=True)
