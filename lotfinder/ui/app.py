"""
kala - auction car finder

Streamlit UI: browse and filter the catalog, get advisor matches,
open lot details, compare picks and keep favorites.
"""
import sys
import uuid
from datetime import datetime
from pathlib import Path

# Add project root to path for imports when running via streamlit
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import json

import streamlit as st

from lotfinder.client import CatalogClient
from lotfinder.comparison import ComparisonSet, FavoritesStore
from lotfinder.config import get_config
from lotfinder.errors import CatalogError
from lotfinder.logging_setup import configure_logging
from lotfinder.models.preferences import build_questions
from lotfinder.pipeline import facets, run_advisor, run_search

from lotfinder.ui.styles import inject_custom_css
from lotfinder.ui.components import (
    render_comparison_table,
    render_detail_panel,
    render_listing_card,
    render_matches,
    render_question_step,
    render_search_section,
)

VIEWS = ["browse", "advisor", "compare", "favorites"]
USER_PARAM = "u"


@st.cache_resource
def load_catalog(snapshot_path: str) -> CatalogClient:
    """Load the snapshot once per server process."""
    client = CatalogClient(snapshot_path)
    client.load_all_listings()
    return client


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        "view": "browse",
        "detail_lot": None,
        "answers": {},
        "manual_location": "",
        "advisor_step": 0,
        "comparison": ComparisonSet(),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def current_user_id() -> str:
    """
    Browser-scoped user id kept in the page URL.

    Reloading or bookmarking the page keeps the same favorites.
    """
    user_id = st.query_params.get(USER_PARAM)
    if not user_id:
        user_id = uuid.uuid4().hex
        st.query_params[USER_PARAM] = user_id
    return user_id


def main():
    """Main application entry point."""
    config = get_config()
    configure_logging(config.log_level)

    st.set_page_config(
        page_title=config.ui.page_title,
        page_icon=config.ui.page_icon,
        layout="wide",
    )
    inject_custom_css()
    init_session_state()

    st.markdown("""
    <div class="app-header">
        <h1>kala</h1>
        <p class="subtitle">Find, rank and compare auction cars</p>
    </div>
    """, unsafe_allow_html=True)

    try:
        catalog = load_catalog(str(config.data.snapshot_path))
        listings = catalog.load_all_listings()
    except CatalogError as e:
        st.error(f"Could not load cars. {e}")
        return

    favorites = None
    if config.enable_favorites:
        try:
            favorites = FavoritesStore.for_user(config.data.favorites_dir, current_user_id())
        except ValueError:
            st.query_params[USER_PARAM] = uuid.uuid4().hex
            st.rerun()

    views = VIEWS if favorites else VIEWS[:-1]
    if st.session_state.view not in views:
        st.session_state.view = "browse"
    chosen = st.radio(
        "View",
        options=views,
        index=views.index(st.session_state.view),
        format_func=str.title,
        horizontal=True,
        label_visibility="collapsed",
    )
    if chosen != st.session_state.view:
        st.session_state.detail_lot = None
    st.session_state.view = chosen

    if st.session_state.detail_lot is not None:
        render_lot_view(catalog, st.session_state.detail_lot, favorites)
        return

    card_actions = {
        "on_compare": st.session_state.comparison.toggle,
        "on_favorite": (lambda l: favorites.toggle(l.lot_number)) if favorites else None,
        "on_details": open_details,
    }

    view = st.session_state.view
    if view == "browse":
        render_browse_view(listings, card_actions)
    elif view == "advisor":
        render_advisor_view(listings, card_actions)
    elif view == "compare":
        render_compare_view()
    elif view == "favorites":
        render_favorites_view(listings, favorites)


def open_details(listing):
    st.session_state.detail_lot = listing.lot_number
    st.rerun()


def render_lot_view(catalog: CatalogClient, lot_number: str, favorites):
    if st.button("← Back to results"):
        st.session_state.detail_lot = None
        st.rerun()

    listing = catalog.get_by_lot_number(lot_number)
    render_detail_panel(listing)
    if listing is None:
        return

    comparison = st.session_state.comparison
    col1, col2 = st.columns(2)
    with col1:
        label = "Remove from compare" if comparison.contains(lot_number) else "Add to compare"
        if st.button(label, use_container_width=True):
            comparison.toggle(listing)
            st.rerun()
    if favorites is not None:
        with col2:
            label = "Remove from favorites" if favorites.contains(lot_number) else "Save to favorites"
            if st.button(label, use_container_width=True):
                favorites.toggle(lot_number)
                st.rerun()


def render_browse_view(listings, card_actions):
    query = render_search_section(listings)
    results = run_search(listings, query)

    st.markdown(f"**{len(results)}** of {len(listings)} cars")
    page_size = get_config().ui.page_size
    cols = st.columns(3)
    for i, listing in enumerate(results[:page_size]):
        with cols[i % 3]:
            render_listing_card(listing, key_prefix="browse", **card_actions)


def render_advisor_view(listings, card_actions):
    questions = build_questions(facets.brands(listings), facets.colors(listings))
    step = st.session_state.advisor_step

    if step < len(questions):
        render_question_step(questions, step)
        return

    run = run_advisor(
        listings,
        st.session_state.answers,
        manual_location=st.session_state.manual_location,
    )

    st.markdown("### Your best matches")
    st.caption("Ranked using your answers (budget, year, mileage, damage tolerance, and preferences).")
    render_matches(run.matches, **card_actions)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Start over", use_container_width=True):
            st.session_state.answers = {}
            st.session_state.manual_location = ""
            st.session_state.advisor_step = 0
            st.rerun()
    with col2:
        if run.matches:
            st.download_button(
                "Export JSON",
                data=json.dumps(run.to_minimal_export(), indent=2, ensure_ascii=False),
                file_name=f"lotfinder_matches_{datetime.now().strftime('%Y%m%d_%H%M')}.json",
                mime="application/json",
                use_container_width=True,
            )


def render_compare_view():
    comparison = st.session_state.comparison
    if not comparison.selected:
        st.info("Pick cars with the Compare button to see them side by side.")
        return

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Swap", use_container_width=True, disabled=len(comparison.selected) < 2):
            comparison.swap()
            st.rerun()
    with col2:
        if st.button("Clear", use_container_width=True):
            comparison.clear()
            st.rerun()

    cols = st.columns(len(comparison.selected))
    for col, listing in zip(cols, comparison.selected):
        with col:
            render_listing_card(listing, key_prefix="compare", on_details=open_details)

    render_comparison_table(comparison.selected)


def render_favorites_view(listings, favorites):
    saved = favorites.select(listings)
    st.markdown(f"**{len(saved)}** car{'s' if len(saved) != 1 else ''} saved")
    if saved and st.button("Remove all favorites"):
        favorites.clear()
        st.rerun()

    def remove(listing):
        favorites.remove(listing.lot_number)
        st.rerun()

    for listing in saved:
        render_listing_card(
            listing,
            key_prefix="fav",
            on_favorite=remove,
            on_details=open_details,
        )


if __name__ == "__main__":
    main()
