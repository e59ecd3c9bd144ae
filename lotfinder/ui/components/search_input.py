"""
Search input component - free text plus catalog filters.
"""
import streamlit as st

from ...models.listing import Listing
from ...models.query import ListingQuery, ODOMETER_BUCKETS
from ...pipeline import facets


ALL = ""


def _select(label: str, options: list, key: str, format_func=str):
    return st.selectbox(
        label,
        options=[ALL] + options,
        format_func=lambda x: f"All {label}" if x == ALL else format_func(x),
        key=key,
    )


def render_search_section(listings: list[Listing]) -> ListingQuery:
    """
    Render the search box and filter controls.

    Returns:
        ListingQuery built from the current widget state
    """
    text = st.text_input(
        "Search",
        placeholder="Make, model, lot number, damage, location...",
        key="search_query",
        label_visibility="collapsed",
    )

    with st.expander("Filters", expanded=False):
        col1, col2, col3 = st.columns(3)

        with col1:
            company = _select("Companies", facets.companies(listings), "f_company", str.upper)
            brand = _select("Brands", facets.brands(listings), "f_brand")
            model = _select("Models", facets.models_for_brand(listings, brand), "f_model")
            color = _select("Colors", facets.colors(listings), "f_color")

        with col2:
            interior = _select("Interior Colors", facets.interior_colors(listings), "f_interior")
            fuel = _select("Fuel Types", facets.fuel_types(listings), "f_fuel")
            transmission = _select("Transmissions", facets.transmissions(listings), "f_transmission")
            condition = _select("Conditions", facets.conditions(listings), "f_condition")

        with col3:
            buy_now_labels = dict(facets.buy_now_options(listings))
            buy_now = _select(
                "Buy Now Options", list(buy_now_labels), "f_buy_now",
                lambda v: buy_now_labels.get(v, v),
            )
            odometer = _select(
                "Odometer Ranges", list(ODOMETER_BUCKETS), "f_odometer",
                lambda v: ODOMETER_BUCKETS.get(v, v),
            )
            years = facets.available_years(listings)
            year_from = _select("Years (from)", years, "f_year_from")
            year_to = _select("Years (to)", years, "f_year_to")

    return ListingQuery(
        text=text,
        company=company,
        brand=brand,
        model=model,
        color=color,
        interior_color=interior,
        condition=condition,
        fuel_type=fuel,
        transmission=transmission,
        buy_now=buy_now or None,
        odometer_range=odometer,
        year_from=year_from or None,
        year_to=year_to or None,
    )
