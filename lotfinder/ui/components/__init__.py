"""UI components package."""

from .search_input import render_search_section
from .advisor_form import render_question_step
from .result_card import render_listing_card, render_matches
from .detail_panel import render_comparison_table, render_detail_panel

__all__ = [
    "render_search_section",
    "render_question_step",
    "render_listing_card",
    "render_matches",
    "render_detail_panel",
    "render_comparison_table",
]
