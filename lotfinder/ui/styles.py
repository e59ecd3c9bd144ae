"""
Custom CSS styles for the lotfinder UI.
"""
import streamlit as st


COLORS = {
    "primary": "#1E3A8A",
    "accent": "#2563EB",
    "surface": "#FFFFFF",
    "text": "#0F172A",
    "text_muted": "#64748B",
    "success": "#16A34A",
    "warning": "#D97706",
    "border": "#E2E8F0",
}


def inject_custom_css():
    """Inject custom CSS into the Streamlit app."""
    st.markdown(f"""
    <style>
    .app-header {{
        text-align: center;
        padding: 1.5rem 0 0.5rem;
    }}
    .app-header h1 {{
        font-weight: 800;
        letter-spacing: -0.03em;
        color: {COLORS['primary']};
    }}
    .app-header .subtitle {{
        color: {COLORS['text_muted']};
    }}
    .lot-card {{
        background: {COLORS['surface']};
        border: 1px solid {COLORS['border']};
        border-radius: 12px;
        padding: 1rem;
        margin-bottom: 0.75rem;
    }}
    .lot-card .title {{
        font-weight: 600;
        color: {COLORS['text']};
    }}
    .lot-card .price {{
        color: {COLORS['success']};
        font-weight: 700;
    }}
    .lot-card .damage {{
        color: {COLORS['warning']};
        font-size: 0.85rem;
    }}
    .score-badge {{
        float: right;
        background: {COLORS['accent']};
        color: white;
        border-radius: 999px;
        padding: 0.1rem 0.6rem;
        font-size: 0.8rem;
    }}
    </style>
    """, unsafe_allow_html=True)
