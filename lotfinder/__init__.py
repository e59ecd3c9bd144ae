"""
lotfinder - search, filter and rank auction vehicle listings.
"""

__version__ = "1.0.0"
