"""Catalog data source."""

from .catalog import CatalogClient, to_listing

__all__ = ["CatalogClient", "to_listing"]
