"""
Exceptions raised at the I/O edges. The search and scoring core never raises.
"""


class LotfinderError(Exception):
    """Base class for lotfinder errors."""


class CatalogError(LotfinderError):
    """The listing snapshot is missing or unreadable."""


class SyncError(LotfinderError):
    """The JSON-lines source could not be mirrored into the snapshot."""
