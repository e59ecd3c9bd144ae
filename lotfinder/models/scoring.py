"""
Scoring models - advisor match results and run export.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from .listing import Listing
from .preferences import PreferenceSet


class MatchResult(BaseModel):
    """A listing with its advisor score and the reasons behind it."""
    listing: Listing
    score: float = Field(description="Raw accumulated score, may be negative")
    reasons: list[str] = Field(default_factory=list)


class CatalogSummary(BaseModel):
    """Price statistics over the whole catalog."""
    total_listings: int = 0
    with_price: int = 0
    median_price: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class RunMetadata(BaseModel):
    """Metadata for an advisor run."""
    run_id: str = Field(description="Unique run identifier")
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_listings: int = 0
    top_n: int = 6
    schema_version: str = "1.0.0"


class AdvisorRun(BaseModel):
    """Complete result of one advisor run."""
    metadata: RunMetadata
    preferences: PreferenceSet
    matches: list[MatchResult] = Field(default_factory=list)
    catalog_summary: CatalogSummary = Field(default_factory=CatalogSummary)

    def to_minimal_export(self) -> dict[str, Any]:
        """Export a compact version suitable for download."""
        return {
            "metadata": {
                "run_id": self.metadata.run_id,
                "exported_at": datetime.now().isoformat(),
            },
            "results": [
                {
                    "rank": rank,
                    "lot_number": m.listing.lot_number,
                    "title": m.listing.title,
                    "price": m.listing.advisor_price,
                    "url": m.listing.item_url,
                    "score": round(m.score, 2),
                    "reasons": m.reasons,
                }
                for rank, m in enumerate(self.matches, 1)
            ],
        }
