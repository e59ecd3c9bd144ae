"""
Configuration and environment handling for lotfinder.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class DataConfig(BaseModel):
    """Catalog data locations."""
    snapshot_path: Path = Field(
        default_factory=lambda: Path(os.getenv("LOTFINDER_SNAPSHOT_PATH", "data/lots.json")),
        description="Bundled JSON snapshot read at startup",
    )
    source_path: Path = Field(
        default_factory=lambda: Path(os.getenv("LOTFINDER_SOURCE_PATH", "data/lot_details.jsonl")),
        description="JSON-lines file mirrored into the snapshot by the sync command",
    )
    favorites_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("LOTFINDER_FAVORITES_DIR", ".cache/favorites")),
        description="One favorites file per browser user",
    )


class AdvisorConfig(BaseModel):
    """Advisor ranking configuration."""
    top_n: int = Field(default=6, description="Matches shown after the questionnaire")
    max_reasons: int = Field(default=4, description="Reasons kept per match")


class UIConfig(BaseModel):
    """UI configuration."""
    page_title: str = Field(default="kala - auction car finder")
    page_icon: str = Field(default="🚗")
    page_size: int = Field(default=24)


class Config(BaseModel):
    """Main configuration."""
    data: DataConfig = Field(default_factory=DataConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    log_level: str = Field(default_factory=lambda: os.getenv("LOTFINDER_LOG_LEVEL", "INFO"))

    # Feature flags
    enable_favorites: bool = Field(default=True)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
