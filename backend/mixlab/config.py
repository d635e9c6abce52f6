"""
Engine configuration.

This module defines the engine settings using a Pydantic model populated
from environment variables (and an optional .env file), plus the logging
setup shared by every module.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import Optional
import os
from dotenv import load_dotenv

# Load .env from backend directory (works regardless of cwd when running uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


class Settings(BaseModel):
    """
    Engine configuration settings.

    Can be configured via environment variables or .env file.
    Environment variable names are the uppercase field names
    (e.g., MINT_CAP_PERCENT).

    Attributes:
        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        CATALOG_PATH: Optional JSON catalog replacing the built-in one
        MINT_CAP_PERCENT: Maximum share of any mint tobacco in a blend
        STRONG_ITEM_CAP_PERCENT: Hard cap for the strongest catalog item
        MAX_ITEM_RECOMMENDATIONS: Default number of single tobaccos returned
        MAX_RECIPE_RECOMMENDATIONS: Default number of preset mixes returned
        MAX_MATCH_REASONS: Display cap for recommendation reasons
        MAX_COMPATIBILITY_DETAILS: Display cap for compatibility details
        DEFAULT_TOTAL_GRAMS: Bowl weight used when a snapshot has none
        RENORMALIZE_REPEAT_GRAMS: Rescale surviving ingredients on repeat
    """

    LOG_LEVEL: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    CATALOG_PATH: Optional[str] = Field(
        default_factory=lambda: os.getenv("CATALOG_PATH") or None,
        description="Path to a JSON catalog file (built-in catalog if unset)"
    )

    # Blend caps
    MINT_CAP_PERCENT: int = Field(
        default_factory=lambda: _env_int("MINT_CAP_PERCENT", 25),
        ge=1,
        le=100,
        description="Category cap for mint tobaccos (percent)"
    )

    STRONG_ITEM_CAP_PERCENT: int = Field(
        default_factory=lambda: _env_int("STRONG_ITEM_CAP_PERCENT", 10),
        ge=1,
        le=100,
        description="Hard cap for the strongest catalog item (percent)"
    )

    STRONG_ITEM_ID: str = Field(
        default_factory=lambda: os.getenv("STRONG_ITEM_ID", "ds1"),
        description="Catalog id the hard cap applies to"
    )

    # Recommendation limits
    MAX_ITEM_RECOMMENDATIONS: int = Field(
        default_factory=lambda: _env_int("MAX_ITEM_RECOMMENDATIONS", 10),
        ge=1,
        le=100,
        description="Maximum number of single tobacco recommendations"
    )

    MAX_RECIPE_RECOMMENDATIONS: int = Field(
        default_factory=lambda: _env_int("MAX_RECIPE_RECOMMENDATIONS", 5),
        ge=1,
        le=50,
        description="Maximum number of preset mix recommendations"
    )

    MAX_MATCH_REASONS: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum number of match reasons shown per recommendation"
    )

    MAX_COMPATIBILITY_DETAILS: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum number of compatibility detail lines"
    )

    # Repeat resolution
    DEFAULT_TOTAL_GRAMS: int = Field(
        default_factory=lambda: _env_int("DEFAULT_TOTAL_GRAMS", 20),
        ge=1,
        le=100,
        description="Bowl weight in grams used when none is given"
    )

    RENORMALIZE_REPEAT_GRAMS: bool = Field(
        default_factory=lambda: os.getenv("RENORMALIZE_REPEAT_GRAMS", "false").lower() == "true",
        description="Rescale surviving ingredients so grams sum to the stored total"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator('CATALOG_PATH')
    @classmethod
    def validate_catalog_path(cls, v: Optional[str]) -> Optional[str]:
        """Ensure a configured catalog path points at a JSON file."""
        if v is not None and not v.lower().endswith(".json"):
            raise ValueError("CATALOG_PATH must point to a .json file")
        return v


# Create global settings instance
settings = Settings()


# Configure logging based on settings
def configure_logging():
    """Configure engine logging based on settings."""
    import logging

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
    logger.info(f"Catalog source: {settings.CATALOG_PATH or 'built-in'}")
    logger.info(
        f"Blend caps: mint<={settings.MINT_CAP_PERCENT}%, "
        f"{settings.STRONG_ITEM_ID}<={settings.STRONG_ITEM_CAP_PERCENT}%"
    )


# Initialize logging on import
configure_logging()
