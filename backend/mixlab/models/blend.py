"""
Pydantic models for the build-a-blend pipeline.

This module defines the blend item, the compatibility/profile/setup results
computed from a finalized blend, and the request models used by the HTTP
adapter to describe a blend by catalog id.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional

from mixlab.models.catalog import CatalogItem


class BlendItem(BaseModel):
    """
    One tobacco in a blend with its share of the bowl.

    Attributes:
        item: Catalog tobacco
        percent: Share of the bowl (0-100)
    """
    item: CatalogItem = Field(..., description="Catalog tobacco")
    percent: int = Field(0, ge=0, le=100, description="Share of the bowl")

    model_config = {"frozen": True}


class CompatibilityResult(BaseModel):
    """
    Compatibility score for a finalized blend.

    Attributes:
        score: Compatibility score (0-100)
        level: perfect (>=90) / good (>=70) / okay (>=50) / poor
        details: Explanations, in blend order
    """
    score: int = Field(..., ge=0, le=100, description="Compatibility score (0-100)")
    level: str = Field(..., description="Compatibility level")
    details: List[str] = Field(default_factory=list, description="Explanations")

    @model_validator(mode='after')
    def validate_score_level_consistency(self):
        """Ensure score and level are consistent."""
        score = self.score
        level = self.level

        if score >= 90 and level != "perfect":
            raise ValueError(f'Score {score} should have level "perfect", got "{level}"')
        elif 70 <= score < 90 and level != "good":
            raise ValueError(f'Score {score} should have level "good", got "{level}"')
        elif 50 <= score < 70 and level != "okay":
            raise ValueError(f'Score {score} should have level "okay", got "{level}"')
        elif score < 50 and level != "poor":
            raise ValueError(f'Score {score} should have level "poor", got "{level}"')

        return self

    model_config = {
        "json_schema_extra": {
            "example": {
                "score": 95,
                "level": "perfect",
                "details": [
                    "Supernova adds freshness to any mix",
                    "Pinkman + Supernova: excellent pairing (+25)"
                ]
            }
        }
    }


class BlendProfile(BaseModel):
    """
    Percentage-weighted strength and heat profile of a blend.

    Attributes:
        final_strength: Weighted strength (1-10)
        final_heat_load: Weighted heat resistance (1-10)
        overheating_risk: low/medium/high
    """
    final_strength: int = Field(..., ge=0, le=10, description="Weighted strength")
    final_heat_load: int = Field(..., ge=0, le=10, description="Weighted heat resistance")
    overheating_risk: str = Field(..., description="Overheating risk")

    @field_validator('overheating_risk')
    @classmethod
    def validate_risk(cls, v: str) -> str:
        valid = ["low", "medium", "high"]
        if v not in valid:
            raise ValueError(f'Overheating risk must be one of: {", ".join(valid)}')
        return v


class SetupRecommendation(BaseModel):
    """
    Physical preparation advice for a blend.

    Attributes:
        bowl_type: Bowl style (turka / phunnel)
        packing: fluffy / semi-dense / dense
        coals: Number of coals
        heat_up_minutes: Heat-up time before the first draw
    """
    bowl_type: str = Field(..., description="Bowl style")
    packing: str = Field(..., description="Packing density")
    coals: int = Field(..., ge=1, le=6, description="Number of coals")
    heat_up_minutes: int = Field(..., ge=1, le=15, description="Heat-up time in minutes")


class HeatSetup(BaseModel):
    """Coarse heat setup derived from a strength tier and bowl weight."""
    coals: int = Field(..., ge=1, le=6, description="Number of coals")
    packing: str = Field(..., description="Packing density")


class BlendValidation(BaseModel):
    """Structured validation outcome: ok, or the reason the blend is invalid."""
    ok: bool = Field(..., description="Whether the blend is valid")
    error: Optional[str] = Field(None, description="Reason the blend is invalid")


class BlendAnalysis(BaseModel):
    """
    Result of analyzing a blend.

    Invalid blends carry only ok=False and the error; valid blends carry the
    compatibility, profile and setup computed from it.
    """
    ok: bool = Field(..., description="Whether the blend was valid")
    error: Optional[str] = Field(None, description="Validation error")
    items: List[BlendItem] = Field(default_factory=list, description="Analyzed blend")
    compatibility: Optional[CompatibilityResult] = None
    profile: Optional[BlendProfile] = None
    setup: Optional[SetupRecommendation] = None


# ==================== Request Models ====================

class BlendItemRef(BaseModel):
    """A blend item referenced by catalog id."""
    tobacco_id: str = Field(..., min_length=1, description="Catalog identifier")
    percent: int = Field(0, ge=0, le=100, description="Share of the bowl")


class BlendRequest(BaseModel):
    """
    Request model for blend endpoints.

    Attributes:
        items: Blend items by catalog id, in blend order
    """
    items: List[BlendItemRef] = Field(..., min_length=1, description="Blend items")

    model_config = {
        "json_schema_extra": {
            "example": {
                "items": [
                    {"tobacco_id": "mh1", "percent": 60},
                    {"tobacco_id": "ds1", "percent": 10},
                    {"tobacco_id": "ds2", "percent": 30}
                ]
            }
        }
    }


class NormalizeRequest(BlendRequest):
    """
    Request model for a slider change.

    Attributes:
        changed_id: Catalog id of the item whose slider moved
        new_percent: Requested value (clamped to 0-100)
    """
    changed_id: str = Field(..., min_length=1, description="Changed item id")
    new_percent: int = Field(..., description="Requested percent")
