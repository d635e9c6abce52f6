"""
Pydantic models for repeating a saved blend.

A BlendSnapshot is recorded once when a guest's blend is saved and read back
later against a different, current inventory.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional, Tuple

from mixlab.models.blend import BlendItemRef, HeatSetup
from mixlab.models.catalog import CatalogItem
from mixlab.models.recommendation import InventoryRecord
from mixlab.utils.constants import STRENGTH_TIERS


class SnapshotIngredient(BaseModel):
    """
    One ingredient as captured at save time.

    Attributes:
        item_id: Catalog identifier at save time
        brand: Brand name at save time
        flavor: Flavor name at save time
        percent: Share of the bowl
        color: Optional display color
    """
    item_id: str = Field(..., min_length=1, description="Catalog identifier")
    brand: str = Field(..., description="Brand name")
    flavor: str = Field(..., description="Flavor name")
    percent: int = Field(..., ge=1, le=100, description="Share of the bowl")
    color: Optional[str] = None

    model_config = {"frozen": True}


class BlendSnapshot(BaseModel):
    """
    Immutable record of a previously built blend.

    Attributes:
        id: Snapshot identifier
        ingredients: Ingredients in blend order
        total_grams: Bowl weight in grams
        strength: Strength tier of the blend
        compatibility_score: Score at save time, if computed
        bowl_type: Bowl used at save time, if known
        heat_setup: Coarse heat setup at save time
        created_at: When the snapshot was recorded
    """
    id: str = Field(..., min_length=1, description="Snapshot identifier")
    ingredients: Tuple[SnapshotIngredient, ...] = Field(..., min_length=1)
    total_grams: int = Field(..., ge=1, le=100, description="Bowl weight (grams)")
    strength: str = Field("medium", description="Strength tier")
    compatibility_score: Optional[int] = Field(None, ge=0, le=100)
    bowl_type: Optional[str] = None
    heat_setup: Optional[HeatSetup] = None
    created_at: Optional[datetime] = None

    @field_validator('strength')
    @classmethod
    def validate_strength(cls, v: str) -> str:
        if v not in STRENGTH_TIERS:
            raise ValueError(f'Strength must be one of: {", ".join(STRENGTH_TIERS)}')
        return v

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "snap_3f2a",
                "ingredients": [
                    {"item_id": "mh1", "brand": "Musthave", "flavor": "Pinkman", "percent": 50},
                    {"item_id": "ds2", "brand": "Darkside", "flavor": "Bananapapa", "percent": 40},
                    {"item_id": "ds1", "brand": "Darkside", "flavor": "Supernova", "percent": 10}
                ],
                "total_grams": 20,
                "strength": "strong"
            }
        }
    }


class ResolvedIngredient(BaseModel):
    """
    One snapshot ingredient resolved against the current catalog and stock.

    Attributes:
        ingredient: The ingredient as saved
        item: Catalog tobacco it resolved to (None if unknown to the catalog)
        percent: Share of the bowl used for allocation
        available: Whether the original tobacco can be used as-is
        stock_grams: Grams on hand (None when stock was not checked)
        replacement: Substitute to use instead, if any
        grams_used: Grams to weigh out (None when excluded)
    """
    ingredient: SnapshotIngredient
    item: Optional[CatalogItem] = None
    percent: int = Field(..., ge=0, le=100)
    available: bool
    stock_grams: Optional[float] = None
    replacement: Optional[CatalogItem] = None
    grams_used: Optional[int] = None

    @property
    def resolved(self) -> bool:
        """Usable either directly or through a replacement."""
        return self.available or self.replacement is not None


class RepeatWarning(BaseModel):
    """
    A warning emitted while repeating a blend.

    Attributes:
        type: OUT_OF_STOCK / LOW_STOCK / REPLACED / UNAVAILABLE
        item_id: Catalog id of the saved ingredient
        message: Human-readable message
        replacement: Substitute, when one was proposed
        reason: Why the substitute was chosen
    """
    type: str
    item_id: str
    message: str
    replacement: Optional[CatalogItem] = None
    reason: Optional[str] = None

    @field_validator('type')
    @classmethod
    def validate_type(cls, v: str) -> str:
        valid = ["OUT_OF_STOCK", "LOW_STOCK", "REPLACED", "UNAVAILABLE"]
        if v not in valid:
            raise ValueError(f'Warning type must be one of: {", ".join(valid)}')
        return v


class RepeatResult(BaseModel):
    """
    Outcome of repeating a saved blend.

    success is False only when no snapshot was supplied (NO_SNAPSHOT) or
    when not a single ingredient could be resolved (ALL_UNAVAILABLE).
    """
    success: bool
    snapshot: Optional[BlendSnapshot] = None
    resolved_items: List[ResolvedIngredient] = Field(default_factory=list)
    warnings: List[RepeatWarning] = Field(default_factory=list)
    total_grams_allocated: int = 0
    error: Optional[str] = None
    message: Optional[str] = None

    @model_validator(mode='after')
    def validate_error_consistency(self):
        """Failed results must carry an error code."""
        if not self.success and not self.error:
            raise ValueError("A failed repeat result must carry an error code")
        return self


# ==================== Request Models ====================

class RepeatRequest(BaseModel):
    """Request model for the repeat endpoint."""
    snapshot: Optional[BlendSnapshot] = None
    inventory: Optional[List[InventoryRecord]] = None


class SnapshotRequest(BaseModel):
    """
    Request model for recording a snapshot of the current blend.

    Attributes:
        items: Blend items by catalog id
        total_grams: Bowl weight (settings default when omitted)
        strength: Strength tier (derived from the blend when omitted)
        compatibility_score: Score to store alongside, if known
        bowl_type: Bowl to store alongside, if known
    """
    items: List[BlendItemRef] = Field(..., min_length=1)
    total_grams: Optional[int] = Field(None, ge=1, le=100)
    strength: Optional[str] = None
    compatibility_score: Optional[int] = Field(None, ge=0, le=100)
    bowl_type: Optional[str] = None
