"""
Pydantic models for guest recommendations.

This module defines guest preferences, inventory records, and the ranked
item/recipe results returned by the recommendation engine.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from mixlab.models.catalog import CatalogItem, PresetRecipe
from mixlab.utils.constants import CATEGORIES, PROFILE_TO_CATEGORIES, STRENGTH_TIERS
from mixlab.utils.helpers import normalize_name


class GuestPreferences(BaseModel):
    """
    A guest's stated preferences.

    Attributes:
        strength: Strength tier (light/medium/strong)
        flavor_profiles: Non-empty list of flavor tags; each tag is a flavor
                         profile (fresh, fruity, sweet, citrus, spicy, soda)
                         or a raw flavor family (berry, mint, ...)
    """
    strength: str = Field(..., description="Strength tier")
    flavor_profiles: List[str] = Field(..., min_length=1, description="Flavor tags")

    @field_validator('strength')
    @classmethod
    def validate_strength(cls, v: str) -> str:
        """Ensure strength is a known tier."""
        v_lower = normalize_name(v)
        if v_lower not in STRENGTH_TIERS:
            raise ValueError(f'Strength must be one of: {", ".join(STRENGTH_TIERS)}')
        return v_lower

    @field_validator('flavor_profiles')
    @classmethod
    def validate_flavor_profiles(cls, v: List[str]) -> List[str]:
        """Ensure every tag is a known profile or family, de-duplicated in order."""
        valid = list(PROFILE_TO_CATEGORIES) + [c for c in CATEGORIES if c not in PROFILE_TO_CATEGORIES]
        tags: List[str] = []
        for tag in v:
            normalized = normalize_name(tag)
            if normalized not in valid:
                raise ValueError(
                    f"Unknown flavor tag '{tag}'. Must be one of: {', '.join(valid)}"
                )
            if normalized not in tags:
                tags.append(normalized)
        if not tags:
            raise ValueError("flavor_profiles cannot be empty")
        return tags

    model_config = {
        "json_schema_extra": {
            "example": {
                "strength": "medium",
                "flavor_profiles": ["fruity", "fresh"]
            }
        }
    }


class InventoryRecord(BaseModel):
    """
    One inventory line supplied by the inventory collaborator.

    Attributes:
        item_id: Catalog identifier, when known
        brand: Brand name
        flavor: Flavor name
        quantity_grams: Quantity on hand
    """
    item_id: Optional[str] = Field(None, description="Catalog identifier")
    brand: str = Field(..., description="Brand name")
    flavor: str = Field(..., description="Flavor name")
    quantity_grams: float = Field(0.0, ge=0.0, description="Quantity on hand (grams)")

    model_config = {"frozen": True}


class RecommendedItem(BaseModel):
    """
    A ranked catalog tobacco.

    Attributes:
        item: Catalog tobacco
        match_score: Match quality (0-100)
        match_reasons: Why it was recommended
        in_stock: Stock status (None when no inventory was supplied)
        stock_quantity: Grams on hand (None when no inventory was supplied)
    """
    item: CatalogItem
    match_score: float = Field(..., ge=0.0, le=100.0, description="Match quality")
    match_reasons: List[str] = Field(default_factory=list)
    in_stock: Optional[bool] = None
    stock_quantity: Optional[float] = None


class RecommendedRecipe(BaseModel):
    """
    A ranked preset recipe with inventory availability.

    Attributes:
        recipe: Preset recipe
        match_score: Percent-weighted match of its resolved ingredients (0-100)
        match_reasons: Short ordered justifications
        availability: full / partial / none
        missing_ingredients: Ingredients not in the catalog or out of stock
        replacements: Original ingredient name -> substitute tobacco
    """
    recipe: PresetRecipe
    match_score: float = Field(..., ge=0.0, le=100.0, description="Match quality")
    match_reasons: List[str] = Field(default_factory=list)
    availability: str = Field(..., description="full / partial / none")
    missing_ingredients: List[str] = Field(default_factory=list)
    replacements: Dict[str, CatalogItem] = Field(default_factory=dict)

    @field_validator('availability')
    @classmethod
    def validate_availability(cls, v: str) -> str:
        valid = ["full", "partial", "none"]
        if v not in valid:
            raise ValueError(f'Availability must be one of: {", ".join(valid)}')
        return v


class RecommendationResult(BaseModel):
    """Combined item and recipe recommendations."""
    items: List[RecommendedItem] = Field(default_factory=list)
    recipes: List[RecommendedRecipe] = Field(default_factory=list)
    has_inventory: bool = False


class RecommendationRequest(BaseModel):
    """
    Request model for the recommendation endpoint.

    Attributes:
        preferences: Guest preferences
        inventory: Optional inventory snapshot (None = ignore stock)
        item_limit: Optional override of the item limit
        recipe_limit: Optional override of the recipe limit
    """
    preferences: GuestPreferences
    inventory: Optional[List[InventoryRecord]] = None
    item_limit: Optional[int] = Field(None, ge=1, le=100)
    recipe_limit: Optional[int] = Field(None, ge=1, le=50)

    model_config = {
        "json_schema_extra": {
            "example": {
                "preferences": {"strength": "strong", "flavor_profiles": ["fruity"]},
                "inventory": [
                    {"item_id": "ds2", "brand": "Darkside", "flavor": "Bananapapa", "quantity_grams": 120}
                ]
            }
        }
    }
