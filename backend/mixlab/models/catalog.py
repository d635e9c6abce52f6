"""
Pydantic models for catalog reference data.

This module defines the tobacco catalog item and the preset recipe models.
Both are immutable: the catalog is loaded once and shared by every caller.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, Tuple

from mixlab.utils.constants import CATEGORIES


def _check_category(v: str) -> str:
    v_lower = v.strip().lower()
    if v_lower not in CATEGORIES:
        raise ValueError(f'Category must be one of: {", ".join(CATEGORIES)}')
    return v_lower


class CatalogItem(BaseModel):
    """
    Model for a single catalog tobacco.

    Attributes:
        id: Catalog identifier (e.g., "mh1")
        brand: Brand name
        flavor: Display name of the flavor
        strength: Nicotine/body strength (1-10)
        heat_resistance: How much heat the tobacco tolerates (1-10)
        category: Flavor family
        pairs_with: Flavor families this tobacco blends well with
        color: Optional display color (hex)
    """
    id: str = Field(..., min_length=1, description="Catalog identifier")
    brand: str = Field(..., min_length=1, description="Brand name")
    flavor: str = Field(..., min_length=1, description="Flavor name")
    strength: int = Field(..., ge=1, le=10, description="Strength (1-10)")
    heat_resistance: int = Field(..., ge=1, le=10, description="Heat resistance (1-10)")
    category: str = Field(..., description="Flavor family")
    pairs_with: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Flavor families this tobacco pairs well with"
    )
    color: Optional[str] = Field(None, description="Display color (hex)")

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Ensure category is a known flavor family."""
        return _check_category(v)

    @field_validator('pairs_with')
    @classmethod
    def validate_pairs_with(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Ensure every pairing category is known, dropping duplicates."""
        seen = []
        for category in v:
            checked = _check_category(category)
            if checked not in seen:
                seen.append(checked)
        return tuple(seen)

    @property
    def display_name(self) -> str:
        """Brand and flavor, e.g. "Darkside Supernova"."""
        return f"{self.brand} {self.flavor}"

    def pairs_with_category(self, category: str) -> bool:
        """Whether this tobacco declares the given category as compatible."""
        return category in self.pairs_with

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "ds1",
                "brand": "Darkside",
                "flavor": "Supernova",
                "strength": 8,
                "heat_resistance": 9,
                "category": "mint",
                "pairs_with": ["berry", "citrus", "tropical", "fruit", "soda", "dessert"],
                "color": "#06B6D4"
            }
        }
    }


class RecipeIngredient(BaseModel):
    """
    Model for one ingredient descriptor of a preset recipe.

    Ingredients are stored by name, not by catalog id, so they may fail to
    resolve against a catalog.

    Attributes:
        flavor: Flavor name
        brand: Optional brand name
        percent: Share of the bowl (1-100)
        category: Optional flavor family, used to find substitutes
    """
    flavor: str = Field(..., min_length=1, description="Flavor name")
    brand: Optional[str] = Field(None, description="Brand name")
    percent: int = Field(..., ge=1, le=100, description="Share of the bowl")
    category: Optional[str] = Field(None, description="Flavor family")

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: Optional[str]) -> Optional[str]:
        """Ensure category, when given, is a known flavor family."""
        return _check_category(v) if v is not None else None

    @property
    def display_name(self) -> str:
        return f"{self.brand or ''} {self.flavor}".strip()

    model_config = {"frozen": True}


class PresetRecipe(BaseModel):
    """
    Model for a curated preset mix.

    Attributes:
        id: Recipe identifier
        name: Recipe name
        description: Short description
        category: Mix style (refreshing/sweet/fruity/dessert/exotic/classic)
        ingredients: 2-4 ingredient descriptors summing to 100 percent
        tags: Free-form tags
        difficulty: easy/medium/advanced
        popularity: Popularity (1-5)
    """
    id: str = Field(..., min_length=1, description="Recipe identifier")
    name: str = Field(..., min_length=1, description="Recipe name")
    description: str = Field("", description="Short description")
    category: str = Field("classic", description="Mix style")
    ingredients: Tuple[RecipeIngredient, ...] = Field(
        ...,
        description="Ingredient descriptors"
    )
    tags: Tuple[str, ...] = Field(default_factory=tuple, description="Tags")
    difficulty: str = Field("medium", description="Preparation difficulty")
    popularity: int = Field(3, ge=1, le=5, description="Popularity (1-5)")

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v: str) -> str:
        """Ensure difficulty is valid."""
        valid = ["easy", "medium", "advanced"]
        if v not in valid:
            raise ValueError(f'Difficulty must be one of: {", ".join(valid)}')
        return v

    @model_validator(mode='after')
    def validate_ingredients(self):
        """Ensure 2-4 ingredients whose percentages sum to 100."""
        count = len(self.ingredients)
        if count < 2 or count > 4:
            raise ValueError(f'Recipe {self.id} must have 2-4 ingredients, got {count}')
        total = sum(i.percent for i in self.ingredients)
        if total != 100:
            raise ValueError(f'Recipe {self.id} percentages sum to {total}, expected 100')
        return self

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "mix-2",
                "name": "Watermelon Chill",
                "description": "Watermelon with mint, the summer classic",
                "category": "refreshing",
                "ingredients": [
                    {"flavor": "Torpedo", "brand": "Darkside", "percent": 90, "category": "fruit"},
                    {"flavor": "Supernova", "brand": "Darkside", "percent": 10, "category": "mint"}
                ],
                "tags": ["watermelon", "mint"],
                "difficulty": "easy",
                "popularity": 5
            }
        }
    }
