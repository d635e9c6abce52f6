"""
Centralized constants and reference data.

This module contains the built-in tobacco catalog, the preset mix recipes,
and every threshold table the blend engine reads. Centralizing these values
makes them easy to modify and keeps the scoring rules out of the services.

Categories:
- Flavor families and guest flavor profiles
- Tobacco catalog and preset recipes
- Blend caps
- Compatibility scoring weights and level bands
- Strength / heat bands and the setup table
- Recommendation scoring weights
"""

from typing import Dict, List, Tuple

# ==============================================================================
# FLAVOR FAMILIES
# ==============================================================================

CATEGORIES: List[str] = [
    "berry", "citrus", "mint", "tropical", "dessert",
    "soda", "fruit", "candy", "spice", "herbal"
]


# Guest-facing flavor profiles and the catalog categories they cover
PROFILE_TO_CATEGORIES: Dict[str, List[str]] = {
    "fresh": ["mint"],
    "fruity": ["fruit", "berry", "tropical"],
    "sweet": ["dessert", "candy"],
    "citrus": ["citrus"],
    "spicy": ["spice", "herbal"],
    "soda": ["soda"],
}


FLAVOR_PROFILE_LABELS: Dict[str, str] = {
    "fresh": "Fresh/Cool",
    "fruity": "Fruity",
    "sweet": "Sweet",
    "citrus": "Citrus",
    "spicy": "Spicy/Herbal",
    "soda": "Soda",
}


# ==============================================================================
# TOBACCO CATALOG
# ==============================================================================

# Ordered by mixing popularity within each brand. Catalog order is the
# tie-breaker for every ranking in the engine.
TOBACCOS: List[Dict] = [
    # Musthave (dark leaf, strong)
    {"id": "mh1", "brand": "Musthave", "flavor": "Pinkman", "strength": 8, "heat_resistance": 8, "color": "#EC4899", "category": "berry", "pairs_with": ["mint", "citrus", "tropical"]},
    {"id": "mh2", "brand": "Musthave", "flavor": "Cola", "strength": 8, "heat_resistance": 7, "color": "#7C2D12", "category": "soda", "pairs_with": ["citrus", "fruit", "mint"]},
    {"id": "mh3", "brand": "Musthave", "flavor": "Cookie", "strength": 8, "heat_resistance": 7, "color": "#D97706", "category": "dessert", "pairs_with": ["fruit", "berry", "mint"]},
    {"id": "mh4", "brand": "Musthave", "flavor": "Strawberry-Lychee", "strength": 8, "heat_resistance": 8, "color": "#F43F5E", "category": "berry", "pairs_with": ["citrus", "mint", "tropical"]},
    {"id": "mh5", "brand": "Musthave", "flavor": "Lemon", "strength": 8, "heat_resistance": 7, "color": "#FCD34D", "category": "citrus", "pairs_with": ["berry", "mint", "tropical"]},
    {"id": "mh6", "brand": "Musthave", "flavor": "Earl Grey", "strength": 8, "heat_resistance": 8, "color": "#6B7280", "category": "herbal", "pairs_with": ["citrus", "berry", "mint", "spice"]},
    {"id": "mh7", "brand": "Musthave", "flavor": "Morocco", "strength": 8, "heat_resistance": 8, "color": "#B45309", "category": "spice", "pairs_with": ["mint", "citrus", "fruit", "dessert"]},
    {"id": "mh8", "brand": "Musthave", "flavor": "Lemon-Lime", "strength": 8, "heat_resistance": 7, "color": "#A3E635", "category": "citrus", "pairs_with": ["berry", "mint", "tropical", "fruit"]},
    {"id": "mh9", "brand": "Musthave", "flavor": "Barberry Candy", "strength": 8, "heat_resistance": 7, "color": "#F43F5E", "category": "candy", "pairs_with": ["citrus", "berry", "mint"]},
    {"id": "mh10", "brand": "Musthave", "flavor": "Pineapple Rings", "strength": 8, "heat_resistance": 8, "color": "#FBBF24", "category": "tropical", "pairs_with": ["mint", "citrus", "berry", "fruit"]},
    {"id": "mh11", "brand": "Musthave", "flavor": "Milky Rice", "strength": 8, "heat_resistance": 7, "color": "#F5F5F4", "category": "dessert", "pairs_with": ["fruit", "berry", "spice"]},
    {"id": "mh12", "brand": "Musthave", "flavor": "Prosecco", "strength": 8, "heat_resistance": 7, "color": "#FDE68A", "category": "soda", "pairs_with": ["citrus", "berry", "fruit"]},
    {"id": "mh13", "brand": "Musthave", "flavor": "Grapefruit", "strength": 8, "heat_resistance": 8, "color": "#FB7185", "category": "citrus", "pairs_with": ["mint", "berry", "tropical"]},

    # Darkside (premium burley, strong)
    {"id": "ds1", "brand": "Darkside", "flavor": "Supernova", "strength": 8, "heat_resistance": 9, "color": "#06B6D4", "category": "mint", "pairs_with": ["berry", "citrus", "tropical", "fruit", "soda", "dessert"]},
    {"id": "ds2", "brand": "Darkside", "flavor": "Bananapapa", "strength": 8, "heat_resistance": 8, "color": "#FACC15", "category": "fruit", "pairs_with": ["mint", "berry", "tropical"]},
    {"id": "ds3", "brand": "Darkside", "flavor": "Falling Star", "strength": 8, "heat_resistance": 8, "color": "#F59E0B", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "ds4", "brand": "Darkside", "flavor": "Bounty Hunter", "strength": 8, "heat_resistance": 7, "color": "#92400E", "category": "dessert", "pairs_with": ["fruit", "mint", "tropical"]},
    {"id": "ds5", "brand": "Darkside", "flavor": "Wild Forest", "strength": 8, "heat_resistance": 8, "color": "#EF4444", "category": "berry", "pairs_with": ["mint", "citrus", "tropical"]},
    {"id": "ds6", "brand": "Darkside", "flavor": "Fruity Dust", "strength": 8, "heat_resistance": 8, "color": "#E879F9", "category": "tropical", "pairs_with": ["berry", "mint", "citrus"]},
    {"id": "ds7", "brand": "Darkside", "flavor": "Torpedo", "strength": 8, "heat_resistance": 8, "color": "#4ADE80", "category": "fruit", "pairs_with": ["mint", "berry", "citrus"]},
    {"id": "ds8", "brand": "Darkside", "flavor": "Kalee Grap", "strength": 8, "heat_resistance": 8, "color": "#FB923C", "category": "citrus", "pairs_with": ["mint", "berry", "tropical"]},

    # Tangiers (bold dark leaf, strong)
    {"id": "tg1", "brand": "Tangiers", "flavor": "Cane Mint", "strength": 9, "heat_resistance": 9, "color": "#10B981", "category": "mint", "pairs_with": ["berry", "citrus", "tropical", "fruit", "soda", "dessert"]},
    {"id": "tg2", "brand": "Tangiers", "flavor": "Kashmir Peach", "strength": 9, "heat_resistance": 9, "color": "#FDBA74", "category": "fruit", "pairs_with": ["mint", "spice", "citrus"]},
    {"id": "tg3", "brand": "Tangiers", "flavor": "Pink Grapefruit", "strength": 9, "heat_resistance": 9, "color": "#F472B6", "category": "citrus", "pairs_with": ["mint", "berry", "tropical"]},
    {"id": "tg4", "brand": "Tangiers", "flavor": "Foreplay On The Peach", "strength": 9, "heat_resistance": 9, "color": "#FCA5A5", "category": "fruit", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "tg5", "brand": "Tangiers", "flavor": "Cocoa", "strength": 9, "heat_resistance": 9, "color": "#78350F", "category": "dessert", "pairs_with": ["mint", "fruit", "spice"]},
    {"id": "tg6", "brand": "Tangiers", "flavor": "Pineapple", "strength": 9, "heat_resistance": 9, "color": "#FCD34D", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "tg7", "brand": "Tangiers", "flavor": "Orange Soda", "strength": 9, "heat_resistance": 9, "color": "#FB923C", "category": "soda", "pairs_with": ["mint", "fruit", "berry"]},

    # Black Burn (high-glycerin burley, medium-strong)
    {"id": "bb1", "brand": "Black Burn", "flavor": "Overdose", "strength": 8, "heat_resistance": 8, "color": "#FBBF24", "category": "citrus", "pairs_with": ["berry", "mint", "tropical"]},
    {"id": "bb2", "brand": "Black Burn", "flavor": "Red Orange", "strength": 8, "heat_resistance": 8, "color": "#EA580C", "category": "citrus", "pairs_with": ["mint", "berry", "tropical"]},
    {"id": "bb3", "brand": "Black Burn", "flavor": "Shock Currant", "strength": 8, "heat_resistance": 8, "color": "#7C3AED", "category": "berry", "pairs_with": ["citrus", "mint", "tropical"]},
    {"id": "bb4", "brand": "Black Burn", "flavor": "Raspberries", "strength": 8, "heat_resistance": 8, "color": "#F87171", "category": "berry", "pairs_with": ["mint", "citrus", "tropical"]},
    {"id": "bb5", "brand": "Black Burn", "flavor": "Ice Baby", "strength": 5, "heat_resistance": 6, "color": "#67E8F9", "category": "berry", "pairs_with": ["citrus", "tropical", "fruit"]},
    {"id": "bb6", "brand": "Black Burn", "flavor": "Tropic Jack", "strength": 7, "heat_resistance": 7, "color": "#A3E635", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "bb7", "brand": "Black Burn", "flavor": "Peach Killer", "strength": 8, "heat_resistance": 8, "color": "#FDBA74", "category": "fruit", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "bb8", "brand": "Black Burn", "flavor": "Ananas Shock", "strength": 8, "heat_resistance": 8, "color": "#FDE047", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "bb9", "brand": "Black Burn", "flavor": "Peach Yogurt", "strength": 8, "heat_resistance": 7, "color": "#FBBF24", "category": "dessert", "pairs_with": ["fruit", "berry", "mint"]},
    {"id": "bb10", "brand": "Black Burn", "flavor": "Elka", "strength": 8, "heat_resistance": 8, "color": "#22C55E", "category": "herbal", "pairs_with": ["mint", "citrus", "fruit"]},
    {"id": "bb11", "brand": "Black Burn", "flavor": "Basilic", "strength": 8, "heat_resistance": 8, "color": "#4ADE80", "category": "herbal", "pairs_with": ["citrus", "fruit", "berry"]},
    {"id": "bb12", "brand": "Black Burn", "flavor": "Siberian Soda", "strength": 8, "heat_resistance": 7, "color": "#7C2D12", "category": "soda", "pairs_with": ["citrus", "mint", "fruit"]},
    {"id": "bb13", "brand": "Black Burn", "flavor": "Something Berry", "strength": 8, "heat_resistance": 8, "color": "#EC4899", "category": "berry", "pairs_with": ["mint", "citrus", "tropical"]},
    {"id": "bb14", "brand": "Black Burn", "flavor": "Cheesecake", "strength": 8, "heat_resistance": 7, "color": "#FEF3C7", "category": "dessert", "pairs_with": ["fruit", "berry", "citrus"]},
    {"id": "bb15", "brand": "Black Burn", "flavor": "Grapefruit", "strength": 8, "heat_resistance": 8, "color": "#FB7185", "category": "citrus", "pairs_with": ["mint", "berry", "tropical"]},
    {"id": "bb16", "brand": "Black Burn", "flavor": "Apple Shock", "strength": 8, "heat_resistance": 8, "color": "#84CC16", "category": "fruit", "pairs_with": ["mint", "citrus", "berry"]},

    # Al Fakher (light, lounge staple)
    {"id": "af1", "brand": "Al Fakher", "flavor": "Lemon Mint", "strength": 3, "heat_resistance": 5, "color": "#BEF264", "category": "citrus", "pairs_with": ["berry", "fruit", "tropical"]},
    {"id": "af2", "brand": "Al Fakher", "flavor": "Grape with Mint", "strength": 3, "heat_resistance": 5, "color": "#A78BFA", "category": "fruit", "pairs_with": ["citrus", "berry", "mint"]},
    {"id": "af3", "brand": "Al Fakher", "flavor": "Two Apples", "strength": 3, "heat_resistance": 5, "color": "#EF4444", "category": "fruit", "pairs_with": ["mint", "spice", "citrus"]},
    {"id": "af4", "brand": "Al Fakher", "flavor": "Watermelon", "strength": 3, "heat_resistance": 5, "color": "#FB7185", "category": "fruit", "pairs_with": ["mint", "berry", "citrus"]},
    {"id": "af5", "brand": "Al Fakher", "flavor": "Blueberry", "strength": 3, "heat_resistance": 5, "color": "#818CF8", "category": "berry", "pairs_with": ["mint", "citrus", "fruit"]},

    # Fumari (light, beginner-friendly)
    {"id": "fm1", "brand": "Fumari", "flavor": "White Gummi Bear", "strength": 3, "heat_resistance": 4, "color": "#FEF3C7", "category": "candy", "pairs_with": ["fruit", "citrus", "berry"]},
    {"id": "fm2", "brand": "Fumari", "flavor": "Spiced Chai", "strength": 3, "heat_resistance": 4, "color": "#B45309", "category": "spice", "pairs_with": ["fruit", "dessert", "mint"]},
    {"id": "fm3", "brand": "Fumari", "flavor": "Ambrosia", "strength": 3, "heat_resistance": 4, "color": "#FBBF24", "category": "fruit", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "fm4", "brand": "Fumari", "flavor": "Limoncello", "strength": 3, "heat_resistance": 4, "color": "#FDE047", "category": "citrus", "pairs_with": ["berry", "mint", "fruit"]},
    {"id": "fm5", "brand": "Fumari", "flavor": "Blueberry Muffin", "strength": 3, "heat_resistance": 4, "color": "#6366F1", "category": "dessert", "pairs_with": ["fruit", "berry", "mint"]},

    # Starbuzz (light-medium)
    {"id": "sb1", "brand": "Starbuzz", "flavor": "Blue Mist", "strength": 4, "heat_resistance": 5, "color": "#60A5FA", "category": "berry", "pairs_with": ["mint", "citrus", "fruit"]},
    {"id": "sb2", "brand": "Starbuzz", "flavor": "Code 69", "strength": 4, "heat_resistance": 5, "color": "#FB7185", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
    {"id": "sb3", "brand": "Starbuzz", "flavor": "Pirates Cave", "strength": 4, "heat_resistance": 5, "color": "#4ADE80", "category": "fruit", "pairs_with": ["mint", "berry", "citrus"]},
    {"id": "sb4", "brand": "Starbuzz", "flavor": "Sex on the Beach", "strength": 4, "heat_resistance": 5, "color": "#FDBA74", "category": "tropical", "pairs_with": ["mint", "citrus", "berry"]},
]


# ==============================================================================
# PRESET RECIPES
# ==============================================================================

# Curated mixes from the hookah community and official brand guides.
# Ingredient percentages sum to 100; presets are not subject to blend caps.
MIX_RECIPES: List[Dict] = [
    # Refreshing
    {
        "id": "mix-1",
        "name": "Cool Banana Man",
        "description": "Berry freshness with banana sweetness and a cool finish",
        "category": "refreshing",
        "ingredients": [
            {"flavor": "Pinkman", "brand": "Musthave", "percent": 50, "category": "berry"},
            {"flavor": "Bananapapa", "brand": "Darkside", "percent": 40, "category": "fruit"},
            {"flavor": "Supernova", "brand": "Darkside", "percent": 10, "category": "mint"},
        ],
        "tags": ["berry", "banana", "fresh", "popular"],
        "difficulty": "easy",
        "popularity": 5,
    },
    {
        "id": "mix-2",
        "name": "Watermelon Chill",
        "description": "Watermelon with mint, the summer classic",
        "category": "refreshing",
        "ingredients": [
            {"flavor": "Torpedo", "brand": "Darkside", "percent": 90, "category": "fruit"},
            {"flavor": "Supernova", "brand": "Darkside", "percent": 10, "category": "mint"},
        ],
        "tags": ["watermelon", "mint", "summer", "classic"],
        "difficulty": "easy",
        "popularity": 5,
    },
    {
        "id": "mix-3",
        "name": "Citrus Blast",
        "description": "Lemon and lime over a cane mint base",
        "category": "refreshing",
        "ingredients": [
            {"flavor": "Overdose", "brand": "Black Burn", "percent": 50, "category": "citrus"},
            {"flavor": "Lemon-Lime", "brand": "Musthave", "percent": 30, "category": "citrus"},
            {"flavor": "Cane Mint", "brand": "Tangiers", "percent": 20, "category": "mint"},
        ],
        "tags": ["citrus", "lemon", "lime", "fresh"],
        "difficulty": "medium",
        "popularity": 4,
    },
    # Fruity
    {
        "id": "mix-4",
        "name": "Tropical Paradise",
        "description": "Mango, pineapple and passion fruit",
        "category": "fruity",
        "ingredients": [
            {"flavor": "Falling Star", "brand": "Darkside", "percent": 40, "category": "tropical"},
            {"flavor": "Pineapple", "brand": "Tangiers", "percent": 35, "category": "tropical"},
            {"flavor": "Fruity Dust", "brand": "Darkside", "percent": 25, "category": "tropical"},
        ],
        "tags": ["tropical", "mango", "pineapple", "exotic"],
        "difficulty": "medium",
        "popularity": 5,
    },
    {
        "id": "mix-5",
        "name": "Berry Explosion",
        "description": "Currant, raspberry and forest berries",
        "category": "fruity",
        "ingredients": [
            {"flavor": "Wild Forest", "brand": "Darkside", "percent": 40, "category": "berry"},
            {"flavor": "Shock Currant", "brand": "Black Burn", "percent": 35, "category": "berry"},
            {"flavor": "Raspberries", "brand": "Black Burn", "percent": 25, "category": "berry"},
        ],
        "tags": ["berry", "currant", "raspberry", "rich"],
        "difficulty": "easy",
        "popularity": 4,
    },
    {
        "id": "mix-6",
        "name": "Peach Dream",
        "description": "Soft peach with yogurt notes",
        "category": "fruity",
        "ingredients": [
            {"flavor": "Kashmir Peach", "brand": "Tangiers", "percent": 50, "category": "fruit"},
            {"flavor": "Peach Yogurt", "brand": "Black Burn", "percent": 30, "category": "dessert"},
            {"flavor": "Peach Killer", "brand": "Black Burn", "percent": 20, "category": "fruit"},
        ],
        "tags": ["peach", "yogurt", "soft", "creamy"],
        "difficulty": "medium",
        "popularity": 4,
    },
    # Dessert
    {
        "id": "mix-7",
        "name": "Choco Cookie",
        "description": "Chocolate cookie with cocoa and vanilla",
        "category": "dessert",
        "ingredients": [
            {"flavor": "Cookie", "brand": "Musthave", "percent": 50, "category": "dessert"},
            {"flavor": "Cocoa", "brand": "Tangiers", "percent": 30, "category": "dessert"},
            {"flavor": "Bounty Hunter", "brand": "Darkside", "percent": 20, "category": "dessert"},
        ],
        "tags": ["cookie", "chocolate", "dessert", "sweet"],
        "difficulty": "medium",
        "popularity": 4,
    },
    {
        "id": "mix-8",
        "name": "Cheesecake Dream",
        "description": "Creamy cheesecake with a berry topping",
        "category": "dessert",
        "ingredients": [
            {"flavor": "Cheesecake", "brand": "Black Burn", "percent": 50, "category": "dessert"},
            {"flavor": "Strawberry-Lychee", "brand": "Musthave", "percent": 30, "category": "berry"},
            {"flavor": "Milky Rice", "brand": "Musthave", "percent": 20, "category": "dessert"},
        ],
        "tags": ["cheesecake", "strawberry", "creamy", "dessert"],
        "difficulty": "advanced",
        "popularity": 3,
    },
    # Exotic
    {
        "id": "mix-9",
        "name": "Earl Grey Lounge",
        "description": "Earl Grey tea with citrus notes",
        "category": "exotic",
        "ingredients": [
            {"flavor": "Earl Grey", "brand": "Musthave", "percent": 60, "category": "herbal"},
            {"flavor": "Grapefruit", "brand": "Musthave", "percent": 30, "category": "citrus"},
            {"flavor": "Supernova", "brand": "Darkside", "percent": 10, "category": "mint"},
        ],
        "tags": ["tea", "bergamot", "citrus", "premium"],
        "difficulty": "medium",
        "popularity": 4,
    },
    {
        "id": "mix-10",
        "name": "Spicy Morocco",
        "description": "Oriental spices with herbs",
        "category": "exotic",
        "ingredients": [
            {"flavor": "Morocco", "brand": "Musthave", "percent": 55, "category": "spice"},
            {"flavor": "Basilic", "brand": "Black Burn", "percent": 25, "category": "herbal"},
            {"flavor": "Orange Soda", "brand": "Tangiers", "percent": 20, "category": "soda"},
        ],
        "tags": ["spice", "oriental", "herbal", "unique"],
        "difficulty": "advanced",
        "popularity": 3,
    },
    # Classic
    {
        "id": "mix-11",
        "name": "Cola Ice",
        "description": "Classic cola with an icy edge",
        "category": "classic",
        "ingredients": [
            {"flavor": "Cola", "brand": "Musthave", "percent": 60, "category": "soda"},
            {"flavor": "Siberian Soda", "brand": "Black Burn", "percent": 25, "category": "soda"},
            {"flavor": "Ice Baby", "brand": "Black Burn", "percent": 15, "category": "berry"},
        ],
        "tags": ["cola", "ice", "classic", "soda"],
        "difficulty": "easy",
        "popularity": 5,
    },
    {
        "id": "mix-12",
        "name": "Apple Mint Classic",
        "description": "Apple with mint, the timeless classic",
        "category": "classic",
        "ingredients": [
            {"flavor": "Apple Shock", "brand": "Black Burn", "percent": 60, "category": "fruit"},
            {"flavor": "Cane Mint", "brand": "Tangiers", "percent": 40, "category": "mint"},
        ],
        "tags": ["apple", "mint", "classic", "simple"],
        "difficulty": "easy",
        "popularity": 5,
    },
    # Sweet
    {
        "id": "mix-13",
        "name": "Candy Shop",
        "description": "Barberry candy with a berry finish",
        "category": "sweet",
        "ingredients": [
            {"flavor": "Barberry Candy", "brand": "Musthave", "percent": 50, "category": "candy"},
            {"flavor": "Pinkman", "brand": "Musthave", "percent": 35, "category": "berry"},
            {"flavor": "Something Berry", "brand": "Black Burn", "percent": 15, "category": "berry"},
        ],
        "tags": ["candy", "barberry", "sweet", "berry"],
        "difficulty": "easy",
        "popularity": 4,
    },
    {
        "id": "mix-14",
        "name": "Prosecco Party",
        "description": "Sparkling prosecco with tropical fruit",
        "category": "sweet",
        "ingredients": [
            {"flavor": "Prosecco", "brand": "Musthave", "percent": 50, "category": "soda"},
            {"flavor": "Pineapple Rings", "brand": "Musthave", "percent": 30, "category": "tropical"},
            {"flavor": "Grapefruit", "brand": "Musthave", "percent": 20, "category": "citrus"},
        ],
        "tags": ["prosecco", "party", "sparkling", "premium"],
        "difficulty": "medium",
        "popularity": 4,
    },
    {
        "id": "mix-15",
        "name": "Winter Forest",
        "description": "Pine, mint and forest berries",
        "category": "refreshing",
        "ingredients": [
            {"flavor": "Elka", "brand": "Black Burn", "percent": 50, "category": "herbal"},
            {"flavor": "Wild Forest", "brand": "Darkside", "percent": 40, "category": "berry"},
            {"flavor": "Supernova", "brand": "Darkside", "percent": 10, "category": "mint"},
        ],
        "tags": ["winter", "pine", "forest", "holiday"],
        "difficulty": "medium",
        "popularity": 4,
    },
]


# ==============================================================================
# BLEND CAPS
# ==============================================================================

# Category caps (percent). The per-item cap for the strongest tobacco is
# configured through settings (STRONG_ITEM_ID / STRONG_ITEM_CAP_PERCENT).
CAPPED_CATEGORY: str = "mint"

MIN_BLEND_ITEMS: int = 2
MAX_BLEND_ITEMS: int = 3


# ==============================================================================
# COMPATIBILITY SCORING
# ==============================================================================

COMPATIBILITY_BASELINE: float = 70.0

# Contribution of one unordered pair of blend items. The pair score is the
# mean over all pairs, so 2- and 3-item blends share the same scale.
PAIR_CONTRIBUTIONS: Dict[str, float] = {
    "mutual": 25.0,        # both items list each other's category
    "one_way": 12.0,       # only one item lists the other's category
    "same_family": 5.0,    # both items share a category
    "clash": -30.0         # neither item lists the other's category
}

# Mint is the universal mixer
MINT_BONUS: float = 5.0

# Strength gap above which an advisory detail line is emitted
STRENGTH_GAP_WARNING: int = 5

# Level bands, highest first (score >= threshold)
COMPATIBILITY_LEVELS: List[Tuple[str, float]] = [
    ("perfect", 90.0),
    ("good", 70.0),
    ("okay", 50.0),
    ("poor", 0.0)
]


# ==============================================================================
# STRENGTH / HEAT BANDS
# ==============================================================================

STRENGTH_TIERS: List[str] = ["light", "medium", "strong"]

# Numeric 1-10 ranges per coarse tier (inclusive)
STRENGTH_RANGES: Dict[str, Tuple[int, int]] = {
    "light": (1, 4),     # Al Fakher, Fumari, Starbuzz
    "medium": (5, 7),    # Ice Baby, Tropic Jack
    "strong": (8, 10)    # Musthave, Darkside, Tangiers, most Black Burn
}

STRENGTH_LABELS: Dict[str, str] = {
    "light": "Light",
    "medium": "Medium",
    "strong": "Strong",
}

# Heat-resistance bands use the same 1-10 split
HEAT_BANDS: Dict[str, Tuple[int, int]] = {
    "low": (1, 4),
    "medium": (5, 7),
    "high": (8, 10)
}

# Overheating risk by aggregated heat load, highest threshold first.
# Heat-resistant blends forgive aggressive heat.
OVERHEATING_RISK_BANDS: List[Tuple[str, int]] = [
    ("low", 8),
    ("medium", 5),
    ("high", 0)
]


# ==============================================================================
# SETUP TABLE
# ==============================================================================

# Base setup per strength tier. Shared by the full setup advisor and the
# coarse heat lookup used when repeating a saved blend.
STRENGTH_SETUP_TABLE: Dict[str, Dict] = {
    "light": {"bowl_type": "turka", "packing": "fluffy", "coals": 4, "heat_up_minutes": 4},
    "medium": {"bowl_type": "turka", "packing": "semi-dense", "coals": 3, "heat_up_minutes": 5},
    "strong": {"bowl_type": "phunnel", "packing": "dense", "coals": 3, "heat_up_minutes": 6}
}

# Adjustments on top of the strength row, keyed by heat-resistance band
HEAT_SETUP_ADJUSTMENTS: Dict[str, Dict[str, int]] = {
    "low": {"coals": -1, "heat_up_minutes": 2},
    "medium": {"coals": 0, "heat_up_minutes": 1},
    "high": {"coals": 1, "heat_up_minutes": 0}
}

COAL_LIMITS: Tuple[int, int] = (2, 5)

# Bowl weight (grams) treated as standard by the coarse heat lookup
STANDARD_BOWL_GRAMS: Tuple[int, int] = (15, 25)


# ==============================================================================
# RECOMMENDATION SCORING
# ==============================================================================

# Points by distance between an item's tier and the requested tier
STRENGTH_MATCH_POINTS: Dict[int, float] = {
    0: 40.0,   # exact tier
    1: 20.0,   # adjacent tier
    2: 5.0     # opposite tier
}

# Per matching flavor tag (stacks)
FLAVOR_TAG_POINTS: float = 30.0

# Pairing potential: per requested category found in pairs_with
PAIRING_POINTS_PER_CATEGORY: float = 5.0
PAIRING_POINTS_MAX: float = 20.0

MATCH_SCORE_MAX: float = 100.0

# Popularity (1-5) at or above which a preset is called popular
POPULAR_RECIPE_THRESHOLD: int = 4
