"""
FastAPI application entry point and endpoint definitions.

This module exposes the blend engine to the venue dashboard over HTTP. The
engine itself stays a set of in-process calls; every endpoint only turns
request models into engine inputs and engine results into responses.

Responsibilities:
- Initialize FastAPI application with CORS and error handling
- Build the catalog and engine services once at startup
- Map unknown tobacco ids to 404 and invalid blends to 422
"""

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import List, Optional
import logging

from mixlab.models.blend import BlendAnalysis, BlendItem, BlendRequest, NormalizeRequest
from mixlab.models.catalog import CatalogItem, PresetRecipe
from mixlab.models.recommendation import RecommendationRequest, RecommendationResult
from mixlab.models.repeat import BlendSnapshot, RepeatRequest, RepeatResult, SnapshotRequest
from mixlab.services.blend_calculator import BlendCalculator, blend_from_refs
from mixlab.services.blend_normalizer import BlendNormalizer, CapTable
from mixlab.services.catalog_service import Catalog
from mixlab.services.compatibility_scorer import CompatibilityScorer
from mixlab.services.profile_aggregator import ProfileAggregator
from mixlab.services.recommendation_engine import RecommendationEngine
from mixlab.services.repeat_resolver import RepeatResolver
from mixlab.services.setup_advisor import SetupAdvisor
from mixlab.config import settings

# Configure logging
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Sets up:
    - CORS middleware for dashboard communication
    - Exception handlers for consistent error responses
    - Application metadata

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Mixlab Blend Engine API",
        description="Blend compatibility, setup advice and guest recommendations",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS to allow dashboard communication
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handler for consistent error responses
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Handle all uncaught exceptions with consistent error format.

        Args:
            request: The incoming request object
            exc: The exception that was raised

        Returns:
            JSONResponse: Formatted error response
        """
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error occurred",
                "error": str(exc)
            }
        )

    return app


def load_catalog() -> Catalog:
    """Catalog from CATALOG_PATH when configured, else the built-in one."""
    if settings.CATALOG_PATH:
        return Catalog.from_json(settings.CATALOG_PATH)
    return Catalog.default()


# Initialize FastAPI application
app = create_app()

# Initialize service layer instances
catalog = load_catalog()
caps = CapTable.from_settings(settings)
normalizer = BlendNormalizer(caps)
scorer = CompatibilityScorer(max_details=settings.MAX_COMPATIBILITY_DETAILS)
aggregator = ProfileAggregator()
advisor = SetupAdvisor()
calculator = BlendCalculator(caps, scorer, aggregator, advisor)
recommendation_engine = RecommendationEngine(catalog, max_reasons=settings.MAX_MATCH_REASONS)
repeat_resolver = RepeatResolver(
    catalog,
    advisor,
    renormalize=settings.RENORMALIZE_REPEAT_GRAMS,
    default_total_grams=settings.DEFAULT_TOTAL_GRAMS
)


def _resolve_blend(request) -> List[BlendItem]:
    """Blend items for a request with id-based items, 404 on unknown ids."""
    try:
        return blend_from_refs(catalog, request.items)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tobacco '{e.args[0]}' not found in catalog"
        )


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        dict: API status and version information
    """
    return {
        "message": "Mixlab Blend Engine API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and deployment."""
    return {
        "status": "ok",
        "catalog_items": len(catalog),
        "recipes": len(catalog.recipes)
    }


# ==================== Catalog Endpoints ====================

@app.get("/catalog/tobaccos", response_model=List[CatalogItem])
async def list_tobaccos(category: Optional[str] = None) -> List[CatalogItem]:
    """
    List catalog tobaccos, optionally restricted to one flavor family.

    Raises:
        HTTPException: 404 if the category is unknown
    """
    if category is None:
        return list(catalog.items)
    if category not in catalog.categories():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category '{category}' not found in catalog"
        )
    return list(catalog.by_category(category))


@app.get("/catalog/recipes", response_model=List[PresetRecipe])
async def list_recipes() -> List[PresetRecipe]:
    """List preset recipes in catalog order."""
    return list(catalog.recipes)


# ==================== Blend Endpoints ====================

@app.post("/blend/normalize", response_model=List[BlendItem])
async def normalize_blend(request: NormalizeRequest) -> List[BlendItem]:
    """
    Apply a slider change and redistribute the other percentages.

    Raises:
        HTTPException: 404 for an unknown tobacco, 422 if changed_id is not
                       part of the blend
    """
    blend = _resolve_blend(request)
    try:
        return normalizer.normalize(blend, request.changed_id, request.new_percent)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )


@app.post("/blend/rebalance", response_model=List[BlendItem])
async def rebalance_blend(request: BlendRequest) -> List[BlendItem]:
    """Redistribute percentages after tobaccos were added or removed."""
    blend = _resolve_blend(request)
    return normalizer.rebalance(blend)


@app.post("/blend/analyze", response_model=BlendAnalysis)
async def analyze_blend(request: BlendRequest) -> BlendAnalysis:
    """
    Score, profile and advise on a finalized blend.

    Invalid blends are not an HTTP error: the response carries ok=False and
    the validation error.
    """
    blend = _resolve_blend(request)
    logger.info(f"Analyzing blend: {[bi.item.id for bi in blend]}")
    return calculator.analyze(blend)


# ==================== Recommendation Endpoints ====================

@app.post("/recommendations", response_model=RecommendationResult)
async def recommend(request: RecommendationRequest) -> RecommendationResult:
    """Rank tobaccos and preset recipes for a guest."""
    logger.info(
        f"Recommendations for strength={request.preferences.strength}, "
        f"tags={request.preferences.flavor_profiles}"
    )
    item_limit = (
        request.item_limit
        if request.item_limit is not None
        else settings.MAX_ITEM_RECOMMENDATIONS
    )
    recipe_limit = (
        request.recipe_limit
        if request.recipe_limit is not None
        else settings.MAX_RECIPE_RECOMMENDATIONS
    )
    return recommendation_engine.recommend(
        request.preferences,
        request.inventory,
        item_limit=item_limit,
        recipe_limit=recipe_limit
    )


# ==================== Repeat Endpoints ====================

@app.post("/repeat", response_model=RepeatResult)
async def repeat_blend(request: RepeatRequest) -> RepeatResult:
    """
    Re-resolve a saved blend against current inventory.

    A blend that cannot be repeated is not an HTTP error: the response
    carries success=False with NO_SNAPSHOT or ALL_UNAVAILABLE.
    """
    return repeat_resolver.resolve(request.snapshot, request.inventory)


@app.post("/snapshots", response_model=BlendSnapshot)
async def create_snapshot(request: SnapshotRequest) -> BlendSnapshot:
    """
    Record a snapshot of a finalized blend.

    Compatibility score and bowl type are computed when not supplied.

    Raises:
        HTTPException: 404 for an unknown tobacco, 422 for an invalid blend
                       or strength tier
    """
    blend = _resolve_blend(request)
    analysis = calculator.analyze(blend)
    if not analysis.ok:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=analysis.error
        )

    try:
        return repeat_resolver.create_snapshot(
            blend,
            total_grams=request.total_grams,
            strength=request.strength,
            compatibility_score=(
                request.compatibility_score
                if request.compatibility_score is not None
                else analysis.compatibility.score
            ),
            bowl_type=request.bowl_type or analysis.setup.bowl_type
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )


if __name__ == "__main__":
    import uvicorn

    # Run the application
    # For development only - use uvicorn command in production
    uvicorn.run(
        "mixlab.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
