"""
Build-a-blend pipeline.

Validates a finalized blend, then runs it through the compatibility scorer,
the profile aggregator and the setup advisor. Invalid blends stop at
validation and never reach the scorer.
"""

import logging
from typing import Iterable, List, Sequence

from mixlab.models.blend import BlendAnalysis, BlendItem, BlendItemRef
from mixlab.services.blend_normalizer import CapTable
from mixlab.services.catalog_service import Catalog
from mixlab.services.compatibility_scorer import CompatibilityScorer
from mixlab.services.profile_aggregator import ProfileAggregator
from mixlab.services.setup_advisor import SetupAdvisor
from mixlab.utils.validators import validate_blend

# Configure logging
logger = logging.getLogger(__name__)


def blend_from_refs(catalog: Catalog, refs: Iterable[BlendItemRef]) -> List[BlendItem]:
    """
    Resolve id-based blend items against the catalog.

    Raises:
        KeyError: If a tobacco id is not in the catalog
    """
    blend: List[BlendItem] = []
    for ref in refs:
        item = catalog.get(ref.tobacco_id)
        if item is None:
            raise KeyError(ref.tobacco_id)
        blend.append(BlendItem(item=item, percent=ref.percent))
    return blend


class BlendCalculator:
    """
    Orchestrates validation, scoring, profiling and setup advice.

    Attributes:
        caps: Cap table used by validation
        scorer: Compatibility scorer
        aggregator: Profile aggregator
        advisor: Setup advisor
    """

    def __init__(
        self,
        caps: CapTable,
        scorer: CompatibilityScorer,
        aggregator: ProfileAggregator,
        advisor: SetupAdvisor
    ):
        self.caps = caps
        self.scorer = scorer
        self.aggregator = aggregator
        self.advisor = advisor
        logger.info("BlendCalculator initialized")

    def analyze(self, items: Sequence[BlendItem]) -> BlendAnalysis:
        """
        Analyze a finalized blend.

        Args:
            items: Blend items in blend order

        Returns:
            BlendAnalysis: ok=False with the validation error, or ok=True
                           with compatibility, profile and setup
        """
        validation = validate_blend(items, self.caps)
        if not validation.ok:
            logger.info(f"Blend analysis refused: {validation.error}")
            return BlendAnalysis(ok=False, error=validation.error, items=list(items))

        compatibility = self.scorer.score(items)
        profile = self.aggregator.aggregate(items)
        setup = self.advisor.recommend(profile)

        logger.info(
            f"Analyzed blend {[bi.item.id for bi in items]}: "
            f"compatibility={compatibility.score}, strength={profile.final_strength}, "
            f"bowl={setup.bowl_type}"
        )

        return BlendAnalysis(
            ok=True,
            items=list(items),
            compatibility=compatibility,
            profile=profile,
            setup=setup
        )
