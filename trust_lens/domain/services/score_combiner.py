"""Bias/factual category tables and score combination formulas."""

from typing import Dict, Optional

from ..models.reliability import (
    BiasCategory,
    CategoryRating,
    FactualCategory,
    RatingClassification,
)
from .classifier import (
    AMBER,
    GREEN,
    LIGHT_GREEN,
    NEUTRAL,
    ORANGE,
    RED,
    classify_composite,
    community_to_composite,
)

# Factual accuracy matters more than political leaning.
FACTUAL_WEIGHT = 0.6
BIAS_WEIGHT = 0.4

EXTERNAL_WEIGHT = 0.7
COMMUNITY_WEIGHT = 0.3

BIAS_RATINGS: Dict[str, CategoryRating] = {
    BiasCategory.LEFT.value: CategoryRating(
        score=85, color=GREEN, label="Left", description="Left-leaning"
    ),
    BiasCategory.LEFT_CENTER.value: CategoryRating(
        score=75, color=LIGHT_GREEN, label="Left-Center", description="Left-center bias"
    ),
    BiasCategory.CENTER.value: CategoryRating(
        score=90, color=GREEN, label="Center", description="Least biased"
    ),
    BiasCategory.RIGHT_CENTER.value: CategoryRating(
        score=75, color=AMBER, label="Right-Center", description="Right-center bias"
    ),
    BiasCategory.RIGHT.value: CategoryRating(
        score=85, color=GREEN, label="Right", description="Right-leaning"
    ),
    BiasCategory.CONSPIRACY.value: CategoryRating(
        score=25, color=RED, label="Conspiracy", description="Conspiracy theories"
    ),
    BiasCategory.PSEUDOSCIENCE.value: CategoryRating(
        score=30, color=RED, label="Pseudoscience", description="Pseudoscience"
    ),
    BiasCategory.SATIRE.value: CategoryRating(
        score=50, color=AMBER, label="Satire", description="Satirical content"
    ),
    BiasCategory.FAKE_NEWS.value: CategoryRating(
        score=15, color=RED, label="Fake News", description="Fake news"
    ),
    BiasCategory.QUESTIONABLE.value: CategoryRating(
        score=35, color=ORANGE, label="Questionable", description="Questionable source"
    ),
}

FACTUAL_RATINGS: Dict[str, CategoryRating] = {
    FactualCategory.VERY_HIGH.value: CategoryRating(
        score=95, color=GREEN, label="Very High", description="Very high factual reporting"
    ),
    FactualCategory.HIGH.value: CategoryRating(
        score=85, color=GREEN, label="High", description="High factual reporting"
    ),
    FactualCategory.MOSTLY_FACTUAL.value: CategoryRating(
        score=75, color=LIGHT_GREEN, label="Mostly Factual", description="Mostly factual reporting"
    ),
    FactualCategory.MIXED.value: CategoryRating(
        score=60, color=AMBER, label="Mixed", description="Mixed factual reporting"
    ),
    FactualCategory.LOW.value: CategoryRating(
        score=40, color=ORANGE, label="Low", description="Low factual reporting"
    ),
    FactualCategory.VERY_LOW.value: CategoryRating(
        score=25, color=RED, label="Very Low", description="Very low factual reporting"
    ),
    FactualCategory.NOT_RATED.value: CategoryRating(
        score=50, color=NEUTRAL, label="Not Rated", description="Not rated for factual reporting"
    ),
}

UNKNOWN_BIAS = CategoryRating(
    score=50, color=NEUTRAL, label="Unknown", description="Unknown bias"
)
UNKNOWN_FACTUAL = CategoryRating(
    score=50, color=NEUTRAL, label="Unknown", description="Unknown factual rating"
)


def _lookup(table: Dict[str, CategoryRating], category, unknown: CategoryRating) -> CategoryRating:
    if isinstance(category, (BiasCategory, FactualCategory)):
        category = category.value
    if not isinstance(category, str):
        return unknown
    return table.get(category.strip().lower(), unknown)


def get_bias_rating(category) -> CategoryRating:
    """Look up a bias category, case-insensitively.

    Unmatched input of any kind resolves to the Unknown entry (score 50).
    """
    return _lookup(BIAS_RATINGS, category, UNKNOWN_BIAS)


def get_factual_rating(category) -> CategoryRating:
    """Look up a factual-reporting category, case-insensitively.

    Unmatched input of any kind resolves to the Unknown entry (score 50).
    """
    return _lookup(FACTUAL_RATINGS, category, UNKNOWN_FACTUAL)


def combine_bias_factual(
    bias: CategoryRating,
    factual: CategoryRating,
) -> RatingClassification:
    """Combine bias and factual ratings into one composite score.

    Args:
        bias: Bias category rating
        factual: Factual category rating

    Returns:
        Classified ``factual*0.6 + bias*0.4``
    """
    score = factual.score * FACTUAL_WEIGHT + bias.score * BIAS_WEIGHT
    return classify_composite(score)


def combine_community_and_external(
    community_score: Optional[float],
    external_score: Optional[float],
) -> Optional[RatingClassification]:
    """Combine a 0-10 community rating with a 0-100 external score.

    The community rating is projected onto 0-100 first. A single available
    signal is used directly.

    Args:
        community_score: Community rating (0-10) or None
        external_score: External composite score (0-100) or None

    Returns:
        Classified ``external*0.7 + community*10*0.3``, or None when neither
        signal is available
    """
    if community_score is None and external_score is None:
        return None
    if external_score is None:
        return classify_composite(community_to_composite(community_score))
    if community_score is None:
        return classify_composite(external_score)

    combined = (
        external_score * EXTERNAL_WEIGHT
        + community_to_composite(community_score) * COMMUNITY_WEIGHT
    )
    return classify_composite(combined)
