"""Rating scale classification.

Two scales are in use and must not be mixed without conversion:

* the composite scale (0-100) used for MBFC scores and combined ratings,
  classified into letter grades;
* the community scale (0-10) used for raw vote means, which only drives
  display text and the three-band badge.

Every threshold is closed below, so a score equal to a boundary belongs to the
higher band.
"""

from typing import List, Tuple

from ..models.reliability import Badge, BadgeBand, Grade, RatingClassification

GREEN = "#28a745"
LIGHT_GREEN = "#6bcf7f"
AMBER = "#ffc107"
ORANGE = "#fd7e14"
RED = "#dc3545"
NEUTRAL = "#666"

COMMUNITY_TO_COMPOSITE = 10.0

# (lower bound, grade, color, label), highest band first
COMPOSITE_BANDS: List[Tuple[float, Grade, str, str]] = [
    (90.0, Grade.A_PLUS, GREEN, "Highly Reliable"),
    (80.0, Grade.A, GREEN, "Reliable"),
    (70.0, Grade.B, LIGHT_GREEN, "Mostly Reliable"),
    (60.0, Grade.C, AMBER, "Mixed Reliability"),
    (40.0, Grade.D, ORANGE, "Questionable"),
]
COMPOSITE_FLOOR = (Grade.F, RED, "Unreliable")

COMMUNITY_BANDS: List[Tuple[float, str]] = [
    (9.0, "Highly Reliable"),
    (7.0, "Mostly Reliable"),
    (5.0, "Mixed Reliability"),
    (3.0, "Questionable"),
]


def _composite_band(score: float) -> Tuple[Grade, str, str]:
    for lower, grade, color, label in COMPOSITE_BANDS:
        if score >= lower:
            return grade, color, label
    return COMPOSITE_FLOOR


def classify_composite(score: float) -> RatingClassification:
    """Classify a 0-100 score into grade, color and label.

    Args:
        score: Composite score

    Returns:
        Classification carrying the unmodified score
    """
    grade, color, label = _composite_band(score)
    return RatingClassification(score=score, grade=grade, color=color, label=label)


def grade_from_score(score: float) -> Grade:
    """Letter grade for a 0-100 score."""
    return _composite_band(score)[0]


def label_from_score(score: float) -> str:
    """Reliability label for a 0-100 score."""
    return _composite_band(score)[2]


def color_from_score(score: float) -> str:
    """Four-band display color for a 0-100 score."""
    if score >= 80:
        return GREEN
    if score >= 60:
        return AMBER
    if score >= 40:
        return ORANGE
    return RED


def community_to_composite(rating: float) -> float:
    """Project a 0-10 community rating onto the 0-100 scale."""
    return rating * COMMUNITY_TO_COMPOSITE


def community_label(rating: float) -> str:
    """Display text for a 0-10 community rating."""
    for lower, label in COMMUNITY_BANDS:
        if rating >= lower:
            return label
    return "Unreliable"


def community_color(rating: float) -> str:
    """Display color for a 0-10 community rating."""
    if rating >= 7:
        return GREEN
    if rating >= 5:
        return AMBER
    return RED


def badge_for(rating: float) -> Badge:
    """Three-band badge for a 0-10 rating."""
    if rating >= 7:
        return Badge(band=BadgeBand.RELIABLE, text="✓", color=GREEN)
    if rating >= 4:
        return Badge(band=BadgeBand.MIXED, text="?", color=AMBER)
    return Badge(band=BadgeBand.UNRELIABLE, text="!", color=RED)


def classify_community(rating: float) -> RatingClassification:
    """Classify a 0-10 community rating on the composite scale."""
    return classify_composite(community_to_composite(rating))
