"""
Scoring and Tiering Calculator
==============================

Pure functions that turn category data into the derived evaluation fields:
aggregate scores, tier and recommendation notes.

Score bands (shared by tiering and recommendations):
- Tier1: 800 <= score <= 1000, no recommendations
- Tier2: 600 <= score < 800
- Tier3: 400 <= score < 600
- Tier4: 0 <= score < 400
- Anything outside [0, 1000] falls back to Tier4 with no recommendations

Version: 0.1.0
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pydantic

from shared.logging import get_logger
from shared.models.evaluation import Categories, Category, Number, Tier


logger = get_logger(__name__)


# =============================================================================
# Band Configuration
# =============================================================================


@dataclass(frozen=True)
class ScoreBand:
    """A half-open score range mapped to a tier and its recommendations."""

    tier: Tier
    lower: float
    upper: float
    upper_inclusive: bool = False
    recommendations: tuple[str, ...] = ()

    def contains(self, score: float) -> bool:
        """Check whether a score falls inside this band."""
        if score < self.lower:
            return False
        if self.upper_inclusive:
            return score <= self.upper
        return score < self.upper


DEFAULT_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(
        tier=Tier.TIER1,
        lower=800,
        upper=1000,
        upper_inclusive=True,
    ),
    ScoreBand(
        tier=Tier.TIER2,
        lower=600,
        upper=800,
        recommendations=(
            "Optimize Operations.",
            "Prioritize High-Impact Projects.",
            "Enhance Partnerships.",
        ),
    ),
    ScoreBand(
        tier=Tier.TIER3,
        lower=400,
        upper=600,
        recommendations=(
            "Address Process Inefficiencies.",
            "Identify Growth Opportunities.",
            "Increase Client Engagement.",
        ),
    ),
    ScoreBand(
        tier=Tier.TIER4,
        lower=0,
        upper=400,
        recommendations=(
            "Assess and Restructure.",
            "Achieve Quick Wins.",
            "Refine Value Proposition.",
        ),
    ),
)


@dataclass
class ScoreAssessment:
    """Tier and recommendations derived from a single score."""

    score: Number
    tier: Tier
    recommendation_notes: list[str] = field(default_factory=list)


# =============================================================================
# Calculator
# =============================================================================


class ScoreCalculator:
    """
    Maps category data and scores to derived evaluation fields.

    Tiering and recommendations read the same band table, so their
    boundaries cannot drift apart.
    """

    def __init__(
        self,
        bands: tuple[ScoreBand, ...] = DEFAULT_BANDS,
        fallback_tier: Tier = Tier.TIER4,
    ) -> None:
        """
        Initialize the calculator.

        Args:
            bands: Score bands, checked in order
            fallback_tier: Tier for scores outside every band
        """
        self.bands = bands
        self.fallback_tier = fallback_tier

    def aggregate(
        self,
        categories: Categories | Mapping[str, Any] | None,
    ) -> tuple[Number, Number]:
        """
        Sum ``score`` and ``precise_score`` across present categories.

        The two sums are independent. Absent categories and missing fields
        count as 0.

        Args:
            categories: Categories model, or a mapping of name to
                Category / dict / None

        Returns:
            (score, precise_score)
        """
        score: Number = 0
        precise_score: Number = 0

        for category in _iter_categories(categories):
            score += category.score or 0
            precise_score += category.precise_score or 0

        return score, precise_score

    def classify_tier(self, score: float) -> Tier:
        """Return the tier for a score. Out-of-range scores get the fallback tier."""
        band = self._band_for(score)
        return band.tier if band else self.fallback_tier

    def recommendations_for(self, score: float) -> list[str]:
        """Return the recommendation notes for a score, empty when out of range."""
        band = self._band_for(score)
        return list(band.recommendations) if band else []

    def assess(self, score: Number) -> ScoreAssessment:
        """Derive tier and recommendation notes together."""
        return ScoreAssessment(
            score=score,
            tier=self.classify_tier(score),
            recommendation_notes=self.recommendations_for(score),
        )

    def _band_for(self, score: float) -> ScoreBand | None:
        for band in self.bands:
            if band.contains(score):
                return band
        return None


def _iter_categories(categories: Categories | Mapping[str, Any] | None) -> list[Category]:
    if categories is None:
        return []

    if isinstance(categories, Categories):
        return [category for _, category in categories.present()]

    return [
        _coerce_category(name, value)
        for name, value in categories.items()
        if value is not None
    ]


def _coerce_category(name: str, value: Any) -> Category:
    """
    Read one category from a raw mapping entry.

    Malformed entries keep only their numeric ``score``/``preciseScore``;
    anything unreadable counts as 0.
    """
    if isinstance(value, Category):
        return value

    try:
        return Category.model_validate(value)
    except pydantic.ValidationError:
        logger.warning("category_malformed", category=name)

    if not isinstance(value, Mapping):
        return Category()

    return Category(
        score=_number_or_none(value.get("score")),
        precise_score=_number_or_none(value.get("preciseScore", value.get("precise_score"))),
    )


def _number_or_none(value: Any) -> Number | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


# =============================================================================
# Module-level helpers
# =============================================================================

default_calculator = ScoreCalculator()


def aggregate(categories: Categories | Mapping[str, Any] | None) -> tuple[Number, Number]:
    """Sum category scores with the default calculator."""
    return default_calculator.aggregate(categories)


def classify_tier(score: float) -> Tier:
    """Classify a score with the default bands."""
    return default_calculator.classify_tier(score)


def recommendations_for(score: float) -> list[str]:
    """Recommendation notes for a score with the default bands."""
    return default_calculator.recommendations_for(score)
