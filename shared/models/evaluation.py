"""
Evaluation Models
=================

Models for multi-category client evaluations.

An evaluation holds seven fixed categories. Each category carries free-form
numeric sub-metrics and the ``score``/``preciseScore`` values that are summed
into the evaluation aggregate.

Version: 0.1.0
"""

from collections.abc import Iterator
from datetime import date, datetime
from enum import Enum

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.models.common import CamelModel


Number = int | float


class Tier(str, Enum):
    """Evaluation tier, Tier1 best through Tier4 worst."""

    TIER1 = "Tier1"
    TIER2 = "Tier2"
    TIER3 = "Tier3"
    TIER4 = "Tier4"


class Priority(str, Enum):
    """Follow-up priority derived from evaluation age."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UPDATE = "Update"
    UNKNOWN = "Unknown"


CATEGORY_NAMES: tuple[str, ...] = (
    "financial_health",
    "strategic_fit",
    "operational_excellence",
    "token_metrics",
    "marketing_brand",
    "market_vision",
    "risk_profile",
)


class Category(CamelModel):
    """One evaluation dimension. Every field is optional."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Summed into the evaluation aggregate
    score: Number | None = None
    total_score: Number | None = None
    precise_score: Number | None = None

    # Sub-metrics
    revenue_potential: Number | None = None
    funding_stage: Number | None = None
    budget_commitment: Number | None = None
    liquidity: Number | None = None
    payment_timeliness: Number | None = None
    industry_relevance: Number | None = None
    geographic_targeting: Number | None = None
    regulatory_compliance: Number | None = None
    partnership_potential: Number | None = None
    on_boarding_process: Number | None = None
    resource_utilization: Number | None = None
    project_timeliness: Number | None = None
    market_cap: Number | None = None
    holder_distribution: Number | None = None
    stability: Number | None = None
    community_size: Number | None = None
    social_media_influence: Number | None = None
    influencer_reach: Number | None = None
    content_quality: Number | None = None
    brand_alignment: Number | None = None
    market_scalability: Number | None = None
    market_opportunity: Number | None = None
    founders_background: Number | None = None
    strategic_vision: Number | None = None
    regulatory_exposure: Number | None = None
    financial_stability: Number | None = None
    reputation: Number | None = None


class Categories(CamelModel):
    """
    Fixed-key mapping of category name to category.

    ``None`` means the category is absent; ``Category()`` means present but
    empty. Both contribute nothing to aggregate sums.
    """

    financial_health: Category | None = None
    strategic_fit: Category | None = None
    operational_excellence: Category | None = None
    token_metrics: Category | None = None
    marketing_brand: Category | None = None
    market_vision: Category | None = None
    risk_profile: Category | None = None

    def present(self) -> Iterator[tuple[str, Category]]:
        """Yield (name, category) for every category that is not absent."""
        for name in CATEGORY_NAMES:
            category = getattr(self, name)
            if category is not None:
                yield name, category


class EvaluationCreate(CamelModel):
    """
    Request model for submitting an evaluation.

    Required fields use "missing key" semantics: empty strings and zero scores
    are accepted, absent or null values are rejected.
    """

    client_name: str
    client_email: str
    client_website: str | None = None

    score: Number
    precise_score: Number
    total_score: Number

    categories: Categories = Field(default_factory=Categories)
    is_evaluation_finished: bool = False


class Evaluation(EvaluationCreate):
    """Stored evaluation with its derived fields."""

    id: str

    tier: Tier | None = None
    recommendation_notes: list[str] = Field(default_factory=list)
    priority: Priority | None = None
    last_evaluation: date | None = None

    # Optimistic concurrency counter, bumped on every write
    version: int = 0

    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoriesUpdate(CamelModel):
    """Request body for a partial category update."""

    categories: Categories


class CategoriesUpdateResponse(CamelModel):
    """Response returned after a category update."""

    msg: str
    updated_evaluation: Evaluation
