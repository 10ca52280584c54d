"""
Evaluation Lifecycle Service
============================

Creates, updates and removes evaluations, keeping their derived fields
consistent with the scoring calculator.

Lifecycle:
1. Create -> unfinished; tier and notes from the caller-supplied score
2. Category update -> finished; score re-aggregated from all categories
3. Further category updates recompute again and stay finished
4. Remove

Category updates are read-merge-write cycles guarded by the document
version. A cycle that loses a race is retried from a fresh read.

Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any

import pydantic
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from services.client_evaluation.exceptions import (
    NotFoundError,
    ValidationError,
    VersionConflictError,
)
from services.client_evaluation.services.calculator import ScoreCalculator
from services.client_evaluation.services.priority import (
    Clock,
    PriorityCalculator,
    PriorityThresholds,
    utc_now,
)
from services.client_evaluation.storage.base import Document, DocumentStore
from shared.config import settings
from shared.logging import get_logger
from shared.models.evaluation import Categories, Evaluation, EvaluationCreate


logger = get_logger(__name__)


CLIENT_FIELDS = ("clientName", "clientEmail")
SCORE_FIELDS = ("score", "preciseScore", "totalScore")

# First try plus the configured number of retries
MAX_UPDATE_ATTEMPTS = settings.storage.max_update_retries + 1


def merge_categories(existing: Categories, patch: Categories) -> Categories:
    """
    Key-wise overwrite merge of a partial category update.

    Only categories explicitly present in ``patch`` are touched:
    - existing category: fields set in the patch overwrite, others stay
    - absent category: the patch becomes the whole category
    - explicit None: the category is cleared
    """
    updates: dict[str, Any] = {}

    for name in patch.model_fields_set:
        incoming = getattr(patch, name)
        current = getattr(existing, name)

        if incoming is None:
            updates[name] = None
        elif current is None:
            updates[name] = incoming
        else:
            updates[name] = current.model_copy(
                update=incoming.model_dump(exclude_unset=True)
            )

    return existing.model_copy(update=updates)


def to_document(evaluation: Evaluation) -> Document:
    """Serialize an evaluation for storage."""
    return evaluation.model_dump(
        mode="json",
        by_alias=True,
        exclude_none=True,
        exclude={"id"},
    )


class EvaluationService:
    """
    Service for the evaluation lifecycle.

    Create trusts the caller's score, precise score and total score.
    Category updates derive score and precise score from the categories.
    """

    def __init__(
        self,
        store: DocumentStore,
        calculator: ScoreCalculator | None = None,
        priority_calculator: PriorityCalculator | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize the evaluation service.

        Args:
            store: Evaluations document store
            calculator: Score calculator (default bands if not provided)
            priority_calculator: Priority calculator (thresholds from settings if not provided)
            clock: Source of "now"
        """
        self.store = store
        self.calculator = calculator or ScoreCalculator()
        self.priority_calculator = priority_calculator or PriorityCalculator(
            PriorityThresholds.from_settings()
        )
        self.clock = clock

    # =========================================================================
    # Create
    # =========================================================================

    async def create(self, data: EvaluationCreate | Mapping[str, Any]) -> Evaluation:
        """
        Create an evaluation and derive its tier, notes, priority and date stamp.

        Args:
            data: Evaluation fields, as a model or a raw camelCase mapping

        Returns:
            The stored evaluation

        Raises:
            ValidationError: A required field is missing
        """
        payload = self._validate_create(data)

        now = self.clock()
        assessment = self.calculator.assess(payload.score)

        evaluation = Evaluation(
            **payload.model_dump(),
            id="",
            tier=assessment.tier,
            recommendation_notes=assessment.recommendation_notes,
            priority=self.priority_calculator.priority_for(now, self.clock()),
            last_evaluation=now.date(),
            version=0,
            created_at=now,
            updated_at=now,
        )

        stored = Evaluation.model_validate(await self.store.insert(to_document(evaluation)))

        logger.info(
            "evaluation_created",
            evaluation_id=stored.id,
            client_email=stored.client_email,
            score=stored.score,
            tier=stored.tier.value if stored.tier else None,
        )

        return stored

    def _validate_create(self, data: EvaluationCreate | Mapping[str, Any]) -> EvaluationCreate:
        if isinstance(data, EvaluationCreate):
            return data

        try:
            return EvaluationCreate.model_validate(data)
        except pydantic.ValidationError as e:
            missing = {
                str(error["loc"][0])
                for error in e.errors()
                if error["type"] == "missing" or error.get("input") is None
            }
            if missing & {*CLIENT_FIELDS, "client_name", "client_email"}:
                message = "Client name and email are required."
            elif missing & {*SCORE_FIELDS, "precise_score", "total_score"}:
                message = "All required fields must be provided."
            else:
                message = f"Invalid evaluation: {e.error_count()} field(s) failed validation."
            raise ValidationError(message) from e

    # =========================================================================
    # Category Update
    # =========================================================================

    async def update_categories(
        self,
        evaluation_id: str,
        categories: Categories | Mapping[str, Any],
    ) -> Evaluation:
        """
        Merge a partial category update and recompute the derived fields.

        Marks the evaluation finished. Priority and total score are left alone.

        Args:
            evaluation_id: Evaluation ID
            categories: Partial category mapping

        Returns:
            The updated evaluation

        Raises:
            NotFoundError: No evaluation with this ID
            VersionConflictError: Every attempt lost a concurrent-write race
        """
        if isinstance(categories, Categories):
            patch = categories
        else:
            try:
                patch = Categories.model_validate(categories)
            except pydantic.ValidationError as e:
                raise ValidationError(
                    f"Invalid categories: {e.error_count()} field(s) failed validation."
                ) from e

        updated = await self._apply_category_update(evaluation_id, patch)

        logger.info(
            "evaluation_categories_updated",
            evaluation_id=evaluation_id,
            categories=sorted(patch.model_fields_set),
            score=updated.score,
            precise_score=updated.precise_score,
            tier=updated.tier.value if updated.tier else None,
        )

        return updated

    @retry(
        retry=retry_if_exception_type(VersionConflictError),
        stop=stop_after_attempt(MAX_UPDATE_ATTEMPTS),
        wait=wait_random_exponential(multiplier=0.05, max=1),
        before_sleep=lambda retry_state: logger.warning(
            "evaluation_conflict_retry",
            attempt=retry_state.attempt_number,
        ),
        reraise=True,
    )
    async def _apply_category_update(
        self,
        evaluation_id: str,
        patch: Categories,
    ) -> Evaluation:
        evaluation = await self._load(evaluation_id)

        merged = merge_categories(evaluation.categories, patch)
        score, precise_score = self.calculator.aggregate(merged)
        assessment = self.calculator.assess(score)
        now = self.clock()

        updated = evaluation.model_copy(
            update={
                "categories": merged,
                "score": score,
                "precise_score": precise_score,
                "tier": assessment.tier,
                "recommendation_notes": assessment.recommendation_notes,
                "is_evaluation_finished": True,
                "last_evaluation": now.date(),
                "updated_at": now,
            }
        )

        return await self._write(evaluation, updated)

    # =========================================================================
    # Priority
    # =========================================================================

    @retry(
        retry=retry_if_exception_type(VersionConflictError),
        stop=stop_after_attempt(MAX_UPDATE_ATTEMPTS),
        wait=wait_random_exponential(multiplier=0.05, max=1),
        reraise=True,
    )
    async def refresh_priority(self, evaluation_id: str) -> Evaluation:
        """
        Recompute the follow-up priority from the evaluation's age and store it.

        Raises:
            NotFoundError: No evaluation with this ID
        """
        evaluation = await self._load(evaluation_id)

        now = self.clock()
        priority = self.priority_calculator.priority_for(evaluation.created_at, now)

        updated = evaluation.model_copy(update={"priority": priority, "updated_at": now})
        stored = await self._write(evaluation, updated)

        logger.info(
            "evaluation_priority_refreshed",
            evaluation_id=evaluation_id,
            previous=evaluation.priority.value if evaluation.priority else None,
            priority=priority.value,
        )

        return stored

    # =========================================================================
    # Read / Delete
    # =========================================================================

    async def get(self, evaluation_id: str) -> Evaluation:
        """
        Get an evaluation by ID.

        Raises:
            NotFoundError: No evaluation with this ID
        """
        return await self._load(evaluation_id)

    async def list_all(self) -> list[Evaluation]:
        """All evaluations in storage order."""
        documents = await self.store.find_all()

        logger.debug("evaluations_listed", total=len(documents))

        return [Evaluation.model_validate(d) for d in documents]

    async def remove(self, evaluation_id: str) -> None:
        """
        Delete an evaluation.

        Raises:
            NotFoundError: No evaluation with this ID, including one already deleted
        """
        deleted = await self.store.delete_by_id(evaluation_id)
        if deleted is None:
            raise NotFoundError("Evaluation", evaluation_id)

        logger.info("evaluation_deleted", evaluation_id=evaluation_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load(self, evaluation_id: str) -> Evaluation:
        document = await self.store.find_by_id(evaluation_id)
        if document is None:
            raise NotFoundError("Evaluation", evaluation_id)
        return Evaluation.model_validate(document)

    async def _write(self, current: Evaluation, updated: Evaluation) -> Evaluation:
        stored = await self.store.replace(
            current.id,
            to_document(updated),
            expected_version=current.version,
        )
        if stored is None:
            raise VersionConflictError("Evaluation", current.id)
        return Evaluation.model_validate(stored)
