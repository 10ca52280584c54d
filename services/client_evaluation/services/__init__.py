"""
Client Evaluation Services
==========================

Business logic for client evaluations.

Services:
- ScoreCalculator: aggregate score, tier and recommendation notes
- PriorityCalculator: follow-up priority from evaluation age
- EvaluationService: evaluation lifecycle
- ClientService: client registration
- UserService: operator accounts

Version: 0.1.0
"""

from services.client_evaluation.services.calculator import (
    ScoreAssessment,
    ScoreBand,
    ScoreCalculator,
    aggregate,
    classify_tier,
    recommendations_for,
)
from services.client_evaluation.services.clients import ClientService
from services.client_evaluation.services.lifecycle import EvaluationService, merge_categories
from services.client_evaluation.services.priority import (
    Clock,
    PriorityCalculator,
    PriorityThresholds,
    priority_for,
    utc_now,
)
from services.client_evaluation.services.users import UserService


__all__ = [
    # Calculator
    "ScoreAssessment",
    "ScoreBand",
    "ScoreCalculator",
    "aggregate",
    "classify_tier",
    "recommendations_for",
    # Priority
    "Clock",
    "PriorityCalculator",
    "PriorityThresholds",
    "priority_for",
    "utc_now",
    # Lifecycle
    "EvaluationService",
    "merge_categories",
    # Clients and users
    "ClientService",
    "UserService",
]
