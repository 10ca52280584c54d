"""
Service Dependencies
====================

FastAPI dependency providers for the client evaluation services.

Tests replace the stores with ``set_store`` or override these
providers through ``app.dependency_overrides``.
"""

from services.client_evaluation.services import ClientService, EvaluationService, UserService
from services.client_evaluation.storage import CLIENTS, EVALUATIONS, USERS, get_store


def get_evaluation_service() -> EvaluationService:
    """Evaluation lifecycle service bound to the evaluations store."""
    return EvaluationService(get_store(EVALUATIONS))


def get_client_service() -> ClientService:
    """Client registry bound to the clients store."""
    return ClientService(get_store(CLIENTS))


def get_user_service() -> UserService:
    """Account service bound to the users store."""
    return UserService(get_store(USERS))
