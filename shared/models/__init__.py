"""
Shared Models
=============

Pydantic models shared across Tierwise services.

Models:
- Client models (Client, ClientCreate)
- Evaluation models (Evaluation, EvaluationCreate, Category, Categories)
- User models (UserCreate, LoginRequest, AccessToken, UserProfile)
- Common models (MessageResponse, ErrorResponse, HealthResponse)
"""

from shared.models.client import Client, ClientCreate
from shared.models.common import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from shared.models.evaluation import (
    CATEGORY_NAMES,
    Categories,
    CategoriesUpdate,
    CategoriesUpdateResponse,
    Category,
    Evaluation,
    EvaluationCreate,
    Priority,
    Tier,
)
from shared.models.user import AccessToken, LoginRequest, UserCreate, UserProfile

__all__ = [
    # Client
    "Client",
    "ClientCreate",
    # Evaluation
    "CATEGORY_NAMES",
    "Categories",
    "CategoriesUpdate",
    "CategoriesUpdateResponse",
    "Category",
    "Evaluation",
    "EvaluationCreate",
    "Priority",
    "Tier",
    # User
    "AccessToken",
    "LoginRequest",
    "UserCreate",
    "UserProfile",
    # Common
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
