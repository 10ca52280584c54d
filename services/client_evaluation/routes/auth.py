"""
Auth Routes
===========

Operator registration and login.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, status

from services.client_evaluation.dependencies import get_user_service
from services.client_evaluation.services import UserService
from shared.auth import User, get_current_user
from shared.models.common import MessageResponse
from shared.models.user import AccessToken, LoginRequest, UserCreate, UserProfile

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Create an operator account."""
    profile = await service.register(user_data)
    return MessageResponse(msg="User created successfully", id=profile.id)


@router.post("/login", response_model=AccessToken)
async def login(
    credentials: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> AccessToken:
    """Exchange username and password for a bearer token."""
    return await service.login(credentials)


@router.get("/me", response_model=UserProfile)
async def me(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserProfile:
    """Profile of the authenticated operator."""
    return await service.get_profile(current_user.id)
