"""
Clients Routes
==============

API endpoints for client registration.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, status

from services.client_evaluation.dependencies import get_client_service
from services.client_evaluation.services import ClientService
from shared.models.client import Client, ClientCreate
from shared.models.common import MessageResponse

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_client(
    client_data: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    """
    Register a client.

    Name and email are required; email must be unique.
    """
    client = await service.register(client_data)
    return MessageResponse(msg="Client added successfully!", id=client.id)


@router.get("", response_model=list[Client])
async def list_clients(
    service: ClientService = Depends(get_client_service),
) -> list[Client]:
    """List all clients."""
    return await service.list_all()
