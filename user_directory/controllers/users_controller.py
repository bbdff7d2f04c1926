# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: /users pass-through routes to the hosted collection."""
from fastapi import APIRouter, Depends, Request

from user_directory.core.dependencies import get_relay_service
from user_directory.services.relay_service import RelayService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(request: Request, relay: RelayService = Depends(get_relay_service)):
    return await relay.relay(request, "Failed to fetch users")


@router.post("")
async def create_user(request: Request, relay: RelayService = Depends(get_relay_service)):
    return await relay.relay(request, "Failed to create user")


@router.get("/{user_id}")
async def get_user(user_id: str, request: Request,
                   relay: RelayService = Depends(get_relay_service)):
    return await relay.relay(request, "Failed to fetch user", user_id)


@router.put("/{user_id}")
async def update_user(user_id: str, request: Request,
                      relay: RelayService = Depends(get_relay_service)):
    return await relay.relay(request, "Failed to update user", user_id)


@router.delete("/{user_id}")
async def delete_user(user_id: str, request: Request,
                      relay: RelayService = Depends(get_relay_service)):
    return await relay.relay(request, "Failed to delete user", user_id)
