"""Users API router: list, fetch, admin role change."""

from typing import Annotated

from fastapi import APIRouter, Depends

from expense_app.api.dependencies import get_user_service
from expense_app.api.responses import ok
from expense_app.application.user_service import UserService
from expense_app.domain.schemas.user import RoleChangeRequest

router = APIRouter()


@router.get("/users")
async def list_users(
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    return ok(await user_service.list_users())


@router.get("/users/{user_id}")
async def get_user(
    user_id: str,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    return ok(await user_service.get_user(user_id))


@router.put("/users/{user_id}/role")
async def change_role(
    user_id: str,
    body: RoleChangeRequest,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Admin changes another user's role. 400 bad input, 404 unknown admin/target, 403 non-admin."""
    user = await user_service.change_role(user_id, role=body.role, admin_id=body.admin_id)
    return ok(user)
