# =============================================================================
# app/routers/admin.py - Farmer Approval Endpoints
# =============================================================================
# Admin-only. Approving is one-way: there is no endpoint to un-approve.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import RequireRole, require
from app.dependencies import UserServiceDep
from core.models.user import Claims, UserPublic, UserRole

logger = logging.getLogger(__name__)

router = APIRouter()

Admin = Annotated[Claims, Depends(require(RequireRole(UserRole.ADMIN)))]


@router.get("/farmers/pending", response_model=list[UserPublic])
def list_pending_farmers(admin: Admin, users: UserServiceDep):
    """
    List farmers waiting for approval, oldest registration first.
    """
    return users.list_pending_farmers()


@router.patch("/farmers/{farmer_id}/approve")
def approve_farmer(
    farmer_id: Annotated[int, Path(description="User ID of the farmer")],
    admin: Admin,
    users: UserServiceDep,
):
    """
    Approve a pending farmer.

    The farmer has to log in again to get a token that lets them post.

    Raises:
        404: No such farmer, or already approved
    """
    users.approve_farmer(farmer_id)
    logger.info(f"Admin {admin.id} approved farmer {farmer_id}")
    return {"ok": True}
