"""User account endpoints with bearer token auth."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from craftstory.api.models import UserUpdateRequest  # noqa: TC001
from craftstory.services.users import InvalidTokenError, UserNotFoundError

if TYPE_CHECKING:
    from craftstory.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """Verify the bearer token and return the caller's uid."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )
    token = authorization.removeprefix("Bearer ").strip()
    container: AppContainer = request.app.state.container
    try:
        return await container.user_service.authenticate(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc


@router.get("/user")
async def get_user(
    request: Request, uid: str = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's user document."""
    container: AppContainer = request.app.state.container
    try:
        user = container.user_service.get_user(uid)
    except UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        ) from exc
    return {"success": True, "user": asdict(user)}


@router.put("/user")
async def update_user(
    payload: UserUpdateRequest, request: Request, uid: str = Depends(require_user)
) -> dict[str, object]:
    """Update the caller's role, language or favorites."""
    container: AppContainer = request.app.state.container
    applied = container.user_service.update_user(
        uid,
        role=payload.role,
        language_code=payload.language_code,
        favorites=payload.favorites,
    )
    return {"success": True, "message": "User updated successfully", "updated": applied}


@router.delete("/user")
async def delete_user(
    request: Request, uid: str = Depends(require_user)
) -> dict[str, object]:
    """Delete the caller's user document and identity."""
    container: AppContainer = request.app.state.container
    await container.user_service.delete_user(uid)
    logger.info("Deleted user", extra={"uid": uid})
    return {"success": True, "message": "User deleted successfully"}
