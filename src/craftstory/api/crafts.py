"""Craft catalogue and discovery feed endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from craftstory.api.auth import require_user
from craftstory.api.models import CraftPayload, InteractionRequest, PublishRequest
from craftstory.services.crafts import CraftNotFoundError, CraftOwnershipError

if TYPE_CHECKING:
    from craftstory.containers import AppContainer
    from craftstory.domain.profiles import CraftListing

router = APIRouter(prefix="/crafts", tags=["crafts"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_craft(
    payload: CraftPayload, request: Request, uid: str = Depends(require_user)
) -> dict[str, object]:
    """Create a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    listing = container.craft_service.create_craft(
        uid, payload.model_dump(exclude_unset=True)
    )
    return {"craft": _serialize(listing)}


@router.get("")
async def list_crafts(
    artisan_id: str, request: Request, limit: int = 50
) -> dict[str, object]:
    """Return an artisan's listings."""
    container: AppContainer = request.app.state.container
    crafts = container.craft_service.list_by_artisan(artisan_id, limit)
    return {"crafts": [_serialize(listing) for listing in crafts]}


@router.get("/feed")
async def feed(request: Request, limit: int = 20) -> dict[str, object]:
    """Return published listings for swipe discovery."""
    container: AppContainer = request.app.state.container
    crafts = container.craft_service.feed(limit)
    return {"crafts": [_serialize(listing) for listing in crafts]}


@router.get("/{craft_id}")
async def get_craft(craft_id: str, request: Request) -> dict[str, object]:
    """Return one listing."""
    container: AppContainer = request.app.state.container
    try:
        listing = container.craft_service.get_craft(craft_id)
    except CraftNotFoundError as exc:
        raise _not_found() from exc
    return {"craft": _serialize(listing)}


@router.put("/{craft_id}")
async def update_craft(
    craft_id: str,
    payload: CraftPayload,
    request: Request,
    uid: str = Depends(require_user),
) -> dict[str, object]:
    """Update a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    try:
        listing = container.craft_service.update_craft(
            craft_id, uid, payload.model_dump(exclude_unset=True)
        )
    except CraftNotFoundError as exc:
        raise _not_found() from exc
    except CraftOwnershipError as exc:
        raise _forbidden() from exc
    return {"craft": _serialize(listing)}


@router.post("/{craft_id}/publish")
async def publish_craft(
    craft_id: str,
    payload: PublishRequest,
    request: Request,
    uid: str = Depends(require_user),
) -> dict[str, object]:
    """Publish or unpublish a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    try:
        listing = container.craft_service.set_published(
            craft_id, uid, payload.is_published
        )
    except CraftNotFoundError as exc:
        raise _not_found() from exc
    except CraftOwnershipError as exc:
        raise _forbidden() from exc
    return {"craft": _serialize(listing)}


@router.delete("/{craft_id}")
async def delete_craft(
    craft_id: str, request: Request, uid: str = Depends(require_user)
) -> dict[str, object]:
    """Delete a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    try:
        container.craft_service.delete_craft(craft_id, uid)
    except CraftNotFoundError as exc:
        raise _not_found() from exc
    except CraftOwnershipError as exc:
        raise _forbidden() from exc
    return {"success": True}


@router.post("/{craft_id}/interactions")
async def record_interaction(
    craft_id: str, payload: InteractionRequest, request: Request
) -> dict[str, object]:
    """Count a view, like, save or share."""
    container: AppContainer = request.app.state.container
    try:
        container.craft_service.record_interaction(craft_id, payload.kind)
    except CraftNotFoundError as exc:
        raise _not_found() from exc
    return {"success": True}


def _serialize(listing: CraftListing) -> dict[str, object]:
    data = asdict(listing)
    if listing.created_at is not None:
        data["created_at"] = listing.created_at.isoformat()
    return data


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Craft not found"
    )


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN, detail="Craft belongs to another artisan"
    )
