"""Craft listing catalogue and discovery feed."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from craftstory.domain.profiles import CraftListing

logger = logging.getLogger(__name__)

INTERACTION_STATS = {
    "view": "views",
    "like": "likes",
    "save": "saves",
    "share": "shares",
}

_EDITABLE_FIELDS = {
    "title",
    "description",
    "materials",
    "techniques",
    "story",
    "cultural_context",
    "price",
    "location",
    "tags",
    "images",
    "summary",
    "is_published",
}


class CraftNotFoundError(LookupError):
    """Raised when a craft id does not exist."""


class CraftOwnershipError(PermissionError):
    """Raised when a caller modifies a craft they do not own."""


class CraftRepository(Protocol):
    """Persistence interface for craft listings."""

    def create_craft(self, listing: CraftListing) -> CraftListing:
        """Insert a listing and return it with its id."""

    def get_craft(self, craft_id: str) -> CraftListing | None:
        """Return a listing by id, if present."""

    def update_craft(self, craft_id: str, updates: dict[str, object]) -> None:
        """Apply field-level updates to a listing."""

    def delete_craft(self, craft_id: str) -> None:
        """Delete a listing."""

    def list_by_artisan(self, artisan_id: str, limit: int) -> list[CraftListing]:
        """Return an artisan's listings, newest first."""

    def list_published(self, limit: int) -> list[CraftListing]:
        """Return published listings, newest first."""

    def increment_stat(self, craft_id: str, stat: str) -> None:
        """Increment one interaction counter."""


@dataclass
class CraftService:
    """Application service for craft listings."""

    repository: CraftRepository

    def save_listing(
        self,
        artisan_id: str,
        fields: dict[str, object],
        summary: str | None,
        tags: list[str],
    ) -> CraftListing:
        """Persist a listing collected by voice and return it.

        Persistence failures are logged and swallowed; the in-memory listing is
        returned either way.
        """
        listing = listing_from_fields(artisan_id, fields, summary=summary, tags=tags)
        try:
            return self.repository.create_craft(listing)
        except Exception:
            logger.exception(
                "Failed to save craft listing", extra={"artisan_id": artisan_id}
            )
            return listing

    def create_craft(self, artisan_id: str, payload: dict[str, object]) -> CraftListing:
        """Create a listing from an API payload."""
        updates = _editable(payload)
        listing = CraftListing(
            id=None,
            artisan_id=artisan_id,
            title=str(updates.pop("title", None) or "Handcrafted Item"),
        )
        return self.repository.create_craft(replace(listing, **updates))

    def get_craft(self, craft_id: str) -> CraftListing:
        """Return a listing or raise CraftNotFoundError."""
        listing = self.repository.get_craft(craft_id)
        if listing is None:
            raise CraftNotFoundError(craft_id)
        return listing

    def update_craft(
        self, craft_id: str, artisan_id: str, payload: dict[str, object]
    ) -> CraftListing:
        """Update an owned listing and return the new version."""
        listing = self._owned(craft_id, artisan_id)
        updates = _editable(payload)
        if updates:
            self.repository.update_craft(craft_id, updates)
        return replace(listing, **updates)

    def set_published(
        self, craft_id: str, artisan_id: str, is_published: bool
    ) -> CraftListing:
        """Publish or unpublish an owned listing."""
        return self.update_craft(craft_id, artisan_id, {"is_published": is_published})

    def delete_craft(self, craft_id: str, artisan_id: str) -> None:
        """Delete an owned listing."""
        self._owned(craft_id, artisan_id)
        self.repository.delete_craft(craft_id)

    def list_by_artisan(self, artisan_id: str, limit: int = 50) -> list[CraftListing]:
        """Return an artisan's listings."""
        return self.repository.list_by_artisan(artisan_id, limit)

    def feed(self, limit: int = 20) -> list[CraftListing]:
        """Return published listings for the discovery feed."""
        return self.repository.list_published(limit)

    def record_interaction(self, craft_id: str, kind: str) -> None:
        """Count a view, like, save or share on a listing."""
        stat = INTERACTION_STATS.get(kind)
        if stat is None:
            raise ValueError(f"Unknown interaction: {kind}")
        self.get_craft(craft_id)
        self.repository.increment_stat(craft_id, stat)

    def _owned(self, craft_id: str, artisan_id: str) -> CraftListing:
        listing = self.get_craft(craft_id)
        if listing.artisan_id != artisan_id:
            raise CraftOwnershipError(craft_id)
        return listing


def listing_from_fields(
    artisan_id: str,
    fields: dict[str, object],
    summary: str | None = None,
    tags: list[str] | None = None,
) -> CraftListing:
    """Map collected conversation fields onto a listing record."""
    return CraftListing(
        id=None,
        artisan_id=artisan_id,
        title=_text(fields.get("name")) or "Handcrafted Item",
        description=_text(fields.get("description")),
        materials=_items(fields.get("materials")),
        techniques=_items(fields.get("techniques")),
        story=_text(fields.get("story")),
        price=_text(fields.get("price")),
        location=_text(fields.get("location")),
        tags=list(tags or []),
        summary=summary,
    )


def _editable(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if key in _EDITABLE_FIELDS}


def _text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _items(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(value)]
