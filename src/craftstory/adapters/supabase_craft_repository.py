"""Supabase implementation for craft listings."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from craftstory.domain.profiles import CraftListing, CraftStats
from craftstory.services.crafts import CraftRepository

_STAT_COLUMNS = ("views", "likes", "saves", "shares")


@dataclass
class SupabaseCraftRepository(CraftRepository):
    """Supabase-backed repository for the craft catalogue."""

    client: Client

    def create_craft(self, listing: CraftListing) -> CraftListing:
        """Insert a listing and return it."""
        response = (
            self.client.table("crafts")
            .insert(
                {
                    "artisan_id": listing.artisan_id,
                    "title": listing.title,
                    "description": listing.description,
                    "materials": listing.materials,
                    "techniques": listing.techniques,
                    "story": listing.story,
                    "cultural_context": listing.cultural_context,
                    "price": listing.price,
                    "location": listing.location,
                    "tags": listing.tags,
                    "images": listing.images,
                    "summary": listing.summary,
                    "is_published": listing.is_published,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create craft")
        return _parse_craft(response.data[0])

    def get_craft(self, craft_id: str) -> CraftListing | None:
        """Return a listing by id, if present."""
        response = (
            self.client.table("crafts")
            .select("*")
            .eq("id", craft_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_craft(response.data[0])

    def update_craft(self, craft_id: str, updates: dict[str, object]) -> None:
        """Apply field-level updates."""
        self.client.table("crafts").update(updates).eq("id", craft_id).execute()

    def delete_craft(self, craft_id: str) -> None:
        """Delete a listing."""
        self.client.table("crafts").delete().eq("id", craft_id).execute()

    def list_by_artisan(self, artisan_id: str, limit: int) -> list[CraftListing]:
        """Return an artisan's listings, newest first."""
        response = (
            self.client.table("crafts")
            .select("*")
            .eq("artisan_id", artisan_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_craft(row) for row in response.data or []]

    def list_published(self, limit: int) -> list[CraftListing]:
        """Return published listings, newest first."""
        response = (
            self.client.table("crafts")
            .select("*")
            .eq("is_published", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_craft(row) for row in response.data or []]

    def increment_stat(self, craft_id: str, stat: str) -> None:
        """Increment one interaction counter."""
        if stat not in _STAT_COLUMNS:
            raise ValueError(f"Unknown stat column: {stat}")
        response = (
            self.client.table("crafts")
            .select(stat)
            .eq("id", craft_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return
        current = int(response.data[0].get(stat) or 0)
        self.client.table("crafts").update({stat: current + 1}).eq(
            "id", craft_id
        ).execute()


def _parse_craft(row: dict[str, object]) -> CraftListing:
    created_at = row.get("created_at")
    return CraftListing(
        id=str(row["id"]),
        artisan_id=str(row["artisan_id"]),
        title=str(row.get("title") or "Handcrafted Item"),
        description=row.get("description"),
        materials=list(row.get("materials") or []),
        techniques=list(row.get("techniques") or []),
        story=row.get("story"),
        cultural_context=row.get("cultural_context"),
        price=row.get("price"),
        location=row.get("location"),
        tags=list(row.get("tags") or []),
        images=list(row.get("images") or []),
        summary=row.get("summary"),
        is_published=bool(row.get("is_published")),
        stats=CraftStats(
            **{column: int(row.get(column) or 0) for column in _STAT_COLUMNS}
        ),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
