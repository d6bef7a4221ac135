"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from craftstory.domain.models import UserRecord
from craftstory.services.users import UserRepository

_KNOWN_COLUMNS = {"uid", "role", "language_code", "favorites"}


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, uid: str) -> UserRecord | None:
        """Return the user document for a uid, if present."""
        response = (
            self.client.table("users").select("*").eq("uid", uid).limit(1).execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            uid=row["uid"],
            role=row.get("role"),
            language_code=row.get("language_code"),
            favorites=list(row.get("favorites") or []),
            extra={
                key: value
                for key, value in row.items()
                if key not in _KNOWN_COLUMNS
            },
        )

    def update_user(self, uid: str, updates: dict[str, object]) -> None:
        """Update whitelisted user columns."""
        self.client.table("users").update(
            {**updates, "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("uid", uid).execute()

    def delete_user(self, uid: str) -> None:
        """Delete a user row."""
        self.client.table("users").delete().eq("uid", uid).execute()
