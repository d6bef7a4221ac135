"""Supabase-backed session snapshot repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from craftstory.domain.sessions import SessionSnapshot
from craftstory.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for voice sessions.

    The whole session lives in ``snapshot_json``; ``state`` and ``revision`` are
    duplicated into columns for querying.
    """

    client: Client

    def create_session(self, snapshot: SessionSnapshot) -> None:
        """Insert a session row."""
        response = (
            self.client.table("voice_sessions")
            .insert(
                {
                    "id": str(snapshot.session_id),
                    "user_id": snapshot.user_id,
                    "flow": snapshot.flow.value,
                    **_columns(snapshot),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")

    def get_session(self, session_id: UUID) -> SessionSnapshot | None:
        """Return a session snapshot by id, if present."""
        response = (
            self.client.table("voice_sessions")
            .select("id, snapshot_json")
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return SessionSnapshot.model_validate(response.data[0]["snapshot_json"])

    def save_session(self, snapshot: SessionSnapshot) -> None:
        """Replace the stored snapshot."""
        self.client.table("voice_sessions").update(_columns(snapshot)).eq(
            "id", str(snapshot.session_id)
        ).execute()


def _columns(snapshot: SessionSnapshot) -> dict[str, object]:
    return {
        "state": snapshot.state.value,
        "revision": snapshot.revision,
        "snapshot_json": snapshot.model_dump(mode="json"),
        "updated_at": snapshot.updated_at.isoformat(),
    }
