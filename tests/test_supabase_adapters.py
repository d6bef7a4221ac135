"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from craftstory.adapters.supabase_craft_repository import SupabaseCraftRepository
from craftstory.adapters.supabase_profile_repository import SupabaseProfileRepository
from craftstory.adapters.supabase_session_repository import SupabaseSessionRepository
from craftstory.adapters.supabase_user_repository import SupabaseUserRepository
from craftstory.domain.profiles import ArtisanProfile
from craftstory.domain.questions import FlowKind
from craftstory.domain.sessions import SessionSnapshot, SessionState
from tests.conftest import make_listing


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    upsert_conflict: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.upsert_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _snapshot() -> SessionSnapshot:
    return SessionSnapshot(
        session_id=uuid4(),
        user_id="user-1",
        flow=FlowKind.ONBOARDING,
        state=SessionState.ASKING,
        question_index=1,
        fields={"name": "Priya"},
        revision=2,
    )


def test_supabase_session_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("voice_sessions")
    snapshot = _snapshot()
    stored_json = snapshot.model_dump(mode="json")
    table.queue("insert", [{"id": str(snapshot.session_id)}])
    table.queue(
        "select",
        [{"id": str(snapshot.session_id), "snapshot_json": stored_json}],
    )

    repository = SupabaseSessionRepository(client)
    repository.create_session(snapshot)
    inserted = table.last_payload
    fetched = repository.get_session(snapshot.session_id)

    assert inserted["state"] == "ASKING"
    assert inserted["revision"] == 2
    assert inserted["flow"] == "onboarding"
    assert fetched == snapshot


def test_supabase_session_repository_missing_and_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("voice_sessions")
    snapshot = _snapshot()

    repository = SupabaseSessionRepository(client)
    missing = repository.get_session(snapshot.session_id)
    repository.save_session(snapshot)

    assert missing is None
    assert table.last_payload["snapshot_json"]["fields"] == {"name": "Priya"}
    assert ("id", str(snapshot.session_id)) in table.last_filters


def test_supabase_session_repository_raises_when_insert_fails() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError):
        SupabaseSessionRepository(client).create_session(_snapshot())


def test_supabase_profile_repository_upsert_and_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("artisan_profiles")
    table.queue(
        "select",
        [
            {
                "user_id": "user-1",
                "name": "Priya",
                "craft_type": "Pottery & Ceramics",
                "experience_years": "15",
                "language": "hi",
                "is_onboarded": True,
                "extra_json": {"favoriteColour": "blue"},
            }
        ],
    )

    repository = SupabaseProfileRepository(client)
    repository.upsert_profile(
        ArtisanProfile(user_id="user-1", name="Priya", experience_years=15)
    )
    upserted = table.last_payload
    profile = repository.get_profile("user-1")

    assert table.upsert_conflict == "user_id"
    assert upserted["experience_years"] == "15"
    assert profile.experience_years == 15
    assert profile.language == "hi"
    assert profile.extra == {"favoriteColour": "blue"}


def test_supabase_craft_repository_create_and_list() -> None:
    client = FakeSupabaseClient()
    table = client.table("crafts")
    craft_id = str(uuid4())
    row = {
        "id": craft_id,
        "artisan_id": "user-1",
        "title": "Blue Pottery Bowl",
        "materials": ["clay"],
        "is_published": True,
        "likes": 3,
        "created_at": "2026-01-05T10:00:00+00:00",
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseCraftRepository(client)
    created = repository.create_craft(make_listing())
    feed = repository.list_published(10)

    assert created.id == craft_id
    assert created.stats.likes == 3
    assert created.created_at.year == 2026
    assert table.last_payload is not None
    assert feed[0].title == "Blue Pottery Bowl"
    assert ("is_published", True) in table.last_filters


def test_supabase_craft_repository_increment_stat() -> None:
    client = FakeSupabaseClient()
    table = client.table("crafts")
    table.queue("select", [{"views": 4}])

    SupabaseCraftRepository(client).increment_stat("craft-1", "views")

    assert table.last_payload == {"views": 5}


def test_supabase_craft_repository_rejects_unknown_stat() -> None:
    with pytest.raises(ValueError):
        SupabaseCraftRepository(FakeSupabaseClient()).increment_stat("craft-1", "title")


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("users")
    table.queue(
        "select",
        [
            {
                "uid": "user-1",
                "role": "artisan",
                "language_code": "hi",
                "favorites": ["craft-1"],
                "display_name": "Priya",
            }
        ],
    )

    repository = SupabaseUserRepository(client)
    user = repository.get_user("user-1")
    repository.update_user("user-1", {"role": "explorer"})
    updated = table.last_payload
    repository.delete_user("user-1")

    assert user.role == "artisan"
    assert user.favorites == ["craft-1"]
    assert user.extra == {"display_name": "Priya"}
    assert updated["role"] == "explorer"
    assert "updated_at" in updated
    assert table.actions[-1] == "delete"
