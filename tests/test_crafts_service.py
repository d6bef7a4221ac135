"""Tests for the craft listing service."""

from datetime import UTC, datetime, timedelta

import pytest

from craftstory.services.crafts import (
    CraftNotFoundError,
    CraftOwnershipError,
    CraftService,
    listing_from_fields,
)
from tests.conftest import InMemoryCraftRepository, make_listing


def test_listing_from_fields_maps_collected_answers() -> None:
    listing = listing_from_fields(
        "user-1",
        {
            "name": "Jaipur Blue Vase",
            "materials": ["clay", "cobalt"],
            "techniques": "hand painting",
            "origin": "Rajasthani blue pottery",
            "price": "1500",
        },
        summary="A vase.",
        tags=["bluepottery"],
    )

    assert listing.title == "Jaipur Blue Vase"
    assert listing.materials == ["clay", "cobalt"]
    assert listing.techniques == ["hand painting"]
    assert listing.cultural_context is None
    assert listing.price == "1500"
    assert listing.tags == ["bluepottery"]
    assert listing.is_published is False


def test_save_listing_assigns_id() -> None:
    service = CraftService(InMemoryCraftRepository())

    listing = service.save_listing("user-1", {"name": "Bowl"}, summary=None, tags=[])

    assert listing.id is not None
    assert service.get_craft(listing.id).title == "Bowl"


def test_save_listing_swallows_persistence_errors() -> None:
    service = CraftService(InMemoryCraftRepository(fail=True))

    listing = service.save_listing("user-1", {"name": "Bowl"}, summary=None, tags=[])

    assert listing.id is None
    assert listing.title == "Bowl"


def test_create_craft_ignores_unknown_fields() -> None:
    service = CraftService(InMemoryCraftRepository())

    listing = service.create_craft(
        "user-1", {"title": "Shawl", "materials": ["pashmina"], "artisan_id": "user-9"}
    )

    assert listing.artisan_id == "user-1"
    assert listing.materials == ["pashmina"]


def test_update_requires_ownership() -> None:
    repository = InMemoryCraftRepository()
    service = CraftService(repository)
    listing = repository.create_craft(
        make_listing(artisan_id="user-1", is_published=False)
    )

    with pytest.raises(CraftOwnershipError):
        service.update_craft(listing.id, "user-2", {"title": "Mine now"})

    published = service.set_published(listing.id, "user-1", True)

    assert published.is_published is True
    assert repository.crafts[listing.id].is_published is True


def test_delete_craft_checks_existence_and_owner() -> None:
    repository = InMemoryCraftRepository()
    service = CraftService(repository)
    listing = repository.create_craft(make_listing())

    with pytest.raises(CraftNotFoundError):
        service.delete_craft("missing", "user-1")
    with pytest.raises(CraftOwnershipError):
        service.delete_craft(listing.id, "user-2")

    service.delete_craft(listing.id, "user-1")

    assert repository.crafts == {}


def test_feed_returns_published_newest_first() -> None:
    repository = InMemoryCraftRepository()
    service = CraftService(repository)
    now = datetime.now(tz=UTC)
    for listing in (
        make_listing(title="Old", created_at=now - timedelta(days=2)),
        make_listing(title="Draft", is_published=False, created_at=now),
        make_listing(title="New", created_at=now - timedelta(hours=1)),
    ):
        repository.create_craft(listing)

    titles = [listing.title for listing in service.feed(limit=10)]

    assert titles == ["New", "Old"]
    assert len(service.list_by_artisan("user-1")) == 3


def test_record_interaction_counts_and_rejects_unknown_kind() -> None:
    repository = InMemoryCraftRepository()
    service = CraftService(repository)
    listing = repository.create_craft(make_listing())

    service.record_interaction(listing.id, "like")
    service.record_interaction(listing.id, "like")
    service.record_interaction(listing.id, "view")

    stats = repository.crafts[listing.id].stats
    assert (stats.likes, stats.views, stats.saves) == (2, 1, 0)
    with pytest.raises(ValueError):
        service.record_interaction(listing.id, "bookmark")
    with pytest.raises(CraftNotFoundError):
        service.record_interaction("missing", "view")
