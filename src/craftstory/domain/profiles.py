"""Domain models for artisan profiles and craft listings."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ArtisanProfile:
    """Artisan profile built from onboarding answers."""

    user_id: str
    name: str | None = None
    craft_type: str | None = None
    experience_years: int | str | None = None
    cultural_background: str | None = None
    location: str | None = None
    bio: str | None = None
    language: str = "en"
    is_onboarded: bool = False
    extra: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CraftStats:
    """Interaction counters for a craft."""

    views: int = 0
    likes: int = 0
    saves: int = 0
    shares: int = 0


@dataclass(frozen=True)
class CraftListing:
    """Craft listing document."""

    id: str | None
    artisan_id: str
    title: str
    description: str | None = None
    materials: list[str] = field(default_factory=list)
    techniques: list[str] = field(default_factory=list)
    story: str | None = None
    cultural_context: str | None = None
    price: str | None = None
    location: str | None = None
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    summary: str | None = None
    is_published: bool = False
    stats: CraftStats = field(default_factory=CraftStats)
    created_at: datetime | None = None
