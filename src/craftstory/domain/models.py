"""Domain models for users."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserRecord:
    """Represents a user document stored in the database."""

    uid: str
    role: str | None = None
    language_code: str | None = None
    favorites: list[str] = field(default_factory=list)
    extra: dict[str, object] = field(default_factory=dict)
