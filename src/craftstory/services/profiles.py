"""Artisan profile persistence."""

import logging
from dataclasses import dataclass
from typing import Protocol

from craftstory.domain.profiles import ArtisanProfile

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {
    "name": "name",
    "craftType": "craft_type",
    "experienceYears": "experience_years",
    "culturalBackground": "cultural_background",
    "location": "location",
}


class ProfileRepository(Protocol):
    """Persistence interface for artisan profiles."""

    def upsert_profile(self, profile: ArtisanProfile) -> None:
        """Create or merge a profile document."""

    def get_profile(self, user_id: str) -> ArtisanProfile | None:
        """Return the profile for a user, if present."""


@dataclass
class ProfileService:
    """Builds profiles from collected answers and writes them."""

    repository: ProfileRepository

    def save_profile(
        self,
        user_id: str,
        fields: dict[str, object],
        bio: str | None,
        language: str,
    ) -> ArtisanProfile:
        """Persist a completed profile and return it.

        Persistence failures are logged and swallowed; the in-memory profile is
        returned either way.
        """
        profile = profile_from_fields(user_id, fields, bio=bio, language=language)
        try:
            self.repository.upsert_profile(profile)
        except Exception:
            logger.exception(
                "Failed to save artisan profile", extra={"user_id": user_id}
            )
        return profile

    def get_profile(self, user_id: str) -> ArtisanProfile | None:
        """Return a stored profile."""
        return self.repository.get_profile(user_id)


def profile_from_fields(
    user_id: str,
    fields: dict[str, object],
    bio: str | None = None,
    language: str = "en",
) -> ArtisanProfile:
    """Map collected conversation fields onto a profile record."""
    known: dict[str, object] = {}
    extra: dict[str, object] = {}
    for key, value in fields.items():
        if key in _PROFILE_FIELDS:
            known[_PROFILE_FIELDS[key]] = value
        else:
            extra[key] = value
    experience = known.get("experience_years")
    return ArtisanProfile(
        user_id=user_id,
        name=_optional_str(known.get("name")),
        craft_type=_optional_str(known.get("craft_type")),
        experience_years=experience if isinstance(experience, int | str) else None,
        cultural_background=_optional_str(known.get("cultural_background")),
        location=_optional_str(known.get("location")),
        bio=bio,
        language=language,
        is_onboarded=True,
        extra=extra,
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)
