"""Supabase-backed artisan profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from craftstory.domain.profiles import ArtisanProfile
from craftstory.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for artisan profiles keyed by user id."""

    client: Client

    def upsert_profile(self, profile: ArtisanProfile) -> None:
        """Create or merge a profile row."""
        self.client.table("artisan_profiles").upsert(
            {
                "user_id": profile.user_id,
                "name": profile.name,
                "craft_type": profile.craft_type,
                "experience_years": (
                    str(profile.experience_years)
                    if profile.experience_years is not None
                    else None
                ),
                "cultural_background": profile.cultural_background,
                "location": profile.location,
                "bio": profile.bio,
                "language": profile.language,
                "is_onboarded": profile.is_onboarded,
                "extra_json": profile.extra,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def get_profile(self, user_id: str) -> ArtisanProfile | None:
        """Return a profile by user id, if present."""
        response = (
            self.client.table("artisan_profiles")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        experience = row.get("experience_years")
        if isinstance(experience, str) and experience.isdigit():
            experience = int(experience)
        return ArtisanProfile(
            user_id=row["user_id"],
            name=row.get("name"),
            craft_type=row.get("craft_type"),
            experience_years=experience,
            cultural_background=row.get("cultural_background"),
            location=row.get("location"),
            bio=row.get("bio"),
            language=row.get("language") or "en",
            is_onboarded=bool(row.get("is_onboarded")),
            extra=row.get("extra_json") or {},
        )
