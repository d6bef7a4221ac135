"""User account operations gated by the identity provider."""

from dataclasses import dataclass
from typing import Protocol

from craftstory.domain.models import UserRecord

USER_ROLES = frozenset({"artisan", "explorer"})


class InvalidTokenError(RuntimeError):
    """Raised when a bearer token cannot be verified."""


class UserNotFoundError(LookupError):
    """Raised when no user document exists for a uid."""


class IdentityClient(Protocol):
    """Interface for the external identity provider."""

    async def verify_token(self, token: str) -> str:
        """Return the uid for a valid access token."""

    async def delete_identity(self, uid: str) -> None:
        """Delete the identity record for a uid."""


class UserRepository(Protocol):
    """Persistence interface for user documents."""

    def get_user(self, uid: str) -> UserRecord | None:
        """Return the user document, if present."""

    def update_user(self, uid: str, updates: dict[str, object]) -> None:
        """Apply field-level updates to a user document."""

    def delete_user(self, uid: str) -> None:
        """Delete a user document."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    identity_client: IdentityClient

    async def authenticate(self, token: str) -> str:
        """Verify a bearer token and return its uid."""
        if not token:
            raise InvalidTokenError("Missing token")
        return await self.identity_client.verify_token(token)

    def get_user(self, uid: str) -> UserRecord:
        """Return the user document or raise UserNotFoundError."""
        user = self.repository.get_user(uid)
        if user is None:
            raise UserNotFoundError(uid)
        return user

    def update_user(
        self,
        uid: str,
        role: str | None = None,
        language_code: str | None = None,
        favorites: list[str] | None = None,
    ) -> dict[str, object]:
        """Update whitelisted user fields and return what was applied."""
        updates: dict[str, object] = {}
        if role in USER_ROLES:
            updates["role"] = role
        if language_code:
            updates["language_code"] = language_code
        if favorites is not None:
            updates["favorites"] = [str(item) for item in favorites]
        if updates:
            self.repository.update_user(uid, updates)
        return updates

    async def delete_user(self, uid: str) -> None:
        """Delete the user document and the identity."""
        self.repository.delete_user(uid)
        await self.identity_client.delete_identity(uid)
