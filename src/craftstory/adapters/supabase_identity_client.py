"""Supabase Auth REST client for token verification and identity deletion."""

from dataclasses import dataclass

import httpx

from craftstory.services.users import IdentityClient, InvalidTokenError


@dataclass
class HttpxSupabaseIdentityClient(IdentityClient):
    """Identity client using httpx against the Supabase Auth API."""

    base_url: str
    service_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, service_key: str) -> "HttpxSupabaseIdentityClient":
        """Create an identity client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            service_key=service_key,
            http_client=httpx.AsyncClient(),
        )

    async def verify_token(self, token: str) -> str:
        """Return the uid that owns an access token."""
        response = await self.http_client.get(
            f"{self.base_url}/auth/v1/user",
            headers={"apikey": self.service_key, "Authorization": f"Bearer {token}"},
            timeout=10,
        )
        if response.status_code in {401, 403}:
            raise InvalidTokenError("Access token was rejected")
        response.raise_for_status()
        uid = response.json().get("id")
        if not uid:
            raise InvalidTokenError("Access token has no subject")
        return str(uid)

    async def delete_identity(self, uid: str) -> None:
        """Delete an auth user with the service key."""
        response = await self.http_client.delete(
            f"{self.base_url}/auth/v1/admin/users/{uid}",
            headers={
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
            },
            timeout=10,
        )
        if response.status_code == 404:
            return
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
