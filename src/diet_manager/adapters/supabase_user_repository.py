"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import parse_datetime
from diet_manager.domain.models import UserRecord
from diet_manager.services.users import UserRepository

_USER_COLUMNS = "id, email, role, api_token, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_token(self, api_token: str) -> UserRecord | None:
        """Return the user owning an API token, if present."""
        return self._first("api_token", api_token)

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with an email, if present."""
        return self._first("email", email)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""
        return self._first("id", str(user_id))

    def create_user(self, email: str, role: str, api_token: str) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"email": email, "role": role, "api_token": api_token})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_user(row) for row in response.data or []]

    def _first(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(row["id"]),
        email=str(row.get("email", "")),
        role=str(row.get("role", "user")),
        api_token=str(row.get("api_token", "")),
        created_at=parse_datetime(row.get("created_at")),
    )
