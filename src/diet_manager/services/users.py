"""User account service."""

import secrets
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_manager.domain.errors import ConflictError, NotFoundError
from diet_manager.domain.models import ROLE_USER, ROLES, UserRecord

TOKEN_BYTES = 32


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_token(self, api_token: str) -> UserRecord | None:
        """Return the user owning an API token, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with an email, if present."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def create_user(self, email: str, role: str, api_token: str) -> UserRecord:
        """Create and return a new user record."""

    def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""


@dataclass
class UserService:
    """Application service for user accounts and token lookup."""

    repository: UserRepository

    def create_user(self, email: str, role: str = ROLE_USER) -> UserRecord:
        """Create a user with a freshly issued API token."""
        normalized = email.strip().lower()
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        if self.repository.get_by_email(normalized):
            raise ConflictError("User with this email already exists")
        return self.repository.create_user(
            normalized, role, secrets.token_urlsafe(TOKEN_BYTES)
        )

    def authenticate(self, api_token: str | None) -> UserRecord | None:
        """Return the user for a token, or None when it is unknown."""
        if not api_token:
            return None
        return self.repository.get_by_token(api_token)

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        return self.repository.list_users()
