"""Profile service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_manager.domain.profiles import Profile


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create or update the user's profile and return it."""

    def update_weight(self, user_id: UUID, weight: float) -> None:
        """Set the weight on an existing profile; no-op when absent."""


@dataclass
class ProfileService:
    """Reads and updates the one-per-user profile."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if one exists."""
        return self.repository.get_profile(user_id)

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create or update the user's profile."""
        return self.repository.upsert_profile(user_id, payload)

    def record_weight(self, user_id: UUID, weight: float) -> None:
        """Copy a newly logged weight onto the profile, when one exists."""
        self.repository.update_weight(user_id, weight)
