"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = frozenset({ROLE_ADMIN, ROLE_USER})


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    role: str
    api_token: str
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        """Return True for administrator accounts."""
        return self.role == ROLE_ADMIN
