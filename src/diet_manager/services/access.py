"""Ownership and role checks shared by services."""

from uuid import UUID

from diet_manager.domain.errors import AccessDeniedError
from diet_manager.domain.models import UserRecord


def require_admin(actor: UserRecord) -> None:
    """Raise AccessDeniedError unless the actor is an administrator."""
    if not actor.is_admin:
        raise AccessDeniedError(
            "Access denied. You do not have permission to access this resource."
        )


def require_owner_or_admin(actor: UserRecord, owner_id: UUID) -> None:
    """Raise AccessDeniedError unless the actor owns the record or is an admin."""
    if actor.is_admin or actor.id == owner_id:
        return
    raise AccessDeniedError()


def require_owner(actor: UserRecord, owner_id: UUID) -> None:
    """Raise AccessDeniedError unless the actor owns the record."""
    if actor.id != owner_id:
        raise AccessDeniedError()
