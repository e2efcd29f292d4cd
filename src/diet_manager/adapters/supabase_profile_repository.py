"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import parse_optional_float, to_row
from diet_manager.domain.profiles import DEFAULT_CALORIE_TARGET, Profile, parse_goal
from diet_manager.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create or update the profile row for a user."""
        response = (
            self.client.table("profiles")
            .upsert(to_row({**payload, "user_id": user_id}), on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile")
        return _parse_profile(response.data[0])

    def update_weight(self, user_id: UUID, weight: float) -> None:
        """Set the weight on the user's profile row, if it exists."""
        self.client.table("profiles").update({"weight": weight}).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_profile(row: dict[str, object]) -> Profile:
    age = row.get("age")
    return Profile(
        user_id=UUID(row["user_id"]),
        age=int(age) if age is not None else None,
        height=parse_optional_float(row.get("height")),
        weight=parse_optional_float(row.get("weight")),
        goal=parse_goal(row.get("goal")),
        daily_calorie_target=int(
            row.get("daily_calorie_target") or DEFAULT_CALORIE_TARGET
        ),
    )
