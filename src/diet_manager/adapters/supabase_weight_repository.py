"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import to_row
from diet_manager.domain.progress import WeightEntry
from diet_manager.services.progress import WeightRepository

_WEIGHT_COLUMNS = "id, user_id, value, date, notes"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight entries."""

    client: Client

    def create_weight(
        self, user_id: UUID, value: float, measured_at: datetime, notes: str | None
    ) -> WeightEntry:
        """Create a weight entry and return it."""
        response = (
            self.client.table("weight_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "value": value,
                    "date": measured_at.isoformat(),
                    "notes": notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight entry")
        return _parse_weight(response.data[0])

    def get_weight(self, entry_id: UUID) -> WeightEntry | None:
        """Return a weight entry by id."""
        response = (
            self.client.table("weight_entries")
            .select(_WEIGHT_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_weight(response.data[0])

    def update_weight(self, entry_id: UUID, payload: dict[str, object]) -> WeightEntry:
        """Update a weight entry and return it."""
        response = (
            self.client.table("weight_entries")
            .update(to_row(payload))
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update weight entry")
        return _parse_weight(response.data[0])

    def delete_weight(self, entry_id: UUID) -> None:
        """Delete a weight entry."""
        self.client.table("weight_entries").delete().eq("id", str(entry_id)).execute()

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return all entries for a user, oldest first."""
        response = (
            self.client.table("weight_entries")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=False)
            .execute()
        )
        return [_parse_weight(row) for row in response.data or []]

    def list_recent_weights(self, user_id: UUID, limit: int) -> list[WeightEntry]:
        """Return the latest entries, newest first."""
        response = (
            self.client.table("weight_entries")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_weight(row) for row in response.data or []]

    def list_weights_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WeightEntry]:
        """Return entries in a half-open time range, oldest first."""
        response = (
            self.client.table("weight_entries")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lt("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_weight(row) for row in response.data or []]


def _parse_weight(row: dict[str, object]) -> WeightEntry:
    notes = row.get("notes")
    return WeightEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        value=float(row["value"]),
        date=datetime.fromisoformat(row["date"]),
        notes=str(notes) if notes is not None else None,
    )
