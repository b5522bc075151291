"""Supabase repository for the inventory action history."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from food_inventory.domain.predictions import ConsumptionEvent
from food_inventory.services.predictions import EventLogRepository

_TABLE = "action_history"


@dataclass
class SupabaseEventLogRepository(EventLogRepository):
    """Supabase-backed append-only event log."""

    client: Client

    def list_recent(
        self, user_id: UUID, action_type: str, limit: int
    ) -> list[ConsumptionEvent]:
        """Return the newest events of one action type."""
        response = (
            self.client.table(_TABLE)
            .select("item_name, created_at, item_details")
            .eq("user_id", str(user_id))
            .eq("action_type", action_type)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_event(row) for row in response.data or []]

    def append(
        self,
        user_id: UUID,
        action_type: str,
        item_name: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Insert an action row."""
        self.client.table(_TABLE).insert(
            {
                "user_id": str(user_id),
                "action_type": action_type,
                "item_name": item_name,
                "item_details": details,
            }
        ).execute()


def _parse_event(row: dict[str, object]) -> ConsumptionEvent:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.min.replace(tzinfo=UTC)
    )
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    details = row.get("item_details")
    unit = details.get("unit") if isinstance(details, dict) else None
    return ConsumptionEvent(
        item_name=str(row.get("item_name", "")),
        created_at=created_at,
        unit=str(unit) if unit else None,
    )
