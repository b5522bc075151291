"""Supabase repository for inventory items."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from supabase import Client

from food_inventory.domain.inventory import RAW_MATERIAL, FoodItem
from food_inventory.services.consumption import InventoryRepository

_TABLE = "food_items"
# Rows without an eat-by date sort as if they keep for a week.
_MISSING_EAT_BY_DAYS = 7


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed inventory store.

    Every call goes to the database; nothing is cached between reads.
    """

    client: Client

    def list_items(self, user_id: UUID, label: str | None = None) -> list[FoodItem]:
        """Return the user's items ordered by eat-by date."""
        query = self.client.table(_TABLE).select("*").eq("user_id", str(user_id))
        if label is not None:
            query = query.eq("label", label)
        response = query.order("eat_by_date", desc=False).execute()
        return [_parse_item(row) for row in response.data or []]

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Insert an item and return the stored row."""
        row = {key: value for key, value in payload.items() if key != "tags"}
        if payload.get("tags"):
            row["tags"] = payload["tags"]
        response = (
            self.client.table(_TABLE)
            .insert({"user_id": str(user_id), **row})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return _parse_item(response.data[0])

    def update_item(self, item: FoodItem) -> None:
        """Persist the item's amount and editable fields."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "name": item.name,
                    "amount": item.amount,
                    "unit": item.unit,
                    "eat_by_date": item.eat_by_date.isoformat(),
                    "storage_location": item.storage_location,
                    "notes": item.notes,
                }
            )
            .eq("id", str(item.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update food item {item.id}")

    def delete_item(self, item_id: UUID) -> None:
        """Delete an item by id."""
        self.client.table(_TABLE).delete().eq("id", str(item_id)).execute()


def _parse_item(row: dict[str, object]) -> FoodItem:
    freshness = row.get("freshness_days")
    tags = row.get("tags")
    return FoodItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        amount=float(row.get("amount") or 0.0),
        unit=str(row.get("unit") or "item"),
        eat_by_date=_parse_date(
            row.get("eat_by_date"), timedelta(days=_MISSING_EAT_BY_DAYS)
        ),
        date_cooked_stored=_parse_date(row.get("date_cooked_stored")),
        label=str(row.get("label") or RAW_MATERIAL),
        freshness_days=int(freshness) if isinstance(freshness, int | float) else 4,
        storage_location=str(row.get("storage_location") or ""),
        notes=row.get("notes") if isinstance(row.get("notes"), str) else None,
        tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else (),
    )


def _parse_date(value: object, missing_offset: timedelta = timedelta()) -> date:
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return date.today() + missing_offset
