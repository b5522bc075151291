"""Domain models for inventory items and meal ingredients."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

RAW_MATERIAL = "raw_material"
COOKED_MEAL = "cooked_meal"
ITEM_LABELS = (RAW_MATERIAL, COOKED_MEAL)


@dataclass(frozen=True)
class FoodItem:
    """Inventory item owned by the inventory store."""

    id: UUID
    user_id: UUID
    name: str
    amount: float
    unit: str
    eat_by_date: date
    date_cooked_stored: date
    label: str
    freshness_days: int
    storage_location: str
    notes: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line of a meal or recipe."""

    name: str
    quantity: float
    unit: str
    notes: str | None = None


@dataclass(frozen=True)
class DepletedItem:
    """Amount taken from one inventory item, in the item's unit."""

    item_id: UUID
    item_name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class ConsumptionResult:
    """Outcome of one consumption run."""

    consumed_items: list[str] = field(default_factory=list)
    insufficient_items: list[str] = field(default_factory=list)
    depletions: list[DepletedItem] = field(default_factory=list)
