"""Domain models for moving a planned meal into inventory."""

from dataclasses import dataclass, field
from datetime import date

from food_inventory.domain.inventory import ConsumptionResult, FoodItem, Ingredient
from food_inventory.domain.notifications import Notification

DEFAULT_MEAL_UNIT = "serving"
DEFAULT_MEAL_FRESHNESS_DAYS = 4
DEFAULT_MEAL_STORAGE = "Fridge - Middle Shelf"


@dataclass(frozen=True)
class CookedMeal:
    """A prepared meal and the ingredients it used."""

    name: str
    ingredients: list[Ingredient]
    date_cooked_stored: date
    amount: float = 1.0
    unit: str = DEFAULT_MEAL_UNIT
    freshness_days: int = DEFAULT_MEAL_FRESHNESS_DAYS
    storage_location: str = DEFAULT_MEAL_STORAGE
    notes: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MealTransferSummary:
    """Outcome of moving a meal into inventory."""

    result: ConsumptionResult
    item: FoodItem
    notification: Notification
