"""Domain models for consumption history and stock predictions."""

from dataclasses import dataclass
from datetime import datetime

REMOVE_ACTION = "remove"
ADD_ACTION = "add"


@dataclass(frozen=True)
class ConsumptionEvent:
    """A logged removal of an inventory item."""

    item_name: str
    created_at: datetime
    unit: str | None = None


@dataclass(frozen=True)
class ConsumptionPattern:
    """Aggregated removal history for one normalized item name."""

    count: int
    sorted_dates: list[datetime]
    unit: str | None = None


@dataclass(frozen=True)
class LowStockAlert:
    """Item expected to run out within a few days."""

    item_name: str
    current_amount: float
    unit: str
    recommended_amount: int
    days_until_out: float


@dataclass(frozen=True)
class ShoppingRecommendation:
    """Item that is regularly consumed and currently out of stock."""

    name: str
    quantity: int
    unit: str
    reason: str
    priority: str


@dataclass(frozen=True)
class StockRecommendations:
    """Predictor output valid until its expiry."""

    low_stock: list[LowStockAlert]
    shopping: list[ShoppingRecommendation]
    generated_at: datetime
    expires_at: datetime
