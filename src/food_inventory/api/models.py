"""Pydantic models for the inventory API."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from food_inventory.domain.inventory import ConsumptionResult, FoodItem, Ingredient
from food_inventory.domain.meals import CookedMeal
from food_inventory.domain.notifications import Notification
from food_inventory.domain.predictions import StockRecommendations


class IngredientPayload(BaseModel):
    """Ingredient line in a request."""

    name: str
    quantity: float
    unit: str
    notes: str | None = None

    def to_domain(self) -> Ingredient:
        """Return the domain ingredient."""
        return Ingredient(
            name=self.name, quantity=self.quantity, unit=self.unit, notes=self.notes
        )


class ConsumptionRequest(BaseModel):
    """Ingredient list to consume from inventory."""

    ingredients: list[IngredientPayload]
    language: str | None = None


class MoveMealRequest(BaseModel):
    """Cooked meal to move into inventory."""

    name: str
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    date_cooked_stored: date = Field(default_factory=date.today)
    amount: float = 1.0
    unit: str = "serving"
    freshness_days: int = 4
    storage_location: str = "Fridge - Middle Shelf"
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    language: str | None = None

    def to_domain(self) -> CookedMeal:
        """Return the domain meal."""
        return CookedMeal(
            name=self.name,
            ingredients=[ingredient.to_domain() for ingredient in self.ingredients],
            date_cooked_stored=self.date_cooked_stored,
            amount=self.amount,
            unit=self.unit,
            freshness_days=self.freshness_days,
            storage_location=self.storage_location,
            notes=self.notes,
            tags=tuple(self.tags),
        )


class ConsumptionResponse(BaseModel):
    """Consumed and insufficient ingredients."""

    consumed_items: list[str]
    insufficient_items: list[str]

    @classmethod
    def from_domain(cls, result: ConsumptionResult) -> "ConsumptionResponse":
        """Build the response from a domain result."""
        return cls(
            consumed_items=result.consumed_items,
            insufficient_items=result.insufficient_items,
        )


class NotificationResponse(BaseModel):
    """User-facing outcome message."""

    kind: str
    title: str
    message: str

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponse":
        """Build the response from a domain notification."""
        return cls(
            kind=notification.kind,
            title=notification.title,
            message=notification.message,
        )


class FoodItemResponse(BaseModel):
    """Inventory item."""

    id: str
    name: str
    amount: float
    unit: str
    label: str
    eat_by_date: date
    date_cooked_stored: date
    freshness_days: int
    storage_location: str
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemResponse":
        """Build the response from a domain item."""
        return cls(
            id=str(item.id),
            name=item.name,
            amount=item.amount,
            unit=item.unit,
            label=item.label,
            eat_by_date=item.eat_by_date,
            date_cooked_stored=item.date_cooked_stored,
            freshness_days=item.freshness_days,
            storage_location=item.storage_location,
            notes=item.notes,
            tags=list(item.tags),
        )


class MoveMealResponse(BaseModel):
    """Outcome of moving a meal into inventory."""

    result: ConsumptionResponse
    item: FoodItemResponse
    notification: NotificationResponse


class LowStockAlertResponse(BaseModel):
    """Low-stock alert."""

    item_name: str
    current_amount: float
    unit: str
    recommended_amount: int
    days_until_out: float


class ShoppingRecommendationResponse(BaseModel):
    """Shopping recommendation."""

    name: str
    quantity: int
    unit: str
    reason: str
    priority: str


class RecommendationsResponse(BaseModel):
    """Stock predictions for a user."""

    low_stock: list[LowStockAlertResponse]
    shopping: list[ShoppingRecommendationResponse]
    generated_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(
        cls, recommendations: StockRecommendations
    ) -> "RecommendationsResponse":
        """Build the response from domain recommendations."""
        return cls(
            low_stock=[
                LowStockAlertResponse(
                    item_name=alert.item_name,
                    current_amount=alert.current_amount,
                    unit=alert.unit,
                    recommended_amount=alert.recommended_amount,
                    days_until_out=round(alert.days_until_out, 2),
                )
                for alert in recommendations.low_stock
            ],
            shopping=[
                ShoppingRecommendationResponse(
                    name=rec.name,
                    quantity=rec.quantity,
                    unit=rec.unit,
                    reason=rec.reason,
                    priority=rec.priority,
                )
                for rec in recommendations.shopping
            ],
            generated_at=recommendations.generated_at,
            expires_at=recommendations.expires_at,
        )
