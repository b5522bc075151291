"""FIFO-by-expiry consumption of meal ingredients from inventory."""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from food_inventory.domain.inventory import (
    RAW_MATERIAL,
    ConsumptionResult,
    DepletedItem,
    FoodItem,
    Ingredient,
)
from food_inventory.services.matching import is_match
from food_inventory.services.units import are_compatible, convert

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-6


class InventoryRepository(Protocol):
    """Persistence interface for inventory items.

    ``list_items`` must return the current state on every call.
    """

    def list_items(self, user_id: UUID, label: str | None = None) -> list[FoodItem]:
        """Return the user's items, optionally filtered by label."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create an item and return it."""

    def update_item(self, item: FoodItem) -> None:
        """Persist an item's current fields."""

    def delete_item(self, item_id: UUID) -> None:
        """Remove an item."""


class IngredientValidationError(ValueError):
    """Raised when an ingredient list cannot be consumed as given."""


class ConsumptionInterruptedError(RuntimeError):
    """Raised when an inventory write fails partway through a run.

    Writes made before the failure are kept; ``partial`` reports them.
    """

    def __init__(self, ingredient_name: str, partial: ConsumptionResult) -> None:
        super().__init__(f"Inventory write failed while consuming {ingredient_name}")
        self.ingredient_name = ingredient_name
        self.partial = partial


def validate_ingredients(ingredients: list[Ingredient]) -> None:
    """Reject ingredient lists that must not enter the consumption loop."""
    for index, ingredient in enumerate(ingredients):
        if not ingredient.name or not ingredient.name.strip():
            raise IngredientValidationError(f"Ingredient {index + 1} has no name")
        if not ingredient.unit or not ingredient.unit.strip():
            raise IngredientValidationError(f"{ingredient.name} has no unit")
        if not math.isfinite(ingredient.quantity) or ingredient.quantity <= 0:
            raise IngredientValidationError(
                f"{ingredient.name} needs a positive quantity, "
                f"got {ingredient.quantity}"
            )


@dataclass
class _RunState:
    consumed_items: list[str] = field(default_factory=list)
    insufficient_items: list[str] = field(default_factory=list)
    depletions: list[DepletedItem] = field(default_factory=list)

    def record(self, ingredient: Ingredient, quantity: float) -> None:
        self.consumed_items.append(
            f"{ingredient.name} ({quantity:g} {ingredient.unit})"
        )

    def result(self) -> ConsumptionResult:
        return ConsumptionResult(
            consumed_items=list(self.consumed_items),
            insufficient_items=list(self.insufficient_items),
            depletions=list(self.depletions),
        )


class _WriteFailedError(Exception):
    def __init__(self, consumed: float) -> None:
        super().__init__("inventory write failed")
        self.consumed = consumed


@dataclass
class ConsumptionService:
    """Deplete inventory for a meal, soonest expiry first.

    A run mutates the store as it goes and is not re-entrant: calling it twice
    for the same meal consumes twice.
    """

    repository: InventoryRepository
    epsilon: float = DEFAULT_EPSILON

    def consume(
        self,
        user_id: UUID,
        ingredients: list[Ingredient],
        language: str | None = None,
    ) -> ConsumptionResult:
        """Consume each ingredient in order and report what was covered."""
        validate_ingredients(ingredients)
        state = _RunState()
        for ingredient in ingredients:
            try:
                consumed, remaining = self._consume_ingredient(
                    user_id, ingredient, language, state
                )
            except _WriteFailedError as exc:
                if exc.consumed > 0:
                    state.record(ingredient, exc.consumed)
                state.insufficient_items.append(ingredient.name)
                logger.exception(
                    "Inventory write failed",
                    extra={"user_id": str(user_id), "ingredient": ingredient.name},
                )
                raise ConsumptionInterruptedError(
                    ingredient.name, state.result()
                ) from exc.__cause__
            if consumed > 0:
                state.record(ingredient, consumed)
            if consumed <= 0 or remaining > self.epsilon:
                state.insufficient_items.append(ingredient.name)

        logger.info(
            "Consumed %d of %d ingredients (%d insufficient)",
            len(state.consumed_items),
            len(ingredients),
            len(state.insufficient_items),
        )
        return state.result()

    def _consume_ingredient(
        self,
        user_id: UUID,
        ingredient: Ingredient,
        language: str | None,
        state: _RunState,
    ) -> tuple[float, float]:
        remaining = ingredient.quantity
        consumed = 0.0
        visited: set[UUID] = set()
        while remaining > self.epsilon:
            # Re-read before every candidate; earlier writes change the picture.
            candidate = self._next_candidate(user_id, ingredient, language, visited)
            if candidate is None:
                break
            visited.add(candidate.id)
            if not are_compatible(candidate.unit, ingredient.unit):
                logger.debug(
                    "Skipping %s: %s is not convertible to %s",
                    candidate.name,
                    candidate.unit,
                    ingredient.unit,
                )
                continue
            available = convert(candidate.amount, candidate.unit, ingredient.unit)
            if available is None or available <= 0:
                continue
            take = min(remaining, available)
            take_in_item_unit = convert(take, ingredient.unit, candidate.unit)
            if take_in_item_unit is None:
                continue
            new_amount = candidate.amount - take_in_item_unit
            try:
                if new_amount <= self.epsilon:
                    self.repository.delete_item(candidate.id)
                else:
                    self.repository.update_item(replace(candidate, amount=new_amount))
            except Exception as exc:
                raise _WriteFailedError(consumed) from exc
            state.depletions.append(
                DepletedItem(
                    item_id=candidate.id,
                    item_name=candidate.name,
                    quantity=take_in_item_unit,
                    unit=candidate.unit,
                )
            )
            remaining -= take
            consumed += take
        return consumed, remaining

    def _next_candidate(
        self,
        user_id: UUID,
        ingredient: Ingredient,
        language: str | None,
        visited: set[UUID],
    ) -> FoodItem | None:
        items = self.repository.list_items(user_id, label=RAW_MATERIAL)
        matches = [
            item
            for item in items
            if item.label == RAW_MATERIAL
            and item.id not in visited
            and is_match(item.name, ingredient.name, language)
        ]
        if not matches:
            return None
        return min(matches, key=lambda item: item.eat_by_date)
