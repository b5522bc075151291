"""Move a cooked meal into inventory, consuming its ingredients."""

import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from food_inventory.config import DEFAULT_LANGUAGE
from food_inventory.domain.inventory import COOKED_MEAL, ConsumptionResult, Ingredient
from food_inventory.domain.meals import CookedMeal, MealTransferSummary
from food_inventory.domain.predictions import ADD_ACTION, REMOVE_ACTION
from food_inventory.services.consumption import (
    ConsumptionInterruptedError,
    ConsumptionService,
    IngredientValidationError,
    validate_ingredients,
)
from food_inventory.services.notifications import (
    NotificationSink,
    build_interrupted_notification,
    build_notification,
)
from food_inventory.services.predictions import EventLogRepository, PredictionService
from food_inventory.services.units import FOOD_UNITS, normalize_unit

logger = logging.getLogger(__name__)


class MealValidationError(ValueError):
    """Raised when a meal cannot be moved into inventory as given."""


@dataclass
class MealTransferService:
    """Service behind the "move meal to inventory" action.

    Call exactly once per meal: consumption is applied immediately and a
    second call consumes the ingredients again.
    """

    consumption_service: ConsumptionService
    event_log: EventLogRepository
    prediction_service: PredictionService
    notification_sink: NotificationSink

    def consume_ingredients(
        self,
        user_id: UUID,
        ingredients: list[Ingredient],
        language: str = DEFAULT_LANGUAGE,
    ) -> ConsumptionResult:
        """Consume ingredients and log one removal per depleted item.

        Cached predictions are dropped once consumption has run, even when
        logging the removals fails.
        """
        try:
            result = self.consumption_service.consume(user_id, ingredients, language)
        except ConsumptionInterruptedError as exc:
            try:
                self._log_removals(user_id, exc.partial)
            finally:
                self.prediction_service.invalidate(user_id)
            raise
        try:
            self._log_removals(user_id, result)
        finally:
            self.prediction_service.invalidate(user_id)
        return result

    def move_to_inventory(
        self,
        user_id: UUID,
        meal: CookedMeal,
        language: str = DEFAULT_LANGUAGE,
    ) -> MealTransferSummary:
        """Consume the meal's ingredients and store the meal itself."""
        validate_meal(meal)
        try:
            result = self.consume_ingredients(user_id, meal.ingredients, language)
        except ConsumptionInterruptedError as exc:
            self.notification_sink.notify(
                build_interrupted_notification(exc.ingredient_name, language)
            )
            raise

        inventory = self.consumption_service.repository
        try:
            item = inventory.create_item(user_id, _meal_payload(meal))
            self.event_log.append(
                user_id,
                ADD_ACTION,
                item.name,
                {"amount": item.amount, "unit": item.unit, "label": item.label},
            )
        finally:
            self.prediction_service.invalidate(user_id)

        notification = build_notification(result, language)
        self.notification_sink.notify(notification)
        logger.info(
            "Moved meal %s to inventory",
            meal.name,
            extra={"user_id": str(user_id), "outcome": notification.kind},
        )
        return MealTransferSummary(result=result, item=item, notification=notification)

    def _log_removals(self, user_id: UUID, result: ConsumptionResult) -> None:
        for depletion in result.depletions:
            self.event_log.append(
                user_id,
                REMOVE_ACTION,
                depletion.item_name,
                {"quantity": depletion.quantity, "unit": depletion.unit},
            )


def validate_meal(meal: CookedMeal) -> None:
    """Reject meals that must not touch inventory."""
    if not meal.name or not meal.name.strip():
        raise MealValidationError("Meal name is required")
    if not math.isfinite(meal.amount) or meal.amount <= 0:
        raise MealValidationError("Meal amount must be a positive number")
    if normalize_unit(meal.unit) not in FOOD_UNITS:
        raise MealValidationError(f"Unknown unit: {meal.unit}")
    if meal.freshness_days <= 0:
        raise MealValidationError("Freshness days must be positive")
    try:
        validate_ingredients(meal.ingredients)
    except IngredientValidationError as exc:
        raise MealValidationError(str(exc)) from exc


def _meal_payload(meal: CookedMeal) -> dict[str, object]:
    eat_by = meal.date_cooked_stored + timedelta(days=meal.freshness_days)
    return {
        "name": meal.name.strip(),
        "amount": meal.amount,
        "unit": normalize_unit(meal.unit),
        "label": COOKED_MEAL,
        "date_cooked_stored": meal.date_cooked_stored.isoformat(),
        "eat_by_date": eat_by.isoformat(),
        "freshness_days": meal.freshness_days,
        "storage_location": meal.storage_location,
        "notes": meal.notes,
        "tags": list(meal.tags),
    }
