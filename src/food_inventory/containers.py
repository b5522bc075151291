"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_inventory.adapters.logging_notification_sink import LoggingNotificationSink
from food_inventory.adapters.supabase_event_log_repository import (
    SupabaseEventLogRepository,
)
from food_inventory.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from food_inventory.config import Settings
from food_inventory.services.cache import InMemoryCache
from food_inventory.services.consumption import ConsumptionService
from food_inventory.services.meals import MealTransferService
from food_inventory.services.predictions import PredictionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    consumption_service: ConsumptionService
    prediction_service: PredictionService
    meal_transfer_service: MealTransferService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    inventory_repository = SupabaseInventoryRepository(supabase_client)
    event_log_repository = SupabaseEventLogRepository(supabase_client)
    consumption_service = ConsumptionService(
        repository=inventory_repository,
        epsilon=resolved_settings.consumption_epsilon,
    )
    prediction_service = PredictionService(
        event_log=event_log_repository,
        inventory=inventory_repository,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.recommendations_ttl_seconds,
        event_limit=resolved_settings.event_log_limit,
    )
    meal_transfer_service = MealTransferService(
        consumption_service=consumption_service,
        event_log=event_log_repository,
        prediction_service=prediction_service,
        notification_sink=LoggingNotificationSink(),
    )
    return AppContainer(
        settings=resolved_settings,
        consumption_service=consumption_service,
        prediction_service=prediction_service,
        meal_transfer_service=meal_transfer_service,
    )
