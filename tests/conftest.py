"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from food_inventory.config import Settings
from food_inventory.containers import AppContainer
from food_inventory.domain.inventory import RAW_MATERIAL, FoodItem
from food_inventory.domain.notifications import Notification
from food_inventory.domain.predictions import ConsumptionEvent
from food_inventory.services.cache import InMemoryCache
from food_inventory.services.consumption import ConsumptionService, InventoryRepository
from food_inventory.services.meals import MealTransferService
from food_inventory.services.notifications import NotificationSink
from food_inventory.services.predictions import EventLogRepository, PredictionService

TODAY = date(2026, 3, 2)


def make_item(  # noqa: PLR0913
    user_id: UUID,
    name: str,
    amount: float,
    unit: str = "item",
    eat_by_offset: int = 3,
    label: str = RAW_MATERIAL,
) -> FoodItem:
    return FoodItem(
        id=uuid4(),
        user_id=user_id,
        name=name,
        amount=amount,
        unit=unit,
        eat_by_date=TODAY + timedelta(days=eat_by_offset),
        date_cooked_stored=TODAY,
        label=label,
        freshness_days=7,
        storage_location="Fridge - Top Shelf",
    )


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory store for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)
    list_calls: int = 0
    updates: list[FoodItem] = field(default_factory=list)
    deletes: list[UUID] = field(default_factory=list)

    def add(self, *items: FoodItem) -> None:
        for item in items:
            self.items[item.id] = item

    def list_items(self, user_id: UUID, label: str | None = None) -> list[FoodItem]:
        self.list_calls += 1
        return [
            item
            for item in self.items.values()
            if item.user_id == user_id and (label is None or item.label == label)
        ]

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        item = FoodItem(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            amount=float(payload["amount"]),
            unit=str(payload["unit"]),
            eat_by_date=date.fromisoformat(str(payload["eat_by_date"])),
            date_cooked_stored=date.fromisoformat(
                str(payload["date_cooked_stored"])
            ),
            label=str(payload["label"]),
            freshness_days=int(payload["freshness_days"]),
            storage_location=str(payload["storage_location"]),
            notes=payload.get("notes"),
            tags=tuple(payload.get("tags") or ()),
        )
        self.items[item.id] = item
        return item

    def update_item(self, item: FoodItem) -> None:
        self.updates.append(item)
        self.items[item.id] = replace(item)

    def delete_item(self, item_id: UUID) -> None:
        self.deletes.append(item_id)
        self.items.pop(item_id, None)


@dataclass
class FailingInventoryRepository(InMemoryInventoryRepository):
    """Inventory store whose writes fail after a number of successes."""

    writes_before_failure: int = 0

    def _check(self) -> None:
        if self.writes_before_failure <= 0:
            raise RuntimeError("database unavailable")
        self.writes_before_failure -= 1

    def update_item(self, item: FoodItem) -> None:
        self._check()
        super().update_item(item)

    def delete_item(self, item_id: UUID) -> None:
        self._check()
        super().delete_item(item_id)


@dataclass
class InMemoryEventLog(EventLogRepository):
    """In-memory event log for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def add_removals(
        self, user_id: UUID, item_name: str, days_ago: list[float]
    ) -> None:
        now = datetime.now(tz=UTC)
        for offset in days_ago:
            self.events.append(
                {
                    "user_id": user_id,
                    "action_type": "remove",
                    "item_name": item_name,
                    "details": None,
                    "created_at": now - timedelta(days=offset),
                }
            )

    def list_recent(
        self, user_id: UUID, action_type: str, limit: int
    ) -> list[ConsumptionEvent]:
        matching = [
            event
            for event in self.events
            if event["user_id"] == user_id and event["action_type"] == action_type
        ]
        matching.sort(key=lambda event: event["created_at"], reverse=True)
        return [
            ConsumptionEvent(
                item_name=str(event["item_name"]),
                created_at=event["created_at"],
                unit=(event["details"] or {}).get("unit"),
            )
            for event in matching[:limit]
        ]

    def append(
        self,
        user_id: UUID,
        action_type: str,
        item_name: str,
        details: dict[str, object] | None = None,
    ) -> None:
        self.events.append(
            {
                "user_id": user_id,
                "action_type": action_type,
                "item_name": item_name,
                "details": details,
                "created_at": datetime.now(tz=UTC),
            }
        )


@dataclass
class FailingEventLog(InMemoryEventLog):
    """Event log whose appends of one action type fail."""

    failing_action: str = "remove"

    def append(
        self,
        user_id: UUID,
        action_type: str,
        item_name: str,
        details: dict[str, object] | None = None,
    ) -> None:
        if action_type == self.failing_action:
            raise RuntimeError("event log unavailable")
        super().append(user_id, action_type, item_name, details)


class FakeClock:
    """Settable clock shared by a cache and the service that reads it."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 3, 2, 8, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


@dataclass
class RecordingNotificationSink(NotificationSink):
    """Notification sink that keeps every notification."""

    notifications: list[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def inventory() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def event_log() -> InMemoryEventLog:
    return InMemoryEventLog()


@pytest.fixture
def notification_sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def prediction_service(
    inventory: InMemoryInventoryRepository, event_log: InMemoryEventLog
) -> PredictionService:
    return PredictionService(
        event_log=event_log,
        inventory=inventory,
        cache=InMemoryCache(),
    )


@pytest.fixture
def meal_transfer_service(
    inventory: InMemoryInventoryRepository,
    event_log: InMemoryEventLog,
    prediction_service: PredictionService,
    notification_sink: RecordingNotificationSink,
) -> MealTransferService:
    return MealTransferService(
        consumption_service=ConsumptionService(inventory),
        event_log=event_log,
        prediction_service=prediction_service,
        notification_sink=notification_sink,
    )


@pytest.fixture
def container(
    settings: Settings,
    prediction_service: PredictionService,
    meal_transfer_service: MealTransferService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        consumption_service=meal_transfer_service.consumption_service,
        prediction_service=prediction_service,
        meal_transfer_service=meal_transfer_service,
    )
