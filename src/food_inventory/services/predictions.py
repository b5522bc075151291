"""Consumption patterns, low-stock alerts and shopping recommendations."""

import logging
import math
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from food_inventory.domain.inventory import FoodItem
from food_inventory.domain.predictions import (
    REMOVE_ACTION,
    ConsumptionEvent,
    ConsumptionPattern,
    LowStockAlert,
    ShoppingRecommendation,
    StockRecommendations,
)
from food_inventory.services.cache import Cache, utcnow
from food_inventory.services.consumption import InventoryRepository
from food_inventory.services.matching import normalize_name

logger = logging.getLogger(__name__)

DEFAULT_GAP_DAYS = 7.0
MIN_GAP_DAYS = 1.0
SECONDS_PER_DAY = 86400.0

LOW_STOCK_MIN_EVENTS = 2
LOW_STOCK_MAX_DAYS = 3.0
RECOMMENDATION_WINDOW_DAYS = 7

SHOPPING_MIN_EVENTS = 3
SHOPPING_HIGH_PRIORITY_ABOVE = 5

DEFAULT_UNIT = "item"
DEFAULT_TTL_SECONDS = 10 * 60 * 60
DEFAULT_EVENT_LIMIT = 200


class EventLogRepository(Protocol):
    """Append-only log of inventory add/remove actions."""

    def list_recent(
        self, user_id: UUID, action_type: str, limit: int
    ) -> list[ConsumptionEvent]:
        """Return recent events of one action type, newest first."""

    def append(
        self,
        user_id: UUID,
        action_type: str,
        item_name: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Record an action."""


def build_patterns(
    events: list[ConsumptionEvent],
) -> dict[str, ConsumptionPattern]:
    """Group removal events by normalized item name."""
    grouped: dict[str, list[ConsumptionEvent]] = defaultdict(list)
    for event in events:
        key = normalize_name(event.item_name)
        if key:
            grouped[key].append(event)
    patterns: dict[str, ConsumptionPattern] = {}
    for key, group in grouped.items():
        ordered = sorted(group, key=lambda event: event.created_at)
        latest_unit = next(
            (event.unit for event in reversed(ordered) if event.unit), None
        )
        patterns[key] = ConsumptionPattern(
            count=len(ordered),
            sorted_dates=[event.created_at for event in ordered],
            unit=latest_unit,
        )
    return patterns


def consumption_rate(pattern: ConsumptionPattern) -> float:
    """Return the estimated number of removals per day."""
    if pattern.count <= 0:
        return 0.0
    if pattern.count > 1:
        span = pattern.sorted_dates[-1] - pattern.sorted_dates[0]
        span_days = span.total_seconds() / SECONDS_PER_DAY
        avg_gap = span_days / (pattern.count - 1)
        if avg_gap <= 0:
            # Every removal happened at the same instant.
            avg_gap = MIN_GAP_DAYS
    else:
        avg_gap = DEFAULT_GAP_DAYS
    return pattern.count / avg_gap


def days_until_out(total_amount: float, rate: float) -> float:
    """Return the days the current stock lasts at the given rate."""
    if rate <= 0:
        return math.inf
    return total_amount / rate


def low_stock_alert(
    name: str, pattern: ConsumptionPattern, total_amount: float, unit: str
) -> LowStockAlert | None:
    """Return an alert when stock is non-zero but runs out within days."""
    if pattern.count < LOW_STOCK_MIN_EVENTS or total_amount <= 0:
        return None
    rate = consumption_rate(pattern)
    remaining_days = days_until_out(total_amount, rate)
    if remaining_days >= LOW_STOCK_MAX_DAYS:
        return None
    return LowStockAlert(
        item_name=name,
        current_amount=total_amount,
        unit=unit,
        recommended_amount=math.ceil(rate * RECOMMENDATION_WINDOW_DAYS),
        days_until_out=remaining_days,
    )


def shopping_recommendation(
    name: str, pattern: ConsumptionPattern, current_stock: float, unit: str
) -> ShoppingRecommendation | None:
    """Return a recommendation for a regularly used item that is out of stock."""
    if pattern.count < SHOPPING_MIN_EVENTS or current_stock != 0:
        return None
    priority = "high" if pattern.count > SHOPPING_HIGH_PRIORITY_ABOVE else "medium"
    return ShoppingRecommendation(
        name=name,
        quantity=math.ceil(pattern.count / 2),
        unit=unit,
        reason=f"Used {pattern.count} times recently and currently out of stock",
        priority=priority,
    )


@dataclass
class PredictionService:
    """Compute and cache stock predictions per user."""

    event_log: EventLogRepository
    inventory: InventoryRepository
    cache: Cache
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    event_limit: int = DEFAULT_EVENT_LIMIT
    clock: Callable[[], datetime] = utcnow

    def get_recommendations(self, user_id: UUID) -> StockRecommendations:
        """Return cached predictions while fresh, otherwise recompute."""
        cached = self.cache.get(_cache_key(user_id))
        now = self.clock()
        if isinstance(cached, StockRecommendations) and now < cached.expires_at:
            logger.debug("Serving cached recommendations for %s", user_id)
            return cached
        return self.refresh(user_id)

    def refresh(self, user_id: UUID) -> StockRecommendations:
        """Recompute predictions from the event log and current inventory."""
        events = self.event_log.list_recent(user_id, REMOVE_ACTION, self.event_limit)
        items = self.inventory.list_items(user_id)
        recommendations = compute_recommendations(
            events, items, ttl_seconds=self.ttl_seconds, now=self.clock()
        )
        self.cache.set(_cache_key(user_id), recommendations, self.ttl_seconds)
        logger.info(
            "Generated %d low-stock alerts and %d shopping recommendations",
            len(recommendations.low_stock),
            len(recommendations.shopping),
        )
        return recommendations

    def invalidate(self, user_id: UUID) -> None:
        """Drop cached predictions after an inventory change."""
        self.cache.delete(_cache_key(user_id))


def compute_recommendations(
    events: list[ConsumptionEvent],
    items: list[FoodItem],
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
    now: datetime | None = None,
) -> StockRecommendations:
    """Apply the alert and shopping policies to one inventory snapshot."""
    generated_at = now or datetime.now(tz=UTC)
    stock = _stock_by_name(items)
    alerts: list[LowStockAlert] = []
    shopping: list[ShoppingRecommendation] = []
    for name, pattern in build_patterns(events).items():
        total, stock_unit = stock.get(name, (0.0, None))
        unit = stock_unit or pattern.unit or DEFAULT_UNIT
        alert = low_stock_alert(name, pattern, total, unit)
        if alert:
            alerts.append(alert)
        recommendation = shopping_recommendation(name, pattern, total, unit)
        if recommendation:
            shopping.append(recommendation)

    alerts.sort(key=lambda alert: (alert.days_until_out, alert.item_name))
    shopping.sort(key=lambda rec: (rec.priority != "high", rec.name))
    return StockRecommendations(
        low_stock=alerts,
        shopping=shopping,
        generated_at=generated_at,
        expires_at=generated_at + timedelta(seconds=ttl_seconds),
    )


def _stock_by_name(items: list[FoodItem]) -> dict[str, tuple[float, str | None]]:
    stock: dict[str, tuple[float, str | None]] = {}
    for item in items:
        key = normalize_name(item.name)
        total, unit = stock.get(key, (0.0, None))
        stock[key] = (total + max(item.amount, 0.0), unit or item.unit)
    return stock


def _cache_key(user_id: UUID) -> str:
    return f"recommendations:{user_id}"
