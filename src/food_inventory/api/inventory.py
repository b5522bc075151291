"""Inventory consumption and prediction endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from food_inventory.api.models import (
    ConsumptionRequest,
    ConsumptionResponse,
    FoodItemResponse,
    MoveMealRequest,
    MoveMealResponse,
    NotificationResponse,
    RecommendationsResponse,
)
from food_inventory.config import parse_language
from food_inventory.services.consumption import (
    ConsumptionInterruptedError,
    IngredientValidationError,
)
from food_inventory.services.meals import MealValidationError

if TYPE_CHECKING:
    from food_inventory.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}", tags=["inventory"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post(
    "/meals/move-to-inventory",
    dependencies=[Depends(require_api_token)],
    response_model=MoveMealResponse,
)
async def move_meal_to_inventory(
    user_id: UUID, payload: MoveMealRequest, request: Request
) -> MoveMealResponse | JSONResponse:
    """Consume a meal's ingredients and add the meal to inventory."""
    container: AppContainer = request.app.state.container
    language = parse_language(payload.language, container.settings.default_language)
    try:
        summary = container.meal_transfer_service.move_to_inventory(
            user_id, payload.to_domain(), language
        )
    except MealValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ConsumptionInterruptedError as exc:
        return _interrupted_response(exc)
    return MoveMealResponse(
        result=ConsumptionResponse.from_domain(summary.result),
        item=FoodItemResponse.from_domain(summary.item),
        notification=NotificationResponse.from_domain(summary.notification),
    )


@router.post(
    "/consumption",
    dependencies=[Depends(require_api_token)],
    response_model=ConsumptionResponse,
)
async def consume_ingredients(
    user_id: UUID, payload: ConsumptionRequest, request: Request
) -> ConsumptionResponse | JSONResponse:
    """Consume an ingredient list from inventory without storing a meal."""
    container: AppContainer = request.app.state.container
    language = parse_language(payload.language, container.settings.default_language)
    try:
        result = container.meal_transfer_service.consume_ingredients(
            user_id,
            [ingredient.to_domain() for ingredient in payload.ingredients],
            language,
        )
    except IngredientValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ConsumptionInterruptedError as exc:
        return _interrupted_response(exc)
    return ConsumptionResponse.from_domain(result)


@router.get(
    "/recommendations",
    dependencies=[Depends(require_api_token)],
    response_model=RecommendationsResponse,
)
async def get_recommendations(
    user_id: UUID, request: Request
) -> RecommendationsResponse:
    """Return cached predictions, recomputing once they expire."""
    container: AppContainer = request.app.state.container
    recommendations = container.prediction_service.get_recommendations(user_id)
    return RecommendationsResponse.from_domain(recommendations)


@router.post(
    "/recommendations/refresh",
    dependencies=[Depends(require_api_token)],
    response_model=RecommendationsResponse,
)
async def refresh_recommendations(
    user_id: UUID, request: Request
) -> RecommendationsResponse:
    """Recompute predictions regardless of the cache."""
    container: AppContainer = request.app.state.container
    recommendations = container.prediction_service.refresh(user_id)
    return RecommendationsResponse.from_domain(recommendations)


def _interrupted_response(exc: ConsumptionInterruptedError) -> JSONResponse:
    logger.error("Consumption interrupted at %s", exc.ingredient_name)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": str(exc),
            "partial": ConsumptionResponse.from_domain(exc.partial).model_dump(),
        },
    )
