"""Tests for FIFO consumption."""

import pytest

from food_inventory.domain.inventory import COOKED_MEAL, Ingredient
from food_inventory.services.consumption import (
    ConsumptionInterruptedError,
    ConsumptionService,
    IngredientValidationError,
)
from tests.conftest import (
    FailingInventoryRepository,
    InMemoryInventoryRepository,
    make_item,
)


def test_consumes_soonest_expiry_first(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    later = make_item(user_id, "egg", 10, eat_by_offset=5)
    sooner = make_item(user_id, "egg", 10, eat_by_offset=2)
    inventory.add(later, sooner)

    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="egg", quantity=12, unit="item")]
    )

    assert sooner.id not in inventory.items
    assert inventory.items[later.id].amount == 8
    assert result.consumed_items == ["egg (12 item)"]
    assert result.insufficient_items == []


def test_depletes_first_item_before_touching_second(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    later = make_item(user_id, "flour", 1, unit="kg", eat_by_offset=30)
    sooner = make_item(user_id, "flour", 500, unit="g", eat_by_offset=10)
    inventory.add(later, sooner)

    ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="flour", quantity=300, unit="g")]
    )

    assert inventory.items[sooner.id].amount == pytest.approx(200)
    assert inventory.items[later.id].amount == 1
    assert inventory.deletes == []


def test_converts_between_item_and_ingredient_units(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    milk = make_item(user_id, "whole milk", 1, unit="l")
    inventory.add(milk)

    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="milk", quantity=250, unit="ml")]
    )

    assert inventory.items[milk.id].amount == pytest.approx(0.75)
    assert result.consumed_items == ["milk (250 ml)"]
    assert [(d.item_name, d.unit) for d in result.depletions] == [("whole milk", "l")]
    assert result.depletions[0].quantity == pytest.approx(0.25)


def test_token_matching_decides_which_item_is_used(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    butter = make_item(user_id, "salted butter", 1, unit="kg")
    inventory.add(butter)
    service = ConsumptionService(inventory)

    missing = service.consume(user_id, [Ingredient(name="salt", quantity=5, unit="g")])
    assert inventory.items[butter.id].amount == 1
    result = service.consume(
        user_id, [Ingredient(name="butter", quantity=250, unit="g")]
    )

    assert missing.consumed_items == []
    assert missing.insufficient_items == ["salt"]
    assert result.insufficient_items == []
    assert inventory.items[butter.id].amount == pytest.approx(0.75)


def test_unmatched_ingredient_reports_insufficient(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="butter", quantity=1, unit="kg")]
    )

    assert result.consumed_items == []
    assert result.insufficient_items == ["butter"]


def test_partial_consumption_still_counts_as_insufficient(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    rice = make_item(user_id, "rice", 200, unit="g")
    inventory.add(rice)

    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="rice", quantity=0.5, unit="kg")]
    )

    assert rice.id not in inventory.items
    assert result.consumed_items == ["rice (0.2 kg)"]
    assert result.insufficient_items == ["rice"]


def test_incompatible_units_are_skipped(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    cans = make_item(user_id, "tomatoes", 2, unit="can", eat_by_offset=1)
    loose = make_item(user_id, "tomatoes", 800, unit="g", eat_by_offset=4)
    inventory.add(cans, loose)

    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="tomato", quantity=400, unit="g")]
    )

    assert inventory.items[cans.id].amount == 2
    assert inventory.items[loose.id].amount == pytest.approx(400)
    assert result.insufficient_items == []


def test_cooked_meals_are_never_consumed(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    meal = make_item(user_id, "chicken soup", 3, unit="serving", label=COOKED_MEAL)
    inventory.add(meal)

    result = ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="chicken soup", quantity=1, unit="serving")]
    )

    assert inventory.items[meal.id].amount == 3
    assert result.insufficient_items == ["chicken soup"]


def test_item_consumed_by_one_ingredient_is_gone_for_the_next(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    onion = make_item(user_id, "onion", 1)
    inventory.add(onion)

    result = ConsumptionService(inventory).consume(
        user_id,
        [
            Ingredient(name="onion", quantity=1, unit="item"),
            Ingredient(name="onions", quantity=1, unit="item"),
        ],
    )

    assert result.consumed_items == ["onion (1 item)"]
    assert result.insufficient_items == ["onions"]


def test_rereads_inventory_before_each_candidate(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    inventory.add(
        make_item(user_id, "egg", 2, eat_by_offset=1),
        make_item(user_id, "egg", 2, eat_by_offset=2),
        make_item(user_id, "egg", 2, eat_by_offset=3),
    )

    ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="egg", quantity=5, unit="item")]
    )

    assert inventory.list_calls == 3


def test_amount_never_negative_and_near_zero_is_deleted(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    oil = make_item(user_id, "olive oil", 1, unit="cup")
    inventory.add(oil)

    ConsumptionService(inventory).consume(
        user_id, [Ingredient(name="olive oil", quantity=16, unit="tbsp")]
    )

    assert oil.id not in inventory.items
    assert all(item.amount > 0 for item in inventory.updates)


def test_empty_ingredient_list_returns_empty_result(
    inventory: InMemoryInventoryRepository, user_id
) -> None:
    result = ConsumptionService(inventory).consume(user_id, [])

    assert result.consumed_items == []
    assert result.insufficient_items == []


@pytest.mark.parametrize(
    "ingredient",
    [
        Ingredient(name="", quantity=1, unit="g"),
        Ingredient(name="  ", quantity=1, unit="g"),
        Ingredient(name="sugar", quantity=-1, unit="g"),
        Ingredient(name="sugar", quantity=0, unit="g"),
        Ingredient(name="sugar", quantity=float("nan"), unit="g"),
        Ingredient(name="sugar", quantity=1, unit=""),
    ],
)
def test_malformed_input_is_rejected_before_any_write(
    inventory: InMemoryInventoryRepository, user_id, ingredient: Ingredient
) -> None:
    sugar = make_item(user_id, "sugar", 100, unit="g")
    inventory.add(sugar)

    with pytest.raises(IngredientValidationError):
        ConsumptionService(inventory).consume(
            user_id,
            [Ingredient(name="sugar", quantity=50, unit="g"), ingredient],
        )

    assert inventory.items[sugar.id].amount == 100
    assert inventory.list_calls == 0


def test_write_failure_keeps_earlier_writes(user_id) -> None:
    repository = FailingInventoryRepository(writes_before_failure=1)
    garlic = make_item(user_id, "garlic", 3)
    ginger = make_item(user_id, "ginger", 100, unit="g")
    repository.add(garlic, ginger)

    with pytest.raises(ConsumptionInterruptedError) as exc_info:
        ConsumptionService(repository).consume(
            user_id,
            [
                Ingredient(name="garlic", quantity=1, unit="item"),
                Ingredient(name="ginger", quantity=20, unit="g"),
            ],
        )

    error = exc_info.value
    assert error.ingredient_name == "ginger"
    assert error.partial.consumed_items == ["garlic (1 item)"]
    assert error.partial.insufficient_items == ["ginger"]
    assert repository.items[garlic.id].amount == 2
    assert repository.items[ginger.id].amount == 100
    assert [d.item_id for d in error.partial.depletions] == [garlic.id]
    assert isinstance(error.__cause__, RuntimeError)
