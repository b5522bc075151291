"""Unit conversion between inventory measurement units."""

FOOD_UNITS = (
    "item",
    "piece",
    "serving",
    "cup",
    "oz",
    "lb",
    "g",
    "kg",
    "ml",
    "l",
    "tsp",
    "tbsp",
    "can",
    "bottle",
    "box",
    "bag",
    "pack",
)

WEIGHT_UNITS = frozenset({"g", "kg", "lb", "oz"})
VOLUME_UNITS = frozenset({"ml", "l", "cup", "tbsp", "tsp"})

# One entry per unit pair; the reverse direction divides by the same factor.
FACTORS: dict[str, dict[str, float]] = {
    "kg": {"g": 1000.0, "lb": 2.20462, "oz": 35.274},
    "lb": {"g": 453.592, "oz": 16.0},
    "oz": {"g": 28.3495},
    "l": {"ml": 1000.0, "cup": 4.22675, "tbsp": 67.628, "tsp": 202.884},
    "cup": {"ml": 236.588, "tbsp": 16.0, "tsp": 48.0},
    "tbsp": {"ml": 14.7868, "tsp": 3.0},
    "tsp": {"ml": 4.92892},
}


def normalize_unit(unit: str) -> str:
    """Return the lookup form of a unit label."""
    return unit.strip().lower()


def convert(quantity: float, from_unit: str, to_unit: str) -> float | None:
    """Convert a quantity between units, or return None when no path exists."""
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return quantity
    forward = FACTORS.get(source, {}).get(target)
    if forward is not None:
        return quantity * forward
    reverse = FACTORS.get(target, {}).get(source)
    if reverse is not None:
        return quantity / reverse
    return None


def are_compatible(unit_a: str, unit_b: str) -> bool:
    """Return true when quantities in the two units can be compared."""
    if normalize_unit(unit_a) == normalize_unit(unit_b):
        return True
    return convert(1.0, unit_a, unit_b) is not None


def dimension_of(unit: str) -> str:
    """Return the dimension class of a unit: weight, volume or other."""
    normalized = normalize_unit(unit)
    if normalized in WEIGHT_UNITS:
        return "weight"
    if normalized in VOLUME_UNITS:
        return "volume"
    return "other"
