"""Ingredient name matching against inventory item names.

An ingredient matches an item on an exact name, on whole-word tokens, or on a
plural or variant spelling from the per-language tables.
"""

from collections.abc import Iterable

# Base form -> variant forms. Lookups work in both directions.
VARIATIONS: dict[str, dict[str, tuple[str, ...]]] = {
    "English": {
        "tomato": ("tomatoes",),
        "potato": ("potatoes",),
        "onion": ("onions",),
        "egg": ("eggs",),
        "carrot": ("carrots",),
        "apple": ("apples",),
        "banana": ("bananas",),
        "berry": ("berries",),
        "strawberry": ("strawberries",),
        "blueberry": ("blueberries",),
        "cherry": ("cherries",),
        "lemon": ("lemons",),
        "lime": ("limes",),
        "pepper": ("peppers",),
        "mushroom": ("mushrooms",),
        "bean": ("beans",),
        "pea": ("peas",),
        "leaf": ("leaves",),
        "loaf": ("loaves",),
        "tortilla": ("tortillas",),
        "noodle": ("noodles",),
        "chickpea": ("chickpeas", "garbanzo"),
        "scallion": ("scallions",),
        "zucchini": ("zucchinis", "courgette"),
        "cilantro": ("coriander",),
        "chili": ("chilies", "chilli", "chillies"),
        "avocado": ("avocados",),
        "clove": ("cloves",),
    },
    "Spanish": {
        "tomate": ("tomates",),
        "papa": ("papas", "patata", "patatas"),
        "cebolla": ("cebollas",),
        "huevo": ("huevos",),
        "zanahoria": ("zanahorias",),
        "manzana": ("manzanas",),
        "limon": ("limones", "limón"),
        "pimiento": ("pimientos",),
        "frijol": ("frijoles", "judia", "judias"),
        "ajo": ("ajos",),
    },
    "French": {
        "tomate": ("tomates",),
        "pomme": ("pommes",),
        "oignon": ("oignons",),
        "oeuf": ("oeufs", "œuf", "œufs"),
        "carotte": ("carottes",),
        "citron": ("citrons",),
        "champignon": ("champignons",),
        "haricot": ("haricots",),
        "poireau": ("poireaux",),
    },
    "German": {
        "tomate": ("tomaten",),
        "kartoffel": ("kartoffeln",),
        "zwiebel": ("zwiebeln",),
        "ei": ("eier",),
        "karotte": ("karotten", "möhre", "möhren"),
        "apfel": ("äpfel",),
        "zitrone": ("zitronen",),
        "pilz": ("pilze",),
        "bohne": ("bohnen",),
    },
    "Italian": {
        "pomodoro": ("pomodori",),
        "patata": ("patate",),
        "cipolla": ("cipolle",),
        "uovo": ("uova",),
        "carota": ("carote",),
        "mela": ("mele",),
        "limone": ("limoni",),
        "fungo": ("funghi",),
        "fagiolo": ("fagioli",),
    },
    "Portuguese": {
        "tomate": ("tomates",),
        "batata": ("batatas",),
        "cebola": ("cebolas",),
        "ovo": ("ovos",),
        "cenoura": ("cenouras",),
        "maçã": ("maçãs", "maca", "macas"),
        "limão": ("limões", "limao", "limoes"),
        "feijão": ("feijões", "feijao", "feijoes"),
    },
}


def normalize_name(name: str) -> str:
    """Return the comparison form of an item or ingredient name."""
    return name.strip().lower()


def is_match(
    item_name: str, ingredient_name: str, language: str | None = None
) -> bool:
    """Return true when an inventory item plausibly is the named ingredient."""
    item = normalize_name(item_name)
    ingredient = normalize_name(ingredient_name)
    if not item or not ingredient:
        return False
    if item == ingredient:
        return True

    item_words = item.split()
    ingredient_words = ingredient.split()

    if len(ingredient_words) > 1:
        return all(
            any(
                item_word == word or item_word.startswith(word)
                for item_word in item_words
            )
            for word in ingredient_words
        )

    word = ingredient_words[0]
    if word in item_words:
        return True
    for counterpart in variation_counterparts(word, language):
        if counterpart in item_words:
            return True
    return _contains_token(item, word)


def variation_counterparts(word: str, language: str | None = None) -> set[str]:
    """Return the variant spellings paired with a word in the variation tables."""
    counterparts: set[str] = set()
    for table in _tables_for(language):
        for base, variants in table.items():
            if word == base:
                counterparts.update(variants)
            elif word in variants:
                counterparts.add(base)
                counterparts.update(variant for variant in variants if variant != word)
    return counterparts


def _tables_for(language: str | None) -> Iterable[dict[str, tuple[str, ...]]]:
    if language is None:
        return VARIATIONS.values()
    table = VARIATIONS.get(language)
    return [table] if table else []


def _contains_token(text: str, word: str) -> bool:
    return (
        text.startswith(f"{word} ")
        or text.endswith(f" {word}")
        or f" {word} " in text
    )
