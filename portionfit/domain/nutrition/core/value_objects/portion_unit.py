"""Portion unit value object.

Closed vocabulary of the units a serving size can be expressed in,
with their category, text synonyms (English and French) and
locale display names.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from portionfit.domain.nutrition.core.exceptions import InvalidPortionUnitError


class UnitCategory(str, Enum):
    """Measurement family of a portion unit."""

    WEIGHT = "weight"
    VOLUME = "volume"
    COUNT = "count"
    CONTAINER = "container"


class PortionUnit(str, Enum):
    """Unit of a serving size.

    Values are the short codes used in logs and stored data.

    Examples:
        >>> PortionUnit.from_string("3 tranches")
        <PortionUnit.SLICE: 'slice'>
        >>> PortionUnit.SLICE.requires_contextual_conversion()
        True
        >>> PortionUnit.GRAMS.get_display_name("en")
        'grams'
    """

    # Weight
    GRAMS = "g"
    KILOGRAMS = "kg"
    PER_100G = "100g"

    # Volume (1ml ~ 1g)
    MILLILITERS = "ml"
    LITERS = "l"
    CUP = "cup"
    TABLESPOON = "tbsp"
    TEASPOON = "tsp"

    # Count, weight depends on the food
    PIECE = "piece"
    SLICE = "slice"
    SERVING = "serving"

    # Container
    BOTTLE = "bottle"
    CAN = "can"

    @classmethod
    def from_string(cls, text: str) -> "PortionUnit":
        """Resolve free text to a portion unit.

        Accepts the bare unit ("ml", "PIECE") or a full serving string
        ("250ml", "2 pièces", "1 slice of bread"). Matching is
        case-insensitive and covers English and French, singular and plural.

        Args:
            text: Unit or serving text

        Returns:
            Matching PortionUnit

        Raises:
            InvalidPortionUnitError: If text is empty or no unit matches
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidPortionUnitError("Portion unit cannot be empty")

        normalized = text.lower().strip()

        if _PER_100G_PATTERN.search(normalized):
            return cls.PER_100G

        remainder = _AMOUNT_PREFIX.sub("", normalized, count=1).strip()

        unit = _UNIT_SYNONYMS.get(remainder)
        if unit is not None:
            return unit

        words = _WORD.findall(remainder)
        if words and words[0] in _UNIT_SYNONYMS:
            return _UNIT_SYNONYMS[words[0]]

        # "environ 30g", "1 verre (250 ml)"
        measured = find_measured_quantity(remainder)
        if measured is not None:
            return measured[1]

        # "biscuit (1 piece)", "pack de 2 canettes"
        for word in words:
            unit = _UNIT_SYNONYMS.get(word)
            if unit is not None and unit.requires_contextual_conversion():
                return unit

        raise InvalidPortionUnitError(f"Invalid portion unit: {text}")

    @property
    def category(self) -> UnitCategory:
        """Measurement family of this unit."""
        return _CATEGORIES[self]

    def is_weight_based(self) -> bool:
        """Check if unit is a direct weight measurement."""
        return self.category is UnitCategory.WEIGHT

    def is_volume_based(self) -> bool:
        """Check if unit is a volume measurement (approximated as weight)."""
        return self.category is UnitCategory.VOLUME

    def requires_contextual_conversion(self) -> bool:
        """Check if the gram value depends on the food (piece, slice, can...)."""
        return self.category in (UnitCategory.COUNT, UnitCategory.CONTAINER)

    def get_display_name(self, locale: str = "fr") -> str:
        """Canonical display name for UI labels.

        Metric units read in plural ("grammes"), the others in singular
        ("pièce"). Unknown locales fall back to English.
        """
        singular, plural = _names_for(locale)[self]
        return plural if self in _METRIC_UNITS else singular

    def label_for(self, amount: float, locale: str = "fr") -> str:
        """Singular or plural display name matching amount.

        French keeps the singular below 2 ("1,5 tranche"),
        English only for exactly one.
        """
        singular, plural = _names_for(locale)[self]
        if locale == "fr":
            return singular if abs(amount) < 2 else plural
        return singular if amount == 1 else plural


def find_measured_quantity(text: str) -> Optional[Tuple[float, "PortionUnit"]]:
    """Find the first "number + weight/volume unit" pair anywhere in text.

    Example:
        >>> find_measured_quantity("1 verre (250 ml)")
        (250.0, <PortionUnit.MILLILITERS: 'ml'>)
    """
    for match in _MEASURED.finditer(text.lower()):
        unit = _UNIT_SYNONYMS.get(match.group(2))
        if unit is not None and (unit.is_weight_based() or unit.is_volume_based()):
            return float(match.group(1).replace(",", ".")), unit
    return None


def _names_for(locale: Optional[str]) -> Mapping["PortionUnit", Tuple[str, str]]:
    return DISPLAY_NAMES.get(locale or "en", DISPLAY_NAMES["en"])


_CATEGORIES: Mapping[PortionUnit, UnitCategory] = MappingProxyType(
    {
        PortionUnit.GRAMS: UnitCategory.WEIGHT,
        PortionUnit.KILOGRAMS: UnitCategory.WEIGHT,
        PortionUnit.PER_100G: UnitCategory.WEIGHT,
        PortionUnit.MILLILITERS: UnitCategory.VOLUME,
        PortionUnit.LITERS: UnitCategory.VOLUME,
        PortionUnit.CUP: UnitCategory.VOLUME,
        PortionUnit.TABLESPOON: UnitCategory.VOLUME,
        PortionUnit.TEASPOON: UnitCategory.VOLUME,
        PortionUnit.PIECE: UnitCategory.COUNT,
        PortionUnit.SLICE: UnitCategory.COUNT,
        PortionUnit.SERVING: UnitCategory.COUNT,
        PortionUnit.BOTTLE: UnitCategory.CONTAINER,
        PortionUnit.CAN: UnitCategory.CONTAINER,
    }
)

_METRIC_UNITS = frozenset(
    {
        PortionUnit.GRAMS,
        PortionUnit.KILOGRAMS,
        PortionUnit.MILLILITERS,
        PortionUnit.LITERS,
    }
)

# (singular, plural) per locale
DISPLAY_NAMES: Mapping[str, Mapping[PortionUnit, Tuple[str, str]]] = MappingProxyType(
    {
        "fr": MappingProxyType(
            {
                PortionUnit.GRAMS: ("gramme", "grammes"),
                PortionUnit.KILOGRAMS: ("kilogramme", "kilogrammes"),
                PortionUnit.PER_100G: ("pour 100g", "pour 100g"),
                PortionUnit.MILLILITERS: ("millilitre", "millilitres"),
                PortionUnit.LITERS: ("litre", "litres"),
                PortionUnit.CUP: ("tasse", "tasses"),
                PortionUnit.TABLESPOON: ("cuillère à soupe", "cuillères à soupe"),
                PortionUnit.TEASPOON: ("cuillère à café", "cuillères à café"),
                PortionUnit.PIECE: ("pièce", "pièces"),
                PortionUnit.SLICE: ("tranche", "tranches"),
                PortionUnit.SERVING: ("portion", "portions"),
                PortionUnit.BOTTLE: ("bouteille", "bouteilles"),
                PortionUnit.CAN: ("canette", "canettes"),
            }
        ),
        "en": MappingProxyType(
            {
                PortionUnit.GRAMS: ("gram", "grams"),
                PortionUnit.KILOGRAMS: ("kilogram", "kilograms"),
                PortionUnit.PER_100G: ("per 100g", "per 100g"),
                PortionUnit.MILLILITERS: ("milliliter", "milliliters"),
                PortionUnit.LITERS: ("liter", "liters"),
                PortionUnit.CUP: ("cup", "cups"),
                PortionUnit.TABLESPOON: ("tablespoon", "tablespoons"),
                PortionUnit.TEASPOON: ("teaspoon", "teaspoons"),
                PortionUnit.PIECE: ("piece", "pieces"),
                PortionUnit.SLICE: ("slice", "slices"),
                PortionUnit.SERVING: ("serving", "servings"),
                PortionUnit.BOTTLE: ("bottle", "bottles"),
                PortionUnit.CAN: ("can", "cans"),
            }
        ),
    }
)

_UNIT_SYNONYMS: Mapping[str, PortionUnit] = MappingProxyType(
    {
        # Weight
        "g": PortionUnit.GRAMS,
        "gr": PortionUnit.GRAMS,
        "gram": PortionUnit.GRAMS,
        "grams": PortionUnit.GRAMS,
        "gramme": PortionUnit.GRAMS,
        "grammes": PortionUnit.GRAMS,
        "kg": PortionUnit.KILOGRAMS,
        "kilo": PortionUnit.KILOGRAMS,
        "kilos": PortionUnit.KILOGRAMS,
        "kilogram": PortionUnit.KILOGRAMS,
        "kilograms": PortionUnit.KILOGRAMS,
        "kilogramme": PortionUnit.KILOGRAMS,
        "kilogrammes": PortionUnit.KILOGRAMS,
        # Volume
        "ml": PortionUnit.MILLILITERS,
        "milliliter": PortionUnit.MILLILITERS,
        "milliliters": PortionUnit.MILLILITERS,
        "millilitre": PortionUnit.MILLILITERS,
        "millilitres": PortionUnit.MILLILITERS,
        "l": PortionUnit.LITERS,
        "liter": PortionUnit.LITERS,
        "liters": PortionUnit.LITERS,
        "litre": PortionUnit.LITERS,
        "litres": PortionUnit.LITERS,
        "cup": PortionUnit.CUP,
        "cups": PortionUnit.CUP,
        "tasse": PortionUnit.CUP,
        "tasses": PortionUnit.CUP,
        "tbsp": PortionUnit.TABLESPOON,
        "tablespoon": PortionUnit.TABLESPOON,
        "tablespoons": PortionUnit.TABLESPOON,
        "cuillère": PortionUnit.TABLESPOON,
        "cuillères": PortionUnit.TABLESPOON,
        "cuillère à soupe": PortionUnit.TABLESPOON,
        "cuillères à soupe": PortionUnit.TABLESPOON,
        "tsp": PortionUnit.TEASPOON,
        "teaspoon": PortionUnit.TEASPOON,
        "teaspoons": PortionUnit.TEASPOON,
        "cuillère à café": PortionUnit.TEASPOON,
        "cuillères à café": PortionUnit.TEASPOON,
        # Count
        "piece": PortionUnit.PIECE,
        "pieces": PortionUnit.PIECE,
        "pièce": PortionUnit.PIECE,
        "pièces": PortionUnit.PIECE,
        "pc": PortionUnit.PIECE,
        "pcs": PortionUnit.PIECE,
        "slice": PortionUnit.SLICE,
        "slices": PortionUnit.SLICE,
        "tranche": PortionUnit.SLICE,
        "tranches": PortionUnit.SLICE,
        "serving": PortionUnit.SERVING,
        "servings": PortionUnit.SERVING,
        "portion": PortionUnit.SERVING,
        "portions": PortionUnit.SERVING,
        # Container
        "bottle": PortionUnit.BOTTLE,
        "bottles": PortionUnit.BOTTLE,
        "bouteille": PortionUnit.BOTTLE,
        "bouteilles": PortionUnit.BOTTLE,
        "can": PortionUnit.CAN,
        "cans": PortionUnit.CAN,
        "canette": PortionUnit.CAN,
        "canettes": PortionUnit.CAN,
    }
)

_PER_100G_PATTERN = re.compile(r"\b(?:per|pour|par)\s*100\s*g|\b100\s*g\s*per\b")
_AMOUNT_PREFIX = re.compile(r"^-?\d+(?:[.,]\d+)?\s*")
_WORD = re.compile(r"[^\W\d_]+")
_MEASURED = re.compile(r"(\d+(?:[.,]\d+)?)\s*([^\W\d_]+)")
