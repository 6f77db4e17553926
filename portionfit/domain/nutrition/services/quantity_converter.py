"""Domain service for serving-size conversions.

Stateless orchestration on top of ServingSize: lenient parsing of
upstream serving data, gram conversion, display contexts, portion
ratios, plausibility checks and quick-pick suggestions.
"""

from typing import Any, List, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from portionfit.domain.nutrition.catalog.models import FoodRecord, PortionSizeData
from portionfit.domain.nutrition.core.exceptions import (
    InvalidServingSizeError,
    NutritionDomainError,
)
from portionfit.domain.nutrition.core.value_objects import (
    DEFAULT_PORTION_WEIGHTS,
    DEFAULT_SERVING_LIMITS,
    DisplayContext,
    PortionUnit,
    PortionWeights,
    ServingLimits,
    ServingSize,
    format_amount,
)
from portionfit.domain.shared.types import Grams, Kilocalories, Ratio

logger = structlog.get_logger(__name__)

FALLBACK_SERVING_GRAMS = 100.0

# Base serving first so it leads the quick-pick list
SUGGESTION_FACTORS = (1.0, 0.5, 1.5, 2.0)
SUGGESTION_GRAMS = (50.0, 100.0, 200.0)

# Catalog containers declared by volume ("250 can" is one 250ml can)
VOLUME_DECLARED_UNITS = frozenset({PortionUnit.CUP, PortionUnit.BOTTLE, PortionUnit.CAN})
VOLUME_DECLARATION_MIN_ML = 50.0

FoodData = Union[FoodRecord, PortionSizeData, Mapping[str, Any]]


class QuantityConverter:
    """
    Domain service for serving-size conversions.

    Holds only immutable configuration, so one instance can be shared
    by any number of callers.

    Example:
        >>> converter = QuantityConverter()
        >>> serving = converter.parse_serving_string("1 tranche")
        >>> converter.generate_display_context(serving, 60).quantity_text
        'pour 2 tranches'
        >>> converter.parse_serving_string("une poignée").to_grams()
        100.0
    """

    def __init__(
        self,
        weights: Optional[PortionWeights] = None,
        limits: Optional[ServingLimits] = None,
    ):
        """
        Initialize converter.

        Args:
            weights: Per-unit default weights (default: built-in averages)
            limits: Validation policy (default: 1g-5000g, unit ceilings)
        """
        self._weights = weights or DEFAULT_PORTION_WEIGHTS
        self._limits = limits or DEFAULT_SERVING_LIMITS

    @property
    def weights(self) -> PortionWeights:
        return self._weights

    @property
    def limits(self) -> ServingLimits:
        return self._limits

    def parse_serving_string(self, text: Optional[str]) -> ServingSize:
        """
        Parse serving text, falling back to 100g when it is garbled.

        Missing text is a caller error; present but unparseable text
        ("une poignée", "0g") is messy upstream data and must not abort
        the portion calculation.

        Args:
            text: Serving text from the food data source

        Returns:
            Parsed ServingSize, or 100g if the text could not be parsed

        Raises:
            InvalidServingSizeError: If text is None, not a string or blank
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidServingSizeError("Serving string cannot be empty")

        try:
            return ServingSize.from_string(text, self._weights)
        except InvalidServingSizeError as e:
            logger.warning(
                "Unparseable serving string, defaulting to 100g",
                serving=text,
                error=str(e),
            )
            return ServingSize.grams(FALLBACK_SERVING_GRAMS)

    def convert_to_grams(self, amount: float, unit: PortionUnit) -> Grams:
        """
        Convert amount of unit to grams.

        Raises:
            InvalidServingSizeError: If amount is not positive
        """
        if not amount > 0:
            raise InvalidServingSizeError(f"Amount must be positive, got {amount}")
        return Grams(amount * self._weights.grams_for(PortionUnit(unit)))

    def generate_display_context(
        self,
        serving: ServingSize,
        selected_grams: float,
        locale: str = "fr",
    ) -> DisplayContext:
        """Describe selected_grams relative to serving (see ServingSize.get_display_context)."""
        return serving.get_display_context(selected_grams, locale)

    def extract_serving_size_from_food_data(self, food_data: FoodData) -> ServingSize:
        """
        Build a serving from a catalog portion declaration.

        Accepts a FoodRecord, a PortionSizeData or a raw mapping, either
        `{"amount": 2, "unit": "slice"}` or wrapped under `portion_size` /
        `portionSize`. Catalog conventions:
        - a "100g" / "per 100g" unit means `amount` grams
        - a cup or container with `amount` >= 50 is one unit of
          `amount` ml ({"amount": 330, "unit": "can"} is one 330ml can)

        Never raises: unusable data falls back to 100g.

        Example:
            >>> converter = QuantityConverter()
            >>> converter.extract_serving_size_from_food_data(
            ...     {"portionSize": {"amount": 2, "unit": "tranches"}}
            ... ).to_grams()
            60.0
        """
        try:
            portion = self._portion_data_from(food_data)
            return self._serving_from_portion(portion)
        except (ValidationError, NutritionDomainError) as e:
            logger.warning(
                "Unusable portion data, defaulting to 100g",
                food_data=repr(food_data),
                error=str(e),
            )
            return ServingSize.grams(FALLBACK_SERVING_GRAMS)

    def calculate_portion_ratio(self, base_serving: ServingSize, selected_grams: float) -> Ratio:
        """
        Ratio of selected_grams to the base serving (2.0 = double portion).

        Raises:
            InvalidServingSizeError: If selected_grams is negative
        """
        if selected_grams < 0:
            raise InvalidServingSizeError(
                f"Selected grams cannot be negative, got {selected_grams}"
            )
        return Ratio(selected_grams / base_serving.to_grams())

    def calculate_calories(
        self,
        calories_per_serving: Kilocalories,
        base_serving: ServingSize,
        selected_grams: float,
    ) -> Kilocalories:
        """
        Scale the calories of one serving linearly to selected_grams.

        Example:
            >>> converter = QuantityConverter()
            >>> converter.calculate_calories(
            ...     Kilocalories(75), ServingSize.slices(1, 30), 60
            ... )
            150.0
        """
        ratio = self.calculate_portion_ratio(base_serving, selected_grams)
        return Kilocalories(calories_per_serving * ratio)

    def validate_serving_size(self, serving: ServingSize) -> bool:
        """
        Check a serving is plausible.

        Rules:
        - gram equivalent within [min_grams, max_grams]
        - unit count within the ceiling for count/container units
          ("100 pieces" is rejected even when the pieces are light)

        Returns:
            True if serving passes every rule
        """
        grams = serving.to_grams()
        if not self._limits.min_grams <= grams <= self._limits.max_grams:
            logger.debug(
                "Serving outside gram range",
                serving=self.format_for_logging(serving),
                min_grams=self._limits.min_grams,
                max_grams=self._limits.max_grams,
            )
            return False

        ceiling = self._limits.max_units.get(serving.unit)
        if ceiling is not None and serving.amount > ceiling:
            logger.debug(
                "Serving unit count above ceiling",
                serving=self.format_for_logging(serving),
                ceiling=ceiling,
            )
            return False

        return True

    def get_suggested_servings(self, base_serving: ServingSize) -> List[ServingSize]:
        """
        Quick-pick servings for the quantity selector.

        Base serving scaled by 0.5x, 1x, 1.5x and 2x, plus 50g/100g/200g
        when the base is not weight-based. Implausible candidates are
        dropped, duplicates kept once.

        Example:
            >>> converter = QuantityConverter()
            >>> [s.to_grams() for s in converter.get_suggested_servings(ServingSize.grams(100))]
            [100.0, 50.0, 150.0, 200.0]
        """
        candidates = [base_serving.scale(factor) for factor in SUGGESTION_FACTORS]
        if not base_serving.unit.is_weight_based():
            candidates.extend(ServingSize.grams(grams) for grams in SUGGESTION_GRAMS)

        suggestions: List[ServingSize] = []
        for candidate in candidates:
            if candidate in suggestions or not self.validate_serving_size(candidate):
                continue
            suggestions.append(candidate)
        return suggestions

    def compare_servings(self, first: ServingSize, second: ServingSize) -> int:
        """
        Order servings by gram equivalent, whatever their units.

        Returns:
            -1, 0 or 1 (usable with functools.cmp_to_key)
        """
        first_grams = first.to_grams()
        second_grams = second.to_grams()
        return (first_grams > second_grams) - (first_grams < second_grams)

    def format_for_logging(self, serving: ServingSize) -> str:
        """Diagnostic form, e.g. "1 piece (20g)"."""
        return (
            f"{format_amount(serving.amount)} {serving.unit.value} "
            f"({format_amount(serving.to_grams())}g)"
        )

    # ---- Internals ----

    def _portion_data_from(self, food_data: FoodData) -> PortionSizeData:
        if isinstance(food_data, PortionSizeData):
            return food_data
        if isinstance(food_data, FoodRecord):
            if food_data.portion_size is None:
                raise InvalidServingSizeError(
                    f"Food '{food_data.food_id}' declares no portion size"
                )
            return food_data.portion_size
        if isinstance(food_data, Mapping):
            raw = food_data.get("portion_size", food_data.get("portionSize", food_data))
            return PortionSizeData.model_validate(raw)
        raise InvalidServingSizeError(f"Unsupported food data: {type(food_data).__name__}")

    def _serving_from_portion(self, portion: PortionSizeData) -> ServingSize:
        unit = PortionUnit.from_string(portion.unit)
        if unit is PortionUnit.PER_100G:
            unit = PortionUnit.GRAMS

        if unit in VOLUME_DECLARED_UNITS and portion.amount >= VOLUME_DECLARATION_MIN_ML:
            return ServingSize(1, unit, portion.amount)

        return ServingSize(portion.amount, unit, self._weights.grams_for(unit))
