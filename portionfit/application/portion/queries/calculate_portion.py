"""Calculate portion query - calories and display label for a chosen quantity."""

from dataclasses import dataclass
from typing import Optional

import structlog

from portionfit.application.portion.resolver import PortionResolver
from portionfit.domain.nutrition.catalog.models import FoodRecord
from portionfit.domain.nutrition.core.exceptions import InvalidServingSizeError
from portionfit.domain.nutrition.core.value_objects import DisplayContext, ServingSize
from portionfit.domain.nutrition.ports.food_catalog import IFoodCatalog
from portionfit.domain.nutrition.services.quantity_converter import QuantityConverter
from portionfit.domain.shared.types import Grams, Kilocalories, Ratio

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CalculatePortionQuery:
    """
    Query: Calculate what the user eats for a selected quantity.

    Attributes:
        selected_grams: Quantity chosen in the quantity selector
        food_id: Catalog identifier (ignored when `food` is given)
        food: Inline food record (e.g. from a barcode scan)
        serving_size_text: Serving text overriding the record's own
        locale: "fr" or "en" for display labels
    """

    selected_grams: Grams
    food_id: Optional[str] = None
    food: Optional[FoodRecord] = None
    serving_size_text: Optional[str] = None
    locale: str = "fr"


@dataclass(frozen=True)
class PortionCalculation:
    """
    Result of a portion calculation.

    Attributes:
        food: Resolved food record
        serving: Declared serving the food's calories refer to
        selected_grams: Quantity chosen by the user
        calories: Calories for selected_grams
        ratio: selected_grams / serving grams
        display_context: Labels for the presentation layer
    """

    food: FoodRecord
    serving: ServingSize
    selected_grams: Grams
    calories: Kilocalories
    ratio: Ratio
    display_context: DisplayContext


class CalculatePortionQueryHandler:
    """Handler for CalculatePortionQuery."""

    def __init__(
        self,
        catalog: IFoodCatalog,
        converter: Optional[QuantityConverter] = None,
    ):
        """
        Initialize handler.

        Args:
            catalog: Food catalog port
            converter: Quantity converter (default: built-in weights and limits)
        """
        self._converter = converter or QuantityConverter()
        self._resolver = PortionResolver(catalog, self._converter)

    async def handle(self, query: CalculatePortionQuery) -> PortionCalculation:
        """
        Execute query.

        Args:
            query: CalculatePortionQuery

        Returns:
            PortionCalculation for the selected quantity

        Raises:
            FoodNotFoundError: If the food cannot be resolved
            InvalidServingSizeError: If selected_grams is outside (0, max_grams]

        Example:
            >>> handler = CalculatePortionQueryHandler(catalog)
            >>> result = await handler.handle(
            ...     CalculatePortionQuery(selected_grams=Grams(60), food_id="baguette")
            ... )
            >>> result.display_context.quantity_text
            'pour 2 tranches'
        """
        max_grams = self._converter.limits.max_grams
        if not 0 < query.selected_grams <= max_grams:
            raise InvalidServingSizeError(
                f"Selected grams must be in (0, {max_grams}], got {query.selected_grams}"
            )

        food = await self._resolver.resolve_food(query.food, query.food_id)
        serving = self._resolver.resolve_serving(food, query.serving_size_text)

        ratio = self._converter.calculate_portion_ratio(serving, query.selected_grams)
        calories = self._converter.calculate_calories(
            Kilocalories(food.calories), serving, query.selected_grams
        )
        display_context = self._converter.generate_display_context(
            serving, query.selected_grams, query.locale
        )

        logger.debug(
            "Portion calculated",
            food_id=food.food_id,
            serving=self._converter.format_for_logging(serving),
            selected_grams=query.selected_grams,
            calories=calories,
        )

        return PortionCalculation(
            food=food,
            serving=serving,
            selected_grams=query.selected_grams,
            calories=calories,
            ratio=ratio,
            display_context=display_context,
        )
