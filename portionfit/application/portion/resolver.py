"""Food and base-serving resolution shared by portion queries."""

from typing import Optional

import structlog

from portionfit.domain.nutrition.catalog.models import FoodRecord
from portionfit.domain.nutrition.core.exceptions import FoodNotFoundError
from portionfit.domain.nutrition.core.value_objects import ServingSize
from portionfit.domain.nutrition.ports.food_catalog import IFoodCatalog
from portionfit.domain.nutrition.services.quantity_converter import (
    FALLBACK_SERVING_GRAMS,
    QuantityConverter,
)

logger = structlog.get_logger(__name__)


class PortionResolver:
    """
    Resolve the food and its declared serving for a portion query.

    Serving precedence:
    1. Serving text given by the caller
    2. Food record `serving_size` text
    3. Food record `portion_size` structure
    4. 100g
    """

    def __init__(self, catalog: IFoodCatalog, converter: QuantityConverter):
        self._catalog = catalog
        self._converter = converter

    async def resolve_food(
        self, food: Optional[FoodRecord], food_id: Optional[str]
    ) -> FoodRecord:
        """
        Return inline food, or look it up by id.

        Raises:
            FoodNotFoundError: If no food provided or id unknown
        """
        if food is not None:
            return food

        if not food_id:
            raise FoodNotFoundError("No food provided")

        record = await self._catalog.find_by_id(food_id)
        if record is None:
            logger.info("Food not found in catalog", food_id=food_id)
            raise FoodNotFoundError(f"Food not found: {food_id}")
        return record

    def resolve_serving(self, food: FoodRecord, serving_size_text: Optional[str]) -> ServingSize:
        """Pick the base serving following the precedence above."""
        if serving_size_text and serving_size_text.strip():
            return self._converter.parse_serving_string(serving_size_text)

        if food.serving_size and food.serving_size.strip():
            return self._converter.parse_serving_string(food.serving_size)

        if food.portion_size is not None:
            return self._converter.extract_serving_size_from_food_data(food)

        logger.debug("Food declares no serving, using 100g", food_id=food.food_id)
        return ServingSize.grams(FALLBACK_SERVING_GRAMS)
