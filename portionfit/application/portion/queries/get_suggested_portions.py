"""Get suggested portions query - quick-pick servings for a food."""

from dataclasses import dataclass
from typing import List, Optional

from portionfit.application.portion.resolver import PortionResolver
from portionfit.domain.nutrition.catalog.models import FoodRecord
from portionfit.domain.nutrition.core.value_objects import ServingSize
from portionfit.domain.nutrition.ports.food_catalog import IFoodCatalog
from portionfit.domain.nutrition.services.quantity_converter import QuantityConverter


@dataclass(frozen=True)
class GetSuggestedPortionsQuery:
    """
    Query: Suggested servings for the quantity selector.

    Attributes:
        food_id: Catalog identifier (ignored when `food` is given)
        food: Inline food record
        serving_size_text: Serving text overriding the record's own
    """

    food_id: Optional[str] = None
    food: Optional[FoodRecord] = None
    serving_size_text: Optional[str] = None


class GetSuggestedPortionsQueryHandler:
    """Handler for GetSuggestedPortionsQuery."""

    def __init__(
        self,
        catalog: IFoodCatalog,
        converter: Optional[QuantityConverter] = None,
    ):
        self._converter = converter or QuantityConverter()
        self._resolver = PortionResolver(catalog, self._converter)

    async def handle(self, query: GetSuggestedPortionsQuery) -> List[ServingSize]:
        """
        Execute query.

        Returns:
            Plausible servings, declared serving first

        Raises:
            FoodNotFoundError: If the food cannot be resolved
        """
        food = await self._resolver.resolve_food(query.food, query.food_id)
        serving = self._resolver.resolve_serving(food, query.serving_size_text)
        return self._converter.get_suggested_servings(serving)
