"""In-memory implementation of IFoodCatalog."""

from typing import Iterable, Optional

from portionfit.domain.nutrition.catalog.models import FoodRecord, PortionSizeData


class InMemoryFoodCatalog:
    """
    In-memory food catalog.

    Uses a dictionary keyed by food_id. Suitable for testing,
    development and the bundled sample dataset.
    """

    def __init__(self, foods: Optional[Iterable[FoodRecord]] = None) -> None:
        """Initialize catalog, optionally seeded with foods."""
        self._foods: dict[str, FoodRecord] = {}
        for food in foods or ():
            self.add(food)

    def add(self, food: FoodRecord) -> None:
        """Add or replace a food record."""
        self._foods[food.food_id] = food

    async def find_by_id(self, food_id: str) -> Optional[FoodRecord]:
        """
        Find food by identifier.

        Args:
            food_id: Catalog identifier

        Returns:
            FoodRecord if found, None otherwise
        """
        return self._foods.get(food_id)

    def __len__(self) -> int:
        return len(self._foods)


SAMPLE_FOODS = (
    FoodRecord(
        food_id="burger-classic",
        name="Burger Classique",
        calories=540,
        portion_size=PortionSizeData(amount=1, unit="piece"),
    ),
    FoodRecord(
        food_id="pizza-margherita",
        name="Pizza Margherita",
        calories=320,
        portion_size=PortionSizeData(amount=1, unit="slice"),
    ),
    FoodRecord(
        food_id="french-fries",
        name="Frites",
        calories=365,
        portion_size=PortionSizeData(amount=100, unit="100g"),
    ),
    FoodRecord(
        food_id="cola-can",
        name="Cola",
        calories=139,
        portion_size=PortionSizeData(amount=330, unit="can"),
    ),
    FoodRecord(
        food_id="baguette",
        name="Baguette",
        calories=75,
        serving_size="1 tranche",
    ),
    FoodRecord(
        food_id="pate-a-tartiner",
        name="Pâte à tartiner",
        calories=116,
        serving_size="21,5g",
    ),
)


def create_sample_catalog() -> InMemoryFoodCatalog:
    """Catalog seeded with a few reference foods."""
    return InMemoryFoodCatalog(SAMPLE_FOODS)
