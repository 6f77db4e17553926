"""Unit tests for InMemoryFoodCatalog."""

import pytest

from portionfit.domain.nutrition.catalog.models import FoodRecord
from portionfit.domain.nutrition.services import QuantityConverter
from portionfit.infrastructure.catalog import InMemoryFoodCatalog
from portionfit.infrastructure.catalog.in_memory_food_catalog import (
    SAMPLE_FOODS,
    create_sample_catalog,
)


class TestInMemoryFoodCatalog:
    """Test InMemoryFoodCatalog."""

    @pytest.mark.asyncio
    async def test_find_by_id(self) -> None:
        """Should return the stored record."""
        food = FoodRecord(food_id="apple", name="Pomme", calories=52)
        catalog = InMemoryFoodCatalog([food])

        assert await catalog.find_by_id("apple") is food
        assert await catalog.find_by_id("pear") is None

    def test_add_replaces(self) -> None:
        """Should replace a record with the same id."""
        catalog = InMemoryFoodCatalog()
        catalog.add(FoodRecord(food_id="apple", name="Pomme", calories=52))
        catalog.add(FoodRecord(food_id="apple", name="Pomme verte", calories=50))

        assert len(catalog) == 1

    def test_sample_catalog(self) -> None:
        """Should seed every sample food."""
        assert len(create_sample_catalog()) == len(SAMPLE_FOODS)

    def test_sample_servings_resolve(self) -> None:
        """Every sample food should declare a usable serving."""
        converter = QuantityConverter()
        for food in SAMPLE_FOODS:
            if food.serving_size:
                serving = converter.parse_serving_string(food.serving_size)
            else:
                serving = converter.extract_serving_size_from_food_data(food)
            assert converter.validate_serving_size(serving), food.food_id
