"""Food catalog adapters."""

from .in_memory_food_catalog import InMemoryFoodCatalog

__all__ = ["InMemoryFoodCatalog"]
