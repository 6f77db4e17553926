"""Food catalog port (interface).

Defines contract for food lookup services (local dataset, barcode database).
Follows the Dependency Inversion Principle: domain defines the port,
infrastructure provides the implementation.
"""

from typing import Optional, Protocol

from portionfit.domain.nutrition.catalog.models import FoodRecord


class IFoodCatalog(Protocol):
    """
    Interface for food lookup services.

    Example implementation (infrastructure layer):
        >>> class InMemoryFoodCatalog:
        ...     async def find_by_id(self, food_id: str) -> Optional[FoodRecord]:
        ...         return self._foods.get(food_id)
    """

    async def find_by_id(self, food_id: str) -> Optional[FoodRecord]:
        """
        Look up food by identifier.

        Args:
            food_id: Catalog identifier (e.g., "baguette", "3017620422003")

        Returns:
            FoodRecord if found, None otherwise

        Raises:
            Exception: If the underlying catalog fails
        """
        ...
