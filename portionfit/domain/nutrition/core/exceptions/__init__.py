"""Domain exceptions for the Nutrition bounded context."""

from portionfit.domain.nutrition.core.exceptions.domain_errors import (
    FoodNotFoundError,
    InvalidPortionUnitError,
    InvalidServingSizeError,
    NutritionDomainError,
    UnknownServingUnitError,
)

__all__ = [
    "NutritionDomainError",
    "InvalidServingSizeError",
    "InvalidPortionUnitError",
    "UnknownServingUnitError",
    "FoodNotFoundError",
]
