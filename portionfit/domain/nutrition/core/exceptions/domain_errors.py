"""Domain exceptions for the Nutrition bounded context.

This module defines the exception hierarchy for portion and serving-size
errors. All domain exceptions inherit from NutritionDomainError.
"""


class NutritionDomainError(Exception):
    """Base exception for nutrition domain.

    Allows the application layer to catch and handle all nutrition
    domain errors uniformly.
    """

    pass


class InvalidServingSizeError(NutritionDomainError):
    """Raised when a serving size cannot be built.

    Examples:
    - Zero or negative amount
    - Empty or missing serving text
    - No numeric value in serving text
    """

    pass


class InvalidPortionUnitError(NutritionDomainError):
    """Raised when a unit token matches no known portion unit.

    Examples:
    - "xyz"
    - Empty unit string
    """

    pass


class UnknownServingUnitError(InvalidServingSizeError, InvalidPortionUnitError):
    """Raised when serving text has a valid amount but an unknown unit.

    Catchable both as InvalidServingSizeError and InvalidPortionUnitError.
    """

    pass


class FoodNotFoundError(NutritionDomainError):
    """Raised when a food is not found in the catalog.

    Typically raised by query handlers when neither an inline food record
    nor a known food identifier was provided.
    """

    pass
