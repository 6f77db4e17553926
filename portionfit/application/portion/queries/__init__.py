"""Queries for portion calculation."""

from portionfit.application.portion.queries.calculate_portion import (
    CalculatePortionQuery,
    CalculatePortionQueryHandler,
    PortionCalculation,
)
from portionfit.application.portion.queries.get_suggested_portions import (
    GetSuggestedPortionsQuery,
    GetSuggestedPortionsQueryHandler,
)

__all__ = [
    "CalculatePortionQuery",
    "CalculatePortionQueryHandler",
    "PortionCalculation",
    "GetSuggestedPortionsQuery",
    "GetSuggestedPortionsQueryHandler",
]
