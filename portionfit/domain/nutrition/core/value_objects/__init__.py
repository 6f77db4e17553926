"""Core value objects for nutrition domain.

Immutable value objects for portion units and serving sizes.
"""

from .display_context import DisplayContext
from .portion_defaults import (
    DEFAULT_PORTION_WEIGHTS,
    DEFAULT_SERVING_LIMITS,
    FIXED_GRAMS_PER_UNIT,
    PortionWeights,
    ServingLimits,
)
from .portion_unit import DISPLAY_NAMES, PortionUnit, UnitCategory
from .serving_size import ServingSize, format_amount

__all__ = [
    "DEFAULT_PORTION_WEIGHTS",
    "DEFAULT_SERVING_LIMITS",
    "DISPLAY_NAMES",
    "DisplayContext",
    "FIXED_GRAMS_PER_UNIT",
    "PortionUnit",
    "PortionWeights",
    "ServingLimits",
    "ServingSize",
    "UnitCategory",
    "format_amount",
]
