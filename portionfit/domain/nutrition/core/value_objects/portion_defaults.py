"""Default per-unit weights and serving validation limits.

Count, container and kitchen-measure units have no universal gram value.
These are coarse averages, not tied to any food, and are overridable
through configuration (see portionfit.infrastructure.config).
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from portionfit.domain.nutrition.core.value_objects.portion_unit import PortionUnit

# Universal conversions, not configurable
FIXED_GRAMS_PER_UNIT: Mapping[PortionUnit, float] = MappingProxyType(
    {
        PortionUnit.GRAMS: 1.0,
        PortionUnit.KILOGRAMS: 1000.0,
        PortionUnit.PER_100G: 100.0,
        PortionUnit.MILLILITERS: 1.0,  # density ~1
        PortionUnit.LITERS: 1000.0,
    }
)


@dataclass(frozen=True)
class PortionWeights:
    """Gram weight of one unit for units without a universal conversion.

    Examples:
        >>> PortionWeights().grams_for(PortionUnit.SLICE)
        30.0
        >>> PortionWeights(piece=25.0).grams_for(PortionUnit.PIECE)
        25.0
    """

    cup: float = 200.0
    tablespoon: float = 15.0
    teaspoon: float = 5.0
    piece: float = 20.0
    slice: float = 30.0
    serving: float = 150.0
    bottle: float = 330.0
    can: float = 250.0

    def __post_init__(self) -> None:
        """Validate all weights are positive."""
        for unit, grams in self._by_unit().items():
            if not grams > 0:
                raise ValueError(f"Weight for '{unit.value}' must be positive, got {grams}")

    def grams_for(self, unit: PortionUnit) -> float:
        """Gram weight of one unit (fixed or default)."""
        fixed = FIXED_GRAMS_PER_UNIT.get(unit)
        if fixed is not None:
            return fixed
        return self._by_unit()[unit]

    def _by_unit(self) -> Mapping[PortionUnit, float]:
        return {
            PortionUnit.CUP: self.cup,
            PortionUnit.TABLESPOON: self.tablespoon,
            PortionUnit.TEASPOON: self.teaspoon,
            PortionUnit.PIECE: self.piece,
            PortionUnit.SLICE: self.slice,
            PortionUnit.SERVING: self.serving,
            PortionUnit.BOTTLE: self.bottle,
            PortionUnit.CAN: self.can,
        }


def _default_max_units() -> Mapping[PortionUnit, float]:
    return MappingProxyType(
        {
            PortionUnit.PIECE: 50,
            PortionUnit.SLICE: 20,
            PortionUnit.SERVING: 10,
            PortionUnit.BOTTLE: 10,
            PortionUnit.CAN: 10,
        }
    )


@dataclass(frozen=True)
class ServingLimits:
    """Plausibility bounds for a serving.

    Attributes:
        min_grams: Smallest accepted gram equivalent
        max_grams: Largest accepted gram equivalent
        max_units: Ceiling on the unit count for count/container units
    """

    min_grams: float = 1.0
    max_grams: float = 5000.0
    max_units: Mapping[PortionUnit, float] = field(
        default_factory=_default_max_units, hash=False
    )

    def __post_init__(self) -> None:
        """Validate bounds."""
        if not 0 < self.min_grams <= self.max_grams:
            raise ValueError(
                f"Invalid gram bounds: min={self.min_grams}, max={self.max_grams}"
            )
        object.__setattr__(self, "max_units", MappingProxyType(dict(self.max_units)))


DEFAULT_PORTION_WEIGHTS = PortionWeights()
DEFAULT_SERVING_LIMITS = ServingLimits()
