"""ServingSize value object.

Immutable amount + unit pair as declared by a food data source
("100g", "1 tranche", "2 bottles"), with its gram equivalent and
locale-aware rendering.
"""

import math
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Optional

from portionfit.domain.nutrition.core.exceptions import (
    InvalidPortionUnitError,
    InvalidServingSizeError,
    UnknownServingUnitError,
)
from portionfit.domain.nutrition.core.value_objects.display_context import DisplayContext
from portionfit.domain.nutrition.core.value_objects.portion_defaults import (
    DEFAULT_PORTION_WEIGHTS,
    FIXED_GRAMS_PER_UNIT,
    PortionWeights,
)
from portionfit.domain.nutrition.core.value_objects.portion_unit import (
    PortionUnit,
    find_measured_quantity,
)
from portionfit.domain.shared.types import Grams

_NUMBER = re.compile(r"(-?\d+(?:[.,]\d+)?)")

_CONTEXT_PREFIX = MappingProxyType({"fr": "pour", "en": "for"})


def format_amount(value: float, locale: Optional[str] = None) -> str:
    """Render a number without trailing zeros ("100", "21.5").

    French uses a decimal comma ("21,5").
    """
    rounded = round(value, 2)
    if rounded == int(rounded):
        text = str(int(rounded))
    else:
        text = f"{rounded:.2f}".rstrip("0").rstrip(".")
    if locale == "fr":
        text = text.replace(".", ",")
    return text



def _verbatim(value: float) -> str:
    """Shortest exact rendering of a number ("150", "21.555")."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text

@dataclass(frozen=True)
class ServingSize:
    """Value object for a declared serving.

    Equality is by (amount, unit) only: "1 piece" of 20g and "20g" have
    the same gram equivalent but are different servings.

    Attributes:
        amount: Number of units (must be positive)
        unit: Portion unit
        grams_per_unit: Weight of one unit. Fixed for metric units,
            defaulted from PortionWeights for the others when omitted.

    Examples:
        >>> ServingSize.from_string("21,5g").to_grams()
        21.5
        >>> ServingSize.pieces(3, 25).to_grams()
        75.0
        >>> ServingSize.from_string("1 slice").get_display_context(60).quantity_text
        'pour 2 tranches'

    Raises:
        InvalidServingSizeError: If amount or grams_per_unit is not positive.
    """

    amount: float
    unit: PortionUnit = PortionUnit.GRAMS
    grams_per_unit: Optional[float] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate serving invariants and resolve the per-unit weight."""
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise InvalidServingSizeError(f"Amount must be a number, got {self.amount!r}")
        if not self.amount > 0 or math.isinf(self.amount):
            raise InvalidServingSizeError(f"Amount must be positive, got {self.amount}")

        try:
            unit = PortionUnit(self.unit)
        except ValueError as exc:
            raise InvalidPortionUnitError(f"Invalid portion unit: {self.unit}") from exc

        fixed = FIXED_GRAMS_PER_UNIT.get(unit)
        if fixed is not None:
            grams_per_unit = fixed
        elif self.grams_per_unit is None:
            grams_per_unit = DEFAULT_PORTION_WEIGHTS.grams_for(unit)
        elif not self.grams_per_unit > 0:
            raise InvalidServingSizeError(
                f"Weight per {unit.value} must be positive, got {self.grams_per_unit}"
            )
        else:
            grams_per_unit = float(self.grams_per_unit)

        object.__setattr__(self, "amount", float(self.amount))
        object.__setattr__(self, "unit", unit)
        object.__setattr__(self, "grams_per_unit", grams_per_unit)

    # ---- Factories ----

    @classmethod
    def from_string(
        cls, text: Optional[str], weights: Optional[PortionWeights] = None
    ) -> "ServingSize":
        """Parse a serving declared as free text.

        Accepts "." or "," as decimal separator ("21,5g"). A "per 100g"
        phrase yields one 100g reference serving.

        Args:
            text: Serving text, e.g. "100g", "2 tranches", "1 bottle"
            weights: Per-unit weights for count/container units

        Returns:
            Parsed ServingSize

        Raises:
            InvalidServingSizeError: If text is empty, has no number,
                or the amount is not positive
            UnknownServingUnitError: If the unit cannot be resolved
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidServingSizeError("Serving text must be a non-empty string")

        normalized = text.lower().strip()

        match = _NUMBER.search(normalized)
        if match is None:
            raise InvalidServingSizeError(f"No numeric value found in: {text}")

        amount = float(match.group(1).replace(",", "."))
        if amount <= 0:
            raise InvalidServingSizeError(f"Invalid amount {amount} in: {text}")

        try:
            unit = PortionUnit.from_string(normalized)
        except InvalidPortionUnitError as exc:
            raise UnknownServingUnitError(f"Unknown unit in: {text}") from exc

        if unit.is_weight_based() or unit.is_volume_based():
            # "1 verre (250 ml)" is 250ml, not 1ml
            measured = find_measured_quantity(normalized)
            if measured is not None and measured[1] is unit:
                amount = measured[0]
                if amount <= 0:
                    raise InvalidServingSizeError(f"Invalid amount {amount} in: {text}")

        if unit is PortionUnit.PER_100G:
            amount = 1.0

        weights = weights or DEFAULT_PORTION_WEIGHTS
        return cls(amount, unit, weights.grams_for(unit))

    @classmethod
    def grams(cls, amount: float) -> "ServingSize":
        """Create serving directly from grams."""
        if not amount > 0:
            raise InvalidServingSizeError(f"Grams must be positive, got {amount}")
        return cls(amount, PortionUnit.GRAMS)

    @classmethod
    def pieces(cls, count: float, grams_each: float) -> "ServingSize":
        """Create serving of pieces with an estimated weight per piece."""
        if not count > 0 or not grams_each > 0:
            raise InvalidServingSizeError(
                f"Count and grams per piece must be positive, got {count} x {grams_each}g"
            )
        return cls(count, PortionUnit.PIECE, grams_each)

    @classmethod
    def slices(cls, count: float, grams_each: float) -> "ServingSize":
        """Create serving of slices with an estimated weight per slice."""
        if not count > 0 or not grams_each > 0:
            raise InvalidServingSizeError(
                f"Count and grams per slice must be positive, got {count} x {grams_each}g"
            )
        return cls(count, PortionUnit.SLICE, grams_each)

    # ---- Conversions ----

    def to_grams(self) -> Grams:
        """Gram equivalent of the whole serving."""
        return Grams(self.amount * self.grams_per_unit)

    def to_display_string(self, locale: str = "fr") -> str:
        """Render "amount unit" with the right singular/plural name.

        Examples:
            >>> ServingSize.grams(100).to_display_string()
            '100 grammes'
            >>> ServingSize.slices(3, 30).to_display_string("en")
            '3 slices'
        """
        if self.unit is PortionUnit.PER_100G:
            label = self.unit.get_display_name(locale)
            if self.amount == 1:
                return label
            return f"{format_amount(self.amount, locale)} × {label}"

        amount_text = format_amount(self.amount, locale)
        return f"{amount_text} {self.unit.label_for(self.amount, locale)}"

    def get_display_context(self, selected_grams: float, locale: str = "fr") -> DisplayContext:
        """Describe selected_grams in terms of this serving's unit.

        Count and container servings are expressed in whole units
        (rounded half up, at least 1 for any positive quantity); weight
        and volume servings in grams, rendered as given ("pour 21.555g").

        Args:
            selected_grams: Quantity chosen by the user
            locale: "fr" or "en"

        Returns:
            DisplayContext for the selected quantity

        Raises:
            InvalidServingSizeError: If selected_grams is negative
        """
        if selected_grams < 0:
            raise InvalidServingSizeError(
                f"Selected grams cannot be negative, got {selected_grams}"
            )

        prefix = _CONTEXT_PREFIX.get(locale, _CONTEXT_PREFIX["en"])
        description = self.to_display_string(locale)

        if self.unit.requires_contextual_conversion():
            units = math.floor(selected_grams / self.grams_per_unit + 0.5)
            if units == 0 and selected_grams > 0:
                units = 1
            return DisplayContext(
                quantity_text=f"{prefix} {units} {self.unit.label_for(units, locale)}",
                serving_description=description,
                is_per_product=True,
            )

        return DisplayContext(
            quantity_text=f"{prefix} {_verbatim(selected_grams)}g",
            serving_description=description,
            is_per_product=False,
        )

    # ---- Immutable updates ----

    def with_amount(self, new_amount: float) -> "ServingSize":
        """Return a copy with another amount, keeping the per-unit weight."""
        if not new_amount > 0:
            raise InvalidServingSizeError(f"New amount must be positive, got {new_amount}")
        return replace(self, amount=new_amount)

    def scale(self, factor: float) -> "ServingSize":
        """Return a copy scaled by factor (e.g. 2.0 for double)."""
        if not factor > 0:
            raise InvalidServingSizeError(f"Scale factor must be positive, got {factor}")
        return self.with_amount(self.amount * factor)
