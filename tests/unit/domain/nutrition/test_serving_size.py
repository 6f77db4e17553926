"""
Unit tests for ServingSize value object.

Testing parsing, validation, conversion, rendering and immutability.
"""

import dataclasses

import pytest

from portionfit.domain.nutrition.core.exceptions import (
    InvalidPortionUnitError,
    InvalidServingSizeError,
    UnknownServingUnitError,
)
from portionfit.domain.nutrition.core.value_objects import (
    PortionUnit,
    PortionWeights,
    ServingSize,
    format_amount,
)


class TestServingSizeCreation:
    """Test construction and validation."""

    def test_defaults_to_grams(self) -> None:
        """Should default unit to grams."""
        serving = ServingSize(150)
        assert serving.unit is PortionUnit.GRAMS
        assert serving.grams_per_unit == 1.0
        assert serving.to_grams() == 150.0

    def test_coerces_unit_code(self) -> None:
        """Should accept a unit code and apply the default weight."""
        serving = ServingSize(1, "slice")
        assert serving.unit is PortionUnit.SLICE
        assert serving.grams_per_unit == 30.0

    def test_fixed_unit_ignores_explicit_weight(self) -> None:
        """Metric units keep their universal conversion."""
        assert ServingSize(2, PortionUnit.KILOGRAMS, 5).to_grams() == 2000.0

    @pytest.mark.parametrize("amount", [0, -1, -0.5, float("inf"), float("nan")])
    def test_reject_non_positive_amount(self, amount: float) -> None:
        """Should reject zero, negative and non-finite amounts."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize(amount)

    @pytest.mark.parametrize("amount", ["5", None, True])
    def test_reject_non_number(self, amount: object) -> None:
        """Should reject amounts that are not numbers."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize(amount)  # type: ignore[arg-type]

    def test_reject_unknown_unit(self) -> None:
        """Should reject unit codes outside the vocabulary."""
        with pytest.raises(InvalidPortionUnitError):
            ServingSize(1, "handful")  # type: ignore[arg-type]

    def test_reject_non_positive_weight(self) -> None:
        """Should reject a zero weight per unit."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize(1, PortionUnit.PIECE, 0)

    def test_immutable(self) -> None:
        """Should be immutable."""
        serving = ServingSize.grams(100)
        with pytest.raises(dataclasses.FrozenInstanceError):
            serving.amount = 200  # type: ignore[misc]


class TestServingSizeFromString:
    """Test parsing serving text."""

    def test_grams(self) -> None:
        """Should parse a gram serving."""
        serving = ServingSize.from_string("100g")
        assert serving.amount == 100.0
        assert serving.unit is PortionUnit.GRAMS

    def test_decimal_comma(self) -> None:
        """Should accept a French decimal comma."""
        assert ServingSize.from_string("21,5g").to_grams() == 21.5
        assert ServingSize.from_string("1.5 kg").to_grams() == 1500.0

    @pytest.mark.parametrize(
        "text, grams",
        [
            ("1kg", 1000.0),
            ("1 l", 1000.0),
            ("1 cup", 200.0),
            ("1 bottle", 330.0),
            ("1 can", 250.0),
            ("1 piece", 20.0),
            ("1 slice", 30.0),
            ("1 serving", 150.0),
        ],
    )
    def test_unit_constants(self, text: str, grams: float) -> None:
        """Should convert one unit with its fixed or default weight."""
        assert ServingSize.from_string(text).to_grams() == grams

    @pytest.mark.parametrize(
        "text, unit, grams",
        [
            ("environ 30g", PortionUnit.GRAMS, 30.0),
            ("env. 30 g", PortionUnit.GRAMS, 30.0),
            ("1 verre (250 ml)", PortionUnit.MILLILITERS, 250.0),
        ],
    )
    def test_measured_amount_inside_text(self, text: str, unit: PortionUnit, grams: float) -> None:
        """Should take the amount attached to the weight or volume unit."""
        serving = ServingSize.from_string(text)
        assert serving.unit is unit
        assert serving.to_grams() == grams

    def test_slices_use_default_weight(self) -> None:
        """Should weigh slices with the default slice weight."""
        serving = ServingSize.from_string("2 tranches")
        assert serving.unit is PortionUnit.SLICE
        assert serving.to_grams() == 60.0

    def test_custom_weights(self) -> None:
        """Should use the weights passed in."""
        serving = ServingSize.from_string("1 piece", PortionWeights(piece=45))
        assert serving.to_grams() == 45.0

    def test_per_100g_is_one_reference_serving(self) -> None:
        """Per-100g text means one 100g serving."""
        serving = ServingSize.from_string("per 100g")
        assert serving.unit is PortionUnit.PER_100G
        assert serving.amount == 1.0
        assert serving.to_grams() == 100.0

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_reject_empty(self, text: object) -> None:
        """Should reject missing text."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.from_string(text)  # type: ignore[arg-type]

    def test_reject_no_number(self) -> None:
        """Should reject text without an amount."""
        with pytest.raises(InvalidServingSizeError, match="No numeric value"):
            ServingSize.from_string("une poignée")

    @pytest.mark.parametrize("text", ["0g", "-5g"])
    def test_reject_non_positive(self, text: str) -> None:
        """Should reject zero or negative amounts."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.from_string(text)

    def test_unknown_unit(self) -> None:
        """Should raise an error catchable as either family."""
        with pytest.raises(UnknownServingUnitError) as exc_info:
            ServingSize.from_string("3 poignées")
        assert isinstance(exc_info.value, InvalidServingSizeError)
        assert isinstance(exc_info.value, InvalidPortionUnitError)


class TestServingSizeFactories:
    """Test named constructors."""

    def test_grams(self) -> None:
        """Should build a gram serving."""
        assert ServingSize.grams(250).to_grams() == 250.0

    def test_pieces(self) -> None:
        """Should build pieces with an explicit weight."""
        serving = ServingSize.pieces(3, 25)
        assert serving.unit is PortionUnit.PIECE
        assert serving.to_grams() == 75.0

    def test_slices(self) -> None:
        """Should build slices with an explicit weight."""
        assert ServingSize.slices(2, 35).to_grams() == 70.0

    @pytest.mark.parametrize("count, grams_each", [(0, 20), (1, 0), (-1, 20)])
    def test_pieces_reject_non_positive(self, count: float, grams_each: float) -> None:
        """Should reject non-positive count or weight."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.pieces(count, grams_each)

    def test_grams_reject_zero(self) -> None:
        """Should reject zero grams."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.grams(0)


class TestServingSizeEquality:
    """Test value equality."""

    def test_equal_amount_and_unit(self) -> None:
        """Servings with the same amount and unit are equal."""
        assert ServingSize.pieces(1, 20) == ServingSize.pieces(1, 25)
        assert hash(ServingSize.grams(100)) == hash(ServingSize(100.0))

    def test_same_grams_different_unit(self) -> None:
        """Same gram equivalent is not enough for equality."""
        assert ServingSize.pieces(1, 20) != ServingSize.grams(20)


class TestServingSizeDisplay:
    """Test rendering."""

    def test_display_string_french(self) -> None:
        """Should render amount and French unit name."""
        assert ServingSize.grams(100).to_display_string() == "100 grammes"
        assert ServingSize.slices(1, 30).to_display_string() == "1 tranche"
        assert ServingSize(1.5, PortionUnit.SLICE).to_display_string() == "1,5 tranche"
        assert ServingSize.pieces(3, 20).to_display_string("fr") == "3 pièces"

    def test_display_string_english(self) -> None:
        """Should render amount and English unit name."""
        assert ServingSize.slices(3, 30).to_display_string("en") == "3 slices"
        assert ServingSize(1.5, PortionUnit.SLICE).to_display_string("en") == "1.5 slices"
        assert ServingSize(1, PortionUnit.BOTTLE).to_display_string("en") == "1 bottle"

    def test_display_string_per_100g(self) -> None:
        """Reference serving renders its label."""
        assert ServingSize.from_string("per 100g").to_display_string() == "pour 100g"

    def test_format_amount(self) -> None:
        """Should drop trailing zeros and localize the separator."""
        assert format_amount(100.0) == "100"
        assert format_amount(21.5) == "21.5"
        assert format_amount(21.5, "fr") == "21,5"


class TestServingSizeDisplayContext:
    """Test display context for a selected quantity."""

    def test_slices_in_whole_units(self) -> None:
        """Should express grams as a count of slices."""
        context = ServingSize.slices(1, 30).get_display_context(60)
        assert context.quantity_text == "pour 2 tranches"
        assert context.serving_description == "1 tranche"
        assert context.is_per_product is True

    def test_english(self) -> None:
        """Should use the English prefix and names."""
        context = ServingSize.slices(1, 30).get_display_context(60, "en")
        assert context.quantity_text == "for 2 slices"

    def test_rounds_half_up(self) -> None:
        """Half units round up."""
        serving = ServingSize.pieces(1, 20)
        assert serving.get_display_context(30).quantity_text == "pour 2 pièces"
        assert serving.get_display_context(10).quantity_text == "pour 1 pièce"

    def test_grams_serving(self) -> None:
        """Weight servings are described in grams."""
        context = ServingSize.grams(100).get_display_context(150)
        assert context.quantity_text == "pour 150g"
        assert context.serving_description == "100 grammes"
        assert context.is_per_product is False

    def test_small_quantity_counts_one_unit(self) -> None:
        """A positive quantity below half a unit still reads as one unit."""
        serving = ServingSize.from_string("1 slice")
        assert serving.get_display_context(10).quantity_text == "pour 1 tranche"
        assert serving.get_display_context(0).quantity_text == "pour 0 tranche"

    def test_grams_rendered_as_given(self) -> None:
        """Selected grams are not rounded in the label."""
        serving = ServingSize.grams(100)
        assert serving.get_display_context(21.555).quantity_text == "pour 21.555g"
        assert serving.get_display_context(21.5).quantity_text == "pour 21.5g"

    def test_reject_negative(self) -> None:
        """Should reject negative selected grams."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.grams(100).get_display_context(-1)


class TestServingSizeUpdates:
    """Test immutable updates."""

    def test_with_amount_keeps_weight(self) -> None:
        """Should keep the per-unit weight."""
        serving = ServingSize.pieces(1, 25).with_amount(4)
        assert serving.amount == 4.0
        assert serving.to_grams() == 100.0

    def test_scale(self) -> None:
        """Should scale the amount."""
        original = ServingSize.grams(100)
        doubled = original.scale(2.0)
        assert doubled.to_grams() == 200.0
        assert original.to_grams() == 100.0

    @pytest.mark.parametrize("factor", [0, -2])
    def test_scale_reject_non_positive(self, factor: float) -> None:
        """Should reject a non-positive factor."""
        with pytest.raises(InvalidServingSizeError):
            ServingSize.grams(100).scale(factor)
