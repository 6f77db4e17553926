"""Configuration utilities for infrastructure layer.

Per-unit default weights and serving limits can be tuned through
environment variables:

    PORTION_WEIGHT_PIECE_G=25
    PORTION_WEIGHT_CAN_G=330
    PORTION_MIN_GRAMS=1
    PORTION_MAX_GRAMS=5000
    PORTION_MAX_PIECE_COUNT=50
"""

import os
from dataclasses import fields
from typing import Optional

from portionfit.domain.nutrition.core.value_objects import (
    DEFAULT_SERVING_LIMITS,
    PortionUnit,
    PortionWeights,
    ServingLimits,
)
from portionfit.domain.nutrition.services.quantity_converter import QuantityConverter


def _get_positive_float(name: str) -> Optional[float]:
    """
    Read a positive number from the environment.

    Returns:
        Parsed value, or None if the variable is unset or empty

    Raises:
        ValueError: If the value is not a positive number
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip().replace(",", "."))
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def get_portion_weights() -> PortionWeights:
    """
    Get per-unit default weights.

    Each field of PortionWeights maps to PORTION_WEIGHT_<FIELD>_G
    (e.g. PORTION_WEIGHT_SLICE_G); unset fields keep their default.
    """
    overrides = {}
    for f in fields(PortionWeights):
        value = _get_positive_float(f"PORTION_WEIGHT_{f.name.upper()}_G")
        if value is not None:
            overrides[f.name] = value
    return PortionWeights(**overrides)


def get_serving_limits() -> ServingLimits:
    """
    Get serving validation limits.

    Reads PORTION_MIN_GRAMS, PORTION_MAX_GRAMS and
    PORTION_MAX_<UNIT>_COUNT (e.g. PORTION_MAX_BOTTLE_COUNT).
    """
    min_grams = _get_positive_float("PORTION_MIN_GRAMS")
    max_grams = _get_positive_float("PORTION_MAX_GRAMS")

    max_units = dict(DEFAULT_SERVING_LIMITS.max_units)
    for unit in PortionUnit:
        if not unit.requires_contextual_conversion():
            continue
        value = _get_positive_float(f"PORTION_MAX_{unit.name}_COUNT")
        if value is not None:
            max_units[unit] = value

    return ServingLimits(
        min_grams=min_grams if min_grams is not None else DEFAULT_SERVING_LIMITS.min_grams,
        max_grams=max_grams if max_grams is not None else DEFAULT_SERVING_LIMITS.max_grams,
        max_units=max_units,
    )


def create_quantity_converter() -> QuantityConverter:
    """Build a QuantityConverter configured from the environment."""
    return QuantityConverter(weights=get_portion_weights(), limits=get_serving_limits())
