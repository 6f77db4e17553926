"""Shared domain types used across the nutrition domain.

Quantities are plain floats at runtime but distinct nominal types for the
type checker, so a kcal value cannot be passed where grams are expected.
"""

from typing import NewType

Grams = NewType("Grams", float)
Kilocalories = NewType("Kilocalories", float)
Ratio = NewType("Ratio", float)
