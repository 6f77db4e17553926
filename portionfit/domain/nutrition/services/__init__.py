"""Domain services for nutrition domain."""

from .quantity_converter import QuantityConverter

__all__ = ["QuantityConverter"]
