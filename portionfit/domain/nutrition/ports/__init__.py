"""Ports for nutrition domain."""

from .food_catalog import IFoodCatalog

__all__ = ["IFoodCatalog"]
