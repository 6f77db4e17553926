"""Food catalog models."""

from .models import FoodRecord, PortionSizeData

__all__ = ["FoodRecord", "PortionSizeData"]
