"""Portion and serving-size estimation for food calorie tracking."""

__version__ = "1.0.0"
