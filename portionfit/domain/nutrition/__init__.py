"""Nutrition bounded context: portion units, serving sizes and conversions."""
