"""Portion application services."""
