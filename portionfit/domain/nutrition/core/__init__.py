"""Core building blocks of the nutrition domain."""
