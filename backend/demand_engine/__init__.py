"""Demand Signal & Business Case Engine."""

__version__ = "0.1.0"
