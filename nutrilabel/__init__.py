"""Nutrition facts tables (ANVISA RDC 429/2020) for weighted-ingredient recipes."""

__version__ = "0.1.0"
