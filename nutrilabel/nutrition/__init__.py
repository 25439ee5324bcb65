"""Nutrition aggregation, normalization and %DV calculation."""

from .calculator import NutritionCalculator
from .aggregator import NutritionAggregator
from .reference_tables import PreparationMethod, get_preparation_factors

__all__ = [
    "NutritionCalculator",
    "NutritionAggregator",
    "PreparationMethod",
    "get_preparation_factors",
]
