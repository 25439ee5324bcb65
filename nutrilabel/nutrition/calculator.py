"""Nutrition calculator producing ANVISA-style nutrition tables for recipes."""
import logging
from datetime import datetime
from typing import Callable, Optional

from nutrilabel.data_layer.exceptions import InvalidRecipeCompositionError
from nutrilabel.data_layer.models import NutritionTable, Recipe
from nutrilabel.nutrition.aggregator import NutritionAggregator
from nutrilabel.nutrition.daily_values import calculate_daily_values
from nutrilabel.nutrition.normalizer import normalization_factor, normalize_totals
from nutrilabel.nutrition.reference_tables import ANVISA_VERSION

_logger = logging.getLogger(__name__)


class NutritionCalculator:
    """Calculator for the nutrition table of a recipe.

    Stateless: the same instance can serve concurrent calls. The clock is
    injectable so tests can pin calculated_at.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """Initialize calculator.

        Args:
            clock: Callable returning the current time (defaults to datetime.now)
        """
        self.clock = clock or datetime.now

    def calculate_recipe_nutrition(self, recipe: Recipe) -> NutritionTable:
        """Calculate the full nutrition table of a recipe.

        Pipeline: aggregate unrounded totals, normalize to 100 units and
        round to 2 places, then derive %DV from the rounded values.

        Args:
            recipe: Recipe with resolved ingredient profiles

        Returns:
            NutritionTable per 100g/100ml

        Raises:
            InvalidRecipeCompositionError: If the recipe has no components
        """
        _logger.info(
            "Starting nutrition calculation for recipe: %s (id: %s)", recipe.name, recipe.id
        )
        if not recipe.components:
            raise InvalidRecipeCompositionError(recipe.name)

        totals = NutritionAggregator.aggregate_recipe(recipe)

        _logger.debug(
            "Normalization factor: %s (total portion: %s%s)",
            normalization_factor(recipe.total_portion),
            recipe.total_portion,
            recipe.portion_unit,
        )
        per_100 = normalize_totals(totals, recipe.total_portion)
        daily = calculate_daily_values(per_100)

        table = NutritionTable(
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            energy_dv=daily.energy,
            carbohydrates_dv=daily.carbohydrates,
            total_sugars_dv=daily.total_sugars,
            added_sugars_dv=daily.added_sugars,
            proteins_dv=daily.proteins,
            total_fats_dv=daily.total_fats,
            saturated_fats_dv=daily.saturated_fats,
            dietary_fiber_dv=daily.dietary_fiber,
            sodium_dv=daily.sodium,
            anvisa_version=ANVISA_VERSION,
            calculated_at=self.clock().isoformat(timespec="seconds"),
            **per_100,
        )

        _logger.info(
            "Calculation finished. Energy: %s kcal/100%s, proteins: %s g/100%s",
            table.energy_kcal,
            recipe.portion_unit,
            table.proteins,
            recipe.portion_unit,
        )
        return table
