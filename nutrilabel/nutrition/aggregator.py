"""Nutrition aggregator for summing ingredient contributions across a recipe."""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from nutrilabel.data_layer.exceptions import InvalidRecipeCompositionError
from nutrilabel.data_layer.models import (
    NUTRIENT_FIELDS,
    NutrientTotals,
    Recipe,
    RecipeComponent,
)
from nutrilabel.nutrition.precision import sized_context
from nutrilabel.nutrition.reference_tables import (
    PreparationFactors,
    get_preparation_factors,
)

_logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
PROPORTION_QUANTUM = Decimal("0.0001")

# Nutrients scaled by the preparation fat factor / protein factor.
# Everything else, trans fat included, is left uncorrected.
FAT_CORRECTED = frozenset({"total_fats", "saturated_fats"})
PROTEIN_CORRECTED = frozenset({"proteins"})


def calculate_proportion(quantity: Decimal) -> Decimal:
    """Express a quantity as a fraction of the 100-unit reference basis.

    Args:
        quantity: Amount used, in the ingredient's own unit

    Returns:
        quantity / 100, rounded half-up to 4 decimal places
    """
    with sized_context([quantity]):
        return (quantity / HUNDRED).quantize(PROPORTION_QUANTUM, rounding=ROUND_HALF_UP)


def _safe_multiply(value: Optional[Decimal], multiplier: Decimal) -> Decimal:
    # Absent nutrient contributes exactly zero
    if value is None:
        return Decimal("0")
    return value * multiplier


def _operands(component: RecipeComponent):
    yield component.quantity
    for name in NUTRIENT_FIELDS:
        yield getattr(component.ingredient, name)


class NutritionAggregator:
    """Aggregator for folding recipe components into nutrient totals."""

    @staticmethod
    def component_contribution(
        component: RecipeComponent, factors: PreparationFactors
    ) -> Dict[str, Decimal]:
        """Calculate the unrounded contribution of one component.

        Args:
            component: RecipeComponent to evaluate
            factors: Preparation factors of the owning recipe

        Returns:
            Mapping of nutrient field name to contribution
        """
        ingredient = component.ingredient
        contribution = {}
        with sized_context(_operands(component)):
            proportion = calculate_proportion(component.quantity)
            for name in NUTRIENT_FIELDS:
                amount = _safe_multiply(getattr(ingredient, name), proportion)
                if name in FAT_CORRECTED:
                    amount = amount * factors.fat
                elif name in PROTEIN_CORRECTED:
                    amount = amount * factors.protein
                contribution[name] = amount
        return contribution

    @staticmethod
    def aggregate_recipe(recipe: Recipe) -> NutrientTotals:
        """Sum nutrient contributions of every component in a recipe.

        Totals are not rounded here; rounding happens once, at normalization.

        Args:
            recipe: Recipe with resolved ingredient profiles

        Returns:
            NutrientTotals for the whole recipe

        Raises:
            InvalidRecipeCompositionError: If the recipe has no components
        """
        if not recipe.components:
            raise InvalidRecipeCompositionError(recipe.name)

        factors = get_preparation_factors(recipe.preparation_method)
        _logger.debug(
            "Preparation method: %s - factors: %s", recipe.preparation_method, factors
        )

        totals = {name: Decimal("0") for name in NUTRIENT_FIELDS}
        operands = [op for component in recipe.components for op in _operands(component)]
        with sized_context(operands):
            for component in recipe.components:
                _logger.debug(
                    "Processing ingredient: %s - quantity: %s%s",
                    component.ingredient.name,
                    component.quantity,
                    component.ingredient.portion_unit,
                )
                contribution = NutritionAggregator.component_contribution(component, factors)
                for name, amount in contribution.items():
                    totals[name] += amount

        return NutrientTotals(**totals)
