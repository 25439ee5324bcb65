"""Normalization of recipe totals to a per-100g/100ml basis."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from nutrilabel.data_layer.models import NUTRIENT_FIELDS, NutrientTotals
from nutrilabel.nutrition.precision import sized_context

HUNDRED = Decimal("100")
FACTOR_QUANTUM = Decimal("0.0001")
VALUE_QUANTUM = Decimal("0.01")


def normalization_factor(total_portion: Decimal) -> Decimal:
    """Return 100 / total_portion, rounded half-up to 4 decimal places.

    total_portion must be strictly positive; recipes are validated before
    they reach the calculator.
    """
    with sized_context([total_portion]):
        return (HUNDRED / total_portion).quantize(FACTOR_QUANTUM, rounding=ROUND_HALF_UP)


def normalize_totals(totals: NutrientTotals, total_portion: Decimal) -> Dict[str, Decimal]:
    """Rescale recipe totals to per 100 units.

    Each field is rounded exactly once, half-up to 2 decimal places, after
    multiplying by the normalization factor.

    Args:
        totals: Unrounded recipe totals
        total_portion: Finished recipe weight/volume

    Returns:
        Mapping of nutrient field name to per-100-unit value
    """
    operands = [getattr(totals, name) for name in NUTRIENT_FIELDS] + [total_portion]
    with sized_context(operands):
        factor = normalization_factor(total_portion)
        return {
            name: (getattr(totals, name) * factor).quantize(
                VALUE_QUANTUM, rounding=ROUND_HALF_UP
            )
            for name in NUTRIENT_FIELDS
        }
