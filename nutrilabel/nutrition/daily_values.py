"""Percent daily value (%DV) calculation."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from nutrilabel.data_layer.models import DailyValuePercentages
from nutrilabel.nutrition.precision import sized_context
from nutrilabel.nutrition.reference_tables import DAILY_VALUES

HUNDRED = Decimal("100")
RATIO_QUANTUM = Decimal("0.0001")
PERCENT_QUANTUM = Decimal("0.1")

# %DV field -> per-100-unit field it is computed from
DV_SOURCE_FIELDS = {
    "energy": "energy_kcal",
    "carbohydrates": "carbohydrates",
    "total_sugars": "total_sugars",
    "added_sugars": "added_sugars",
    "proteins": "proteins",
    "total_fats": "total_fats",
    "saturated_fats": "saturated_fats",
    "dietary_fiber": "dietary_fiber",
    "sodium": "sodium",
}


def calculate_percentage(value: Optional[Decimal], reference: Decimal) -> Decimal:
    """Express a value as a percentage of its reference amount.

    Args:
        value: Normalized (already rounded) nutrient value, or None
        reference: Daily reference amount

    Returns:
        Percentage rounded half-up to 1 decimal place; 0.0 when the value
        is None or the reference is zero
    """
    if value is None or reference == 0:
        return Decimal("0.0")
    with sized_context([value, reference]):
        ratio = (value / reference).quantize(RATIO_QUANTUM, rounding=ROUND_HALF_UP)
        return (ratio * HUNDRED).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


def calculate_daily_values(
    per_100: Mapping[str, Decimal],
    daily_values: Mapping[str, Decimal] = DAILY_VALUES,
) -> DailyValuePercentages:
    """Calculate %DV for every eligible nutrient.

    Args:
        per_100: Per-100-unit values keyed by nutrient field name
        daily_values: Reference amounts keyed by nutrient field name

    Returns:
        DailyValuePercentages
    """
    percentages = {
        dv_field: calculate_percentage(
            per_100.get(source), daily_values.get(source, Decimal("0"))
        )
        for dv_field, source in DV_SOURCE_FIELDS.items()
    }
    return DailyValuePercentages(**percentages)
