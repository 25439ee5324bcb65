"""Static reference tables for nutrition labelling.

Daily values follow ANVISA RDC 429/2020. Preparation factors model
cooking-induced changes to fat and protein. The vitamin factor is kept in
the table but no label field consumes it yet.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

ANVISA_VERSION = "RDC-429-2020"


# ============================================================================
# DAILY VALUES (%DV reference amounts)
# ============================================================================
#
# Keys match the per-100-unit field names on NutritionTable.
# Trans fat has no daily value.
# ============================================================================

DAILY_VALUES: Mapping[str, Decimal] = MappingProxyType({
    "energy_kcal": Decimal("2000"),      # kcal
    "carbohydrates": Decimal("300"),     # g
    "total_sugars": Decimal("50"),       # g
    "added_sugars": Decimal("50"),       # g
    "proteins": Decimal("50"),           # g
    "total_fats": Decimal("55"),         # g
    "saturated_fats": Decimal("22"),     # g
    "dietary_fiber": Decimal("25"),      # g
    "sodium": Decimal("2400"),           # mg
})


class PreparationMethod(Enum):
    """Cooking techniques with known correction factors."""

    RAW = "RAW"
    BOILED = "BOILED"
    FRIED = "FRIED"
    BAKED = "BAKED"
    GRILLED = "GRILLED"
    STEAMED = "STEAMED"


@dataclass(frozen=True)
class PreparationFactors:
    """Multipliers applied to nutrients for a preparation method."""

    fat: Decimal
    protein: Decimal
    vitamin: Decimal  # reserved


DEFAULT_PREPARATION_FACTORS = PreparationFactors(
    fat=Decimal("1"), protein=Decimal("1"), vitamin=Decimal("1")
)

PREPARATION_FACTORS: Mapping[PreparationMethod, PreparationFactors] = MappingProxyType({
    PreparationMethod.RAW: DEFAULT_PREPARATION_FACTORS,
    PreparationMethod.BOILED: PreparationFactors(
        fat=Decimal("0.95"), protein=Decimal("0.95"), vitamin=Decimal("0.8")
    ),
    PreparationMethod.FRIED: PreparationFactors(
        fat=Decimal("1.15"), protein=Decimal("1"), vitamin=Decimal("0.7")
    ),
    PreparationMethod.BAKED: PreparationFactors(
        fat=Decimal("1.02"), protein=Decimal("1"), vitamin=Decimal("0.9")
    ),
    PreparationMethod.GRILLED: PreparationFactors(
        fat=Decimal("0.98"), protein=Decimal("1"), vitamin=Decimal("0.85")
    ),
    PreparationMethod.STEAMED: PreparationFactors(
        fat=Decimal("0.97"), protein=Decimal("0.98"), vitamin=Decimal("0.9")
    ),
})


def parse_preparation_method(
    method: Union[PreparationMethod, str, None]
) -> Optional[PreparationMethod]:
    """Return the PreparationMethod for a tag, or None if unrecognized.

    Matching is exact on the tag value ("FRIED"), as stored on recipes.
    """
    if isinstance(method, PreparationMethod):
        return method
    if method is None:
        return None
    try:
        return PreparationMethod(method)
    except ValueError:
        return None


def get_preparation_factors(
    method: Union[PreparationMethod, str, None]
) -> PreparationFactors:
    """Look up correction factors for a preparation method.

    Never fails: unknown or missing methods get the identity factors.

    Args:
        method: PreparationMethod or its string tag

    Returns:
        PreparationFactors for the method
    """
    parsed = parse_preparation_method(method)
    if parsed is None:
        return DEFAULT_PREPARATION_FACTORS
    return PREPARATION_FACTORS.get(parsed, DEFAULT_PREPARATION_FACTORS)
