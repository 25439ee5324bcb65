"""Data models for nutrition label calculation."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple


# Nutrient fields carried per 100 units, in label order.
NUTRIENT_FIELDS: Tuple[str, ...] = (
    "energy_kcal",
    "energy_kj",
    "carbohydrates",
    "total_sugars",
    "added_sugars",
    "proteins",
    "total_fats",
    "saturated_fats",
    "trans_fats",
    "dietary_fiber",
    "sodium",
)

VALID_PORTION_UNITS = ("g", "ml")


@dataclass(frozen=True)
class IngredientProfile:
    """Nutrient values per 100g/100ml of an ingredient.

    A nutrient set to None has no known value. It is summed as zero but
    is never reported as zero for the ingredient itself.
    """

    id: str
    name: str
    portion_unit: str  # "g" or "ml", never converted
    energy_kcal: Optional[Decimal] = None
    energy_kj: Optional[Decimal] = None
    carbohydrates: Optional[Decimal] = None
    total_sugars: Optional[Decimal] = None
    added_sugars: Optional[Decimal] = None
    proteins: Optional[Decimal] = None
    total_fats: Optional[Decimal] = None
    saturated_fats: Optional[Decimal] = None
    trans_fats: Optional[Decimal] = None
    dietary_fiber: Optional[Decimal] = None
    sodium: Optional[Decimal] = None  # mg
    tbca_code: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class RecipeComponent:
    """An ingredient and the quantity used, in the ingredient's own unit."""

    ingredient: IngredientProfile
    quantity: Decimal


@dataclass(frozen=True)
class Recipe:
    """A recipe with resolved ingredient profiles."""

    id: Optional[str]  # None for ad-hoc recipes
    name: str
    preparation_method: Optional[str]  # RAW, BOILED, FRIED, BAKED, GRILLED, STEAMED
    total_portion: Decimal  # finished weight/volume, must be > 0
    components: Tuple[RecipeComponent, ...]
    portion_unit: str = "g"
    servings: Optional[int] = None
    instructions: Optional[str] = None


@dataclass(frozen=True)
class NutrientTotals:
    """Unrounded per-recipe nutrient sums produced by the aggregator."""

    energy_kcal: Decimal = Decimal("0")
    energy_kj: Decimal = Decimal("0")
    carbohydrates: Decimal = Decimal("0")
    total_sugars: Decimal = Decimal("0")
    added_sugars: Decimal = Decimal("0")
    proteins: Decimal = Decimal("0")
    total_fats: Decimal = Decimal("0")
    saturated_fats: Decimal = Decimal("0")
    trans_fats: Decimal = Decimal("0")
    dietary_fiber: Decimal = Decimal("0")
    sodium: Decimal = Decimal("0")


@dataclass(frozen=True)
class DailyValuePercentages:
    """Percent daily value per nutrient (trans fat has none)."""

    energy: Decimal
    carbohydrates: Decimal
    total_sugars: Decimal
    added_sugars: Decimal
    proteins: Decimal
    total_fats: Decimal
    saturated_fats: Decimal
    dietary_fiber: Decimal
    sodium: Decimal


@dataclass(frozen=True)
class NutritionTable:
    """Nutrition facts per 100g/100ml of a finished recipe."""

    recipe_id: Optional[str]
    recipe_name: str

    # Values per 100 units, scale 2
    energy_kcal: Decimal
    energy_kj: Decimal
    carbohydrates: Decimal
    total_sugars: Decimal
    added_sugars: Decimal
    proteins: Decimal
    total_fats: Decimal
    saturated_fats: Decimal
    trans_fats: Decimal
    dietary_fiber: Decimal
    sodium: Decimal

    # %DV, scale 1
    energy_dv: Decimal
    carbohydrates_dv: Decimal
    total_sugars_dv: Decimal
    added_sugars_dv: Decimal
    proteins_dv: Decimal
    total_fats_dv: Decimal
    saturated_fats_dv: Decimal
    dietary_fiber_dv: Decimal
    sodium_dv: Decimal

    anvisa_version: str
    calculated_at: str  # ISO-8601
