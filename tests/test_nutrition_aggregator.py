"""Tests for nutrition aggregator and normalizer."""
from decimal import Decimal

import pytest

from nutrilabel.data_layer.exceptions import InvalidRecipeCompositionError
from nutrilabel.data_layer.models import (
    IngredientProfile,
    NutrientTotals,
    Recipe,
    RecipeComponent,
)
from nutrilabel.nutrition.aggregator import NutritionAggregator, calculate_proportion
from nutrilabel.nutrition.normalizer import normalization_factor, normalize_totals
from nutrilabel.nutrition.reference_tables import get_preparation_factors


def _recipe(components, method="RAW", total_portion="100"):
    return Recipe(
        id="r1",
        name="Test recipe",
        preparation_method=method,
        total_portion=Decimal(total_portion),
        components=tuple(components),
    )


class TestCalculateProportion:
    """Tests for quantity -> proportion conversion."""

    def test_simple(self):
        assert calculate_proportion(Decimal("50")) == Decimal("0.5000")

    def test_rounds_to_four_places(self):
        assert calculate_proportion(Decimal("33.333")) == Decimal("0.3333")

    def test_rounds_half_up(self):
        # 0.005 / 100 = 0.00005, half-even would give 0.0000
        assert calculate_proportion(Decimal("0.005")) == Decimal("0.0001")


class TestNutritionAggregator:
    """Tests for NutritionAggregator."""

    @pytest.fixture
    def ingredient(self):
        return IngredientProfile(
            id="1",
            name="Mixed",
            portion_unit="g",
            energy_kcal=Decimal("200"),
            energy_kj=Decimal("836.8"),
            carbohydrates=Decimal("20"),
            total_sugars=Decimal("4"),
            added_sugars=Decimal("2"),
            proteins=Decimal("10"),
            total_fats=Decimal("5"),
            saturated_fats=Decimal("2"),
            trans_fats=Decimal("1"),
            dietary_fiber=Decimal("3"),
            sodium=Decimal("400"),
        )

    def test_raw_contribution_scales_by_proportion(self, ingredient):
        recipe = _recipe([RecipeComponent(ingredient, Decimal("50"))])
        totals = NutritionAggregator.aggregate_recipe(recipe)

        assert totals.energy_kcal == Decimal("100")
        assert totals.energy_kj == Decimal("418.4")
        assert totals.carbohydrates == Decimal("10")
        assert totals.proteins == Decimal("5")
        assert totals.total_fats == Decimal("2.5")
        assert totals.trans_fats == Decimal("0.5")
        assert totals.sodium == Decimal("200")

    def test_fried_corrects_fats_only(self, ingredient):
        recipe = _recipe([RecipeComponent(ingredient, Decimal("100"))], method="FRIED")
        totals = NutritionAggregator.aggregate_recipe(recipe)

        assert totals.total_fats == Decimal("5.75")
        assert totals.saturated_fats == Decimal("2.30")
        assert totals.proteins == Decimal("10")
        # Trans fat is never corrected
        assert totals.trans_fats == Decimal("1")
        assert totals.energy_kcal == Decimal("200")

    def test_boiled_corrects_fat_and_protein(self, ingredient):
        recipe = _recipe([RecipeComponent(ingredient, Decimal("100"))], method="BOILED")
        totals = NutritionAggregator.aggregate_recipe(recipe)

        assert totals.total_fats == Decimal("4.75")
        assert totals.saturated_fats == Decimal("1.90")
        assert totals.proteins == Decimal("9.50")
        assert totals.trans_fats == Decimal("1")

    def test_absent_values_sum_as_zero(self):
        empty = IngredientProfile(id="2", name="Water", portion_unit="ml")
        recipe = _recipe([RecipeComponent(empty, Decimal("250"))])
        totals = NutritionAggregator.aggregate_recipe(recipe)
        assert totals == NutrientTotals()

    def test_totals_are_not_rounded_between_components(self):
        salt_trace = IngredientProfile(
            id="3", name="Trace", portion_unit="g", sodium=Decimal("1.00")
        )
        recipe = _recipe([
            RecipeComponent(salt_trace, Decimal("0.5")),
            RecipeComponent(salt_trace, Decimal("0.5")),
        ])
        totals = NutritionAggregator.aggregate_recipe(recipe)

        # Each contributes 0.005; rounding per component would give 0.02
        assert totals.sodium == Decimal("0.0100")
        assert normalize_totals(totals, Decimal("100"))["sodium"] == Decimal("0.01")

    def test_component_contribution(self, ingredient):
        component = RecipeComponent(ingredient, Decimal("10"))
        contribution = NutritionAggregator.component_contribution(
            component, get_preparation_factors("STEAMED")
        )
        assert contribution["total_fats"] == Decimal("0.5") * Decimal("0.97")
        assert contribution["proteins"] == Decimal("1") * Decimal("0.98")
        assert contribution["dietary_fiber"] == Decimal("0.3")

    def test_empty_recipe_rejected(self):
        with pytest.raises(InvalidRecipeCompositionError) as exc_info:
            NutritionAggregator.aggregate_recipe(_recipe([]))
        assert exc_info.value.recipe_name == "Test recipe"

    def test_does_not_mutate_recipe(self, ingredient):
        recipe = _recipe([RecipeComponent(ingredient, Decimal("50"))])
        before = (recipe.components, recipe.total_portion)
        NutritionAggregator.aggregate_recipe(recipe)
        assert (recipe.components, recipe.total_portion) == before


class TestNormalizer:
    """Tests for normalization to 100 units."""

    @pytest.mark.parametrize(
        "portion,expected",
        [
            ("50", "2.0000"),
            ("100", "1.0000"),
            ("300", "0.3333"),
            ("30", "3.3333"),
            ("150", "0.6667"),
        ],
    )
    def test_normalization_factor(self, portion, expected):
        assert normalization_factor(Decimal(portion)) == Decimal(expected)

    def test_factor_is_rounded_before_multiplying(self):
        totals = NutrientTotals(energy_kcal=Decimal("900"))
        per_100 = normalize_totals(totals, Decimal("300"))
        # 900 * 0.3333, not 900 / 3
        assert per_100["energy_kcal"] == Decimal("299.97")

    def test_values_have_two_decimal_places(self):
        per_100 = normalize_totals(NutrientTotals(proteins=Decimal("1.23456")), Decimal("100"))
        assert per_100["proteins"] == Decimal("1.23")
        assert per_100["proteins"].as_tuple().exponent == -2
        assert per_100["sodium"] == Decimal("0.00")

    def test_rounds_half_up(self):
        per_100 = normalize_totals(NutrientTotals(sodium=Decimal("1.005")), Decimal("100"))
        assert per_100["sodium"] == Decimal("1.01")


class TestLargeMagnitudes:
    """Quantities beyond 28 significant digits stay exact."""

    @pytest.fixture
    def ingredient(self):
        return IngredientProfile(
            id="1", name="Bulk", portion_unit="g", energy_kcal=Decimal("200")
        )

    def test_proportion_of_huge_quantity(self):
        assert calculate_proportion(Decimal("1e27")) == Decimal("1e25")

    def test_aggregate_huge_quantity(self, ingredient):
        recipe = _recipe([RecipeComponent(ingredient, Decimal("1e27"))], total_portion="1e27")
        totals = NutritionAggregator.aggregate_recipe(recipe)
        assert totals.energy_kcal == Decimal("2e27")

    def test_normalize_huge_totals(self):
        per_100 = normalize_totals(NutrientTotals(energy_kcal=Decimal("2e27")), Decimal("1000"))
        assert per_100["energy_kcal"] == Decimal("2e26")
        assert per_100["energy_kcal"].as_tuple().exponent == -2

    def test_huge_portion_factor_rounds_to_zero(self):
        assert normalization_factor(Decimal("1e27")) == Decimal("0.0000")
