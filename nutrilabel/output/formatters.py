"""Formatters for nutrition table output (JSON)."""

import json
from dataclasses import fields
from decimal import Decimal
from typing import Any, Dict

from nutrilabel.data_layer.models import IngredientProfile, NutritionTable, Recipe


def _decimal_to_str(value: Any) -> Any:
    # Strings keep the fixed scale ("200.00"); floats would drop it
    if isinstance(value, Decimal):
        return str(value)
    return value


def format_table_json(table: NutritionTable) -> Dict[str, Any]:
    """Format a NutritionTable as a JSON-serializable dictionary.

    Args:
        table: NutritionTable from the calculator

    Returns:
        Dictionary with per-100-unit values, %DV and metadata.
        Decimal values are rendered as strings.
    """
    per_100 = {
        "energy_kcal": table.energy_kcal,
        "energy_kj": table.energy_kj,
        "carbohydrates": table.carbohydrates,
        "total_sugars": table.total_sugars,
        "added_sugars": table.added_sugars,
        "proteins": table.proteins,
        "total_fats": table.total_fats,
        "saturated_fats": table.saturated_fats,
        "trans_fats": table.trans_fats,
        "dietary_fiber": table.dietary_fiber,
        "sodium": table.sodium,
    }
    daily_values = {
        "energy": table.energy_dv,
        "carbohydrates": table.carbohydrates_dv,
        "total_sugars": table.total_sugars_dv,
        "added_sugars": table.added_sugars_dv,
        "proteins": table.proteins_dv,
        "total_fats": table.total_fats_dv,
        "saturated_fats": table.saturated_fats_dv,
        "dietary_fiber": table.dietary_fiber_dv,
        "sodium": table.sodium_dv,
    }
    return {
        "recipe_id": table.recipe_id,
        "recipe_name": table.recipe_name,
        "per_100": {k: _decimal_to_str(v) for k, v in per_100.items()},
        "daily_values_percent": {k: _decimal_to_str(v) for k, v in daily_values.items()},
        "anvisa_version": table.anvisa_version,
        "calculated_at": table.calculated_at,
    }


def format_table_json_string(table: NutritionTable, indent: int = 2) -> str:
    """Format a NutritionTable as a JSON string."""
    return json.dumps(format_table_json(table), indent=indent)


def format_ingredient_json(ingredient: IngredientProfile) -> Dict[str, Any]:
    """Format an IngredientProfile as a dictionary; absent nutrients stay None."""
    return {f.name: _decimal_to_str(getattr(ingredient, f.name)) for f in fields(ingredient)}


def format_recipe_json(recipe: Recipe) -> Dict[str, Any]:
    """Format a Recipe as a dictionary with ingredient references."""
    return {
        "id": recipe.id,
        "name": recipe.name,
        "preparation_method": recipe.preparation_method,
        "total_portion": _decimal_to_str(recipe.total_portion),
        "portion_unit": recipe.portion_unit,
        "servings": recipe.servings,
        "instructions": recipe.instructions,
        "ingredients": [
            {
                "ingredient_id": c.ingredient.id,
                "name": c.ingredient.name,
                "quantity": _decimal_to_str(c.quantity),
                "unit": c.ingredient.portion_unit,
            }
            for c in recipe.components
        ],
    }
