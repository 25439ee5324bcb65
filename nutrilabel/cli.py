#!/usr/bin/env python3
"""Command-line interface for nutrition table calculation."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from nutrilabel.app_logging import configure_logging
from nutrilabel.data_layer.exceptions import NutritionPipelineError
from nutrilabel.data_layer.ingredient_db import IngredientDB
from nutrilabel.data_layer.recipe_db import RecipeDB
from nutrilabel.data_layer.settings import AppSettings, SettingsLoader, DEFAULT_CONFIG_PATH
from nutrilabel.nutrition.calculator import NutritionCalculator
from nutrilabel.output.formatters import format_table_json_string


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calculate the nutrition table (per 100g/100ml and %DV) of a recipe"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "--ingredients",
        type=str,
        help="Path to ingredient catalog JSON (overrides config)"
    )
    parser.add_argument(
        "--recipes",
        type=str,
        help="Path to recipes JSON (overrides config)"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--recipe-id",
        type=str,
        help="Id of the recipe to calculate"
    )
    group.add_argument(
        "--list",
        action="store_true",
        help="List available recipes and exit"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save JSON output (default: print to stdout)"
    )
    return parser


def load_settings(config_path: str) -> AppSettings:
    """Load settings from YAML, or defaults when the file is absent."""
    path = Path(config_path)
    if not path.exists():
        return AppSettings()
    return SettingsLoader(str(path)).load()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    configure_logging(settings.log_level)

    ingredients_path = Path(args.ingredients or settings.ingredients_path)
    if not ingredients_path.exists():
        print(f"Error: Ingredients file not found: {ingredients_path}", file=sys.stderr)
        return 1

    recipes_path = Path(args.recipes or settings.recipes_path)
    if not recipes_path.exists():
        print(f"Error: Recipes file not found: {recipes_path}", file=sys.stderr)
        return 1

    try:
        ingredient_db = IngredientDB(str(ingredients_path))
        recipe_db = RecipeDB(str(recipes_path), ingredient_db)

        if args.list:
            for recipe in recipe_db.get_all_recipes():
                print(f"{recipe.id}\t{recipe.name}")
            return 0

        recipe = recipe_db.require_recipe(args.recipe_id)
        table = NutritionCalculator().calculate_recipe_nutrition(recipe)
    except NutritionPipelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json_output = format_table_json_string(table, indent=2)
    if args.output_file:
        output_path = Path(args.output_file)
        output_path.write_text(json_output)
        print(f"JSON output saved to {output_path}", file=sys.stderr)
    else:
        print(json_output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
