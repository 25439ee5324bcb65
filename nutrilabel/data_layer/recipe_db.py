"""Recipe store loaded from JSON, resolved against the ingredient catalog."""
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from nutrilabel.data_layer.exceptions import (
    InvalidRecipeCompositionError,
    RecipeNotFoundError,
    RecipeValidationError,
)
from nutrilabel.data_layer.ingredient_db import IngredientDB, to_decimal
from nutrilabel.data_layer.models import VALID_PORTION_UNITS, Recipe, RecipeComponent

_logger = logging.getLogger(__name__)


class RecipeDB:
    """Store of recipes loaded from JSON.

    Components reference catalog ingredients by id and are resolved when
    the file is loaded, so every Recipe handed out is self-contained.
    """

    def __init__(self, json_path: str, ingredient_db: IngredientDB):
        """Initialize recipe store from JSON file.

        Args:
            json_path: Path to JSON file with a "recipes" list
            ingredient_db: Catalog used to resolve component ingredient ids

        Raises:
            IngredientNotFoundError: If a component references an unknown id
            RecipeValidationError: If a recipe fails validation
            InvalidRecipeCompositionError: If a recipe has no components
        """
        self.json_path = Path(json_path)
        self.ingredient_db = ingredient_db
        self._recipes: List[Recipe] = []
        self._load_recipes()

    def _load_recipes(self):
        """Load recipes from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        for recipe_data in data.get("recipes", []):
            self._recipes.append(parse_recipe(recipe_data, self.ingredient_db))

        _logger.info("Loaded %s recipes from %s", len(self._recipes), self.json_path)

    def get_all_recipes(self) -> List[Recipe]:
        """Get all recipes in file order."""
        return self._recipes.copy()

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by its id, or None if absent."""
        for recipe in self._recipes:
            if recipe.id == str(recipe_id):
                return recipe
        return None

    def require_recipe(self, recipe_id: str) -> Recipe:
        """Get a recipe by its id.

        Raises:
            RecipeNotFoundError: If the id is unknown
        """
        recipe = self.get_recipe_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(str(recipe_id))
        return recipe

    def search_by_name(self, fragment: str) -> List[Recipe]:
        """Find recipes whose name contains fragment (case-insensitive)."""
        fragment_lower = fragment.strip().lower()
        return [r for r in self._recipes if fragment_lower in r.name.lower()]

    def count(self) -> int:
        return len(self._recipes)


def parse_recipe(recipe_data: dict, ingredient_db: IngredientDB) -> Recipe:
    """Parse, resolve and validate a recipe dictionary.

    Args:
        recipe_data: Dictionary with id, name, preparation_method,
            total_portion and an "ingredients" list of
            {"ingredient_id", "quantity"} entries
        ingredient_db: Catalog used to resolve ingredient ids

    Returns:
        Validated Recipe
    """
    components = []
    for component_data in recipe_data.get("ingredients", []):
        ingredient = ingredient_db.require_ingredient(str(component_data.get("ingredient_id")))
        quantity = to_decimal(component_data.get("quantity"), "quantity")
        if quantity is None:
            raise RecipeValidationError("quantity", None, "quantity is required")
        components.append(RecipeComponent(ingredient=ingredient, quantity=quantity))

    recipe_id = recipe_data.get("id")
    recipe = Recipe(
        id=str(recipe_id) if recipe_id is not None else None,
        name=recipe_data.get("name") or "",
        preparation_method=recipe_data.get("preparation_method"),
        total_portion=to_decimal(recipe_data.get("total_portion"), "total_portion"),
        components=tuple(components),
        portion_unit=recipe_data.get("portion_unit", "g"),
        servings=recipe_data.get("servings"),
        instructions=recipe_data.get("instructions"),
    )
    validate_recipe(recipe)
    return recipe


def validate_recipe(recipe: Recipe) -> None:
    """Validate a recipe before it reaches the calculator.

    Raises:
        RecipeValidationError: On blank name, non-positive total portion,
            bad portion unit or negative quantities
        InvalidRecipeCompositionError: If the recipe has no components
    """
    if not recipe.name or not recipe.name.strip():
        raise RecipeValidationError("name", recipe.name, "recipe name is required")

    if recipe.total_portion is None or recipe.total_portion <= Decimal("0"):
        _logger.warning("Rejected recipe '%s': total portion %s", recipe.name, recipe.total_portion)
        raise RecipeValidationError(
            "total_portion", recipe.total_portion, "total portion must be greater than zero"
        )

    if recipe.portion_unit not in VALID_PORTION_UNITS:
        raise RecipeValidationError("portion_unit", recipe.portion_unit, "unit must be 'g' or 'ml'")

    if not recipe.components:
        _logger.warning("Rejected recipe '%s': no ingredients", recipe.name)
        raise InvalidRecipeCompositionError(recipe.name)

    for component in recipe.components:
        if component.quantity < 0:
            raise RecipeValidationError(
                "quantity", component.quantity, "quantity must not be negative"
            )
