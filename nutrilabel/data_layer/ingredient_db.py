"""Ingredient catalog loaded from JSON."""
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from nutrilabel.data_layer.exceptions import IngredientNotFoundError, RecipeValidationError
from nutrilabel.data_layer.models import (
    NUTRIENT_FIELDS,
    VALID_PORTION_UNITS,
    IngredientProfile,
)

_logger = logging.getLogger(__name__)


def to_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    """Convert a JSON value to Decimal, keeping None as None.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion.

    Raises:
        RecipeValidationError: If the value is not numeric
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise RecipeValidationError(field_name, value, "must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise RecipeValidationError(field_name, value, "must be a number")
    if not result.is_finite():
        raise RecipeValidationError(field_name, value, "must be a finite number")
    return result


class IngredientDB:
    """Catalog of ingredient profiles (values per 100g/100ml)."""

    def __init__(self, json_path: str):
        """Initialize ingredient catalog from JSON file.

        Args:
            json_path: Path to JSON file with an "ingredients" list

        Raises:
            FileNotFoundError: If the file does not exist
            RecipeValidationError: If an entry fails validation
        """
        self.json_path = Path(json_path)
        self._ingredients: List[IngredientProfile] = []
        self._by_id: Dict[str, IngredientProfile] = {}
        self._load_ingredients()

    def _load_ingredients(self):
        """Load ingredients from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        for ingredient_data in data.get("ingredients", []):
            ingredient = self._parse_ingredient(ingredient_data)
            if ingredient.id in self._by_id:
                raise RecipeValidationError("id", ingredient.id, "duplicate ingredient id")
            self._ingredients.append(ingredient)
            self._by_id[ingredient.id] = ingredient

        _logger.info("Loaded %s ingredients from %s", len(self._ingredients), self.json_path)

    def _parse_ingredient(self, ingredient_data: dict) -> IngredientProfile:
        """Parse and validate a single catalog entry.

        Args:
            ingredient_data: Dictionary containing ingredient data

        Returns:
            IngredientProfile
        """
        validate_ingredient(ingredient_data)
        nutrients = {
            name: to_decimal(ingredient_data.get(name), name) for name in NUTRIENT_FIELDS
        }
        for name, value in nutrients.items():
            if value is not None and value < 0:
                raise RecipeValidationError(name, value, "must not be negative")
        return IngredientProfile(
            id=str(ingredient_data["id"]),
            name=ingredient_data["name"].strip(),
            portion_unit=ingredient_data["portion_unit"],
            tbca_code=ingredient_data.get("tbca_code"),
            category=ingredient_data.get("category"),
            **nutrients,
        )

    def get_all_ingredients(self) -> List[IngredientProfile]:
        """Get all ingredients in catalog order."""
        return self._ingredients.copy()

    def get_ingredient_by_id(self, ingredient_id: str) -> Optional[IngredientProfile]:
        """Get an ingredient by id, or None if absent."""
        return self._by_id.get(str(ingredient_id))

    def require_ingredient(self, ingredient_id: str) -> IngredientProfile:
        """Get an ingredient by id.

        Raises:
            IngredientNotFoundError: If the id is not in the catalog
        """
        ingredient = self.get_ingredient_by_id(ingredient_id)
        if ingredient is None:
            raise IngredientNotFoundError(str(ingredient_id))
        return ingredient

    def get_ingredient_by_name(self, name: str) -> Optional[IngredientProfile]:
        """Get an ingredient by its exact name (case-insensitive)."""
        name_lower = name.strip().lower()
        for ingredient in self._ingredients:
            if ingredient.name.lower() == name_lower:
                return ingredient
        return None

    def search_by_name(self, fragment: str) -> List[IngredientProfile]:
        """Find ingredients whose name contains fragment (case-insensitive)."""
        fragment_lower = fragment.strip().lower()
        return [i for i in self._ingredients if fragment_lower in i.name.lower()]

    def search(self, term: str) -> List[IngredientProfile]:
        """Search ingredients by name, category or TBCA code (case-insensitive)."""
        term_lower = term.strip().lower()
        results = []
        for ingredient in self._ingredients:
            haystacks = [ingredient.name, ingredient.category or "", ingredient.tbca_code or ""]
            if any(term_lower in h.lower() for h in haystacks):
                results.append(ingredient)
        return results

    def get_all_categories(self) -> List[str]:
        """Get distinct, non-null categories in sorted order."""
        return sorted({i.category for i in self._ingredients if i.category})

    def count(self) -> int:
        return len(self._ingredients)


def validate_ingredient(ingredient_data: dict) -> None:
    """Validate required catalog fields.

    Raises:
        RecipeValidationError: On missing id, blank name or bad portion unit
    """
    if ingredient_data.get("id") is None:
        raise RecipeValidationError("id", None, "ingredient id is required")

    name = ingredient_data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise RecipeValidationError("name", name, "ingredient name is required")

    unit = ingredient_data.get("portion_unit")
    if unit not in VALID_PORTION_UNITS:
        _logger.warning("Rejected ingredient '%s': portion unit %r", name, unit)
        raise RecipeValidationError("portion_unit", unit, "unit must be 'g' or 'ml'")
