"""FastAPI server exposing nutrition tables and the read-only catalog."""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from nutrilabel.app_logging import configure_logging
from nutrilabel.data_layer.exceptions import (
    IngredientNotFoundError,
    NutritionPipelineError,
    RecipeNotFoundError,
)
from nutrilabel.data_layer.ingredient_db import IngredientDB
from nutrilabel.data_layer.recipe_db import RecipeDB, parse_recipe
from nutrilabel.data_layer.settings import AppSettings, SettingsLoader, resolve_config_path
from nutrilabel.nutrition.calculator import NutritionCalculator
from nutrilabel.output.formatters import (
    format_ingredient_json,
    format_recipe_json,
    format_table_json,
)

_logger = logging.getLogger(__name__)


class ComponentRequest(BaseModel):
    ingredient_id: str
    quantity: Decimal = Field(ge=0)


class CalculateRequest(BaseModel):
    name: str
    preparation_method: Optional[str] = None
    total_portion: Decimal = Field(gt=0)
    portion_unit: str = "g"
    ingredients: List[ComponentRequest] = Field(default_factory=list)


def _http_error(exc: NutritionPipelineError) -> HTTPException:
    status_code = 404 if isinstance(exc, (RecipeNotFoundError, IngredientNotFoundError)) else 400
    return HTTPException(status_code=status_code, detail=exc.to_dict())


def create_app(
    settings: Optional[AppSettings] = None,
    ingredient_db: Optional[IngredientDB] = None,
    recipe_db: Optional[RecipeDB] = None,
    calculator: Optional[NutritionCalculator] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        settings: Settings used to locate data files when databases are not
            given (defaults to the YAML file named by NUTRILABEL_CONFIG)
        ingredient_db: Preloaded ingredient catalog
        recipe_db: Preloaded recipe store
        calculator: NutritionCalculator instance

    Returns:
        Configured FastAPI application
    """
    if ingredient_db is None or recipe_db is None:
        resolved_settings = settings or SettingsLoader(resolve_config_path()).load()
        configure_logging(resolved_settings.log_level)
        if ingredient_db is None:
            ingredient_db = IngredientDB(resolved_settings.ingredients_path)
        if recipe_db is None:
            recipe_db = RecipeDB(resolved_settings.recipes_path, ingredient_db)
    calculator = calculator or NutritionCalculator()

    app = FastAPI(title="Nutrilabel API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/nutrition/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/nutrition/recipe/{recipe_id}")
    def recipe_nutrition(recipe_id: str) -> Dict[str, Any]:
        _logger.info("GET /api/nutrition/recipe/%s", recipe_id)
        try:
            recipe = recipe_db.require_recipe(recipe_id)
            table = calculator.calculate_recipe_nutrition(recipe)
        except NutritionPipelineError as exc:
            _logger.error("Nutrition table failed for recipe %s: %s", recipe_id, exc)
            raise _http_error(exc) from exc
        return format_table_json(table)

    @app.post("/api/nutrition/calculate")
    def calculate(request: CalculateRequest) -> Dict[str, Any]:
        """Calculate a table for an ad-hoc recipe built from catalog ingredients."""
        try:
            recipe = parse_recipe(request.model_dump(), ingredient_db)
            table = calculator.calculate_recipe_nutrition(recipe)
        except NutritionPipelineError as exc:
            _logger.error("Nutrition table failed for '%s': %s", request.name, exc)
            raise _http_error(exc) from exc
        return format_table_json(table)

    @app.get("/api/ingredients")
    def list_ingredients() -> List[Dict[str, Any]]:
        return [format_ingredient_json(i) for i in ingredient_db.get_all_ingredients()]

    # Fixed paths are registered before /{ingredient_id} so they are not
    # captured as ids.
    @app.get("/api/ingredients/search")
    def search_ingredients(q: str) -> List[Dict[str, Any]]:
        return [format_ingredient_json(i) for i in ingredient_db.search(q)]

    @app.get("/api/ingredients/categories")
    def ingredient_categories() -> List[str]:
        return ingredient_db.get_all_categories()

    @app.get("/api/ingredients/count")
    def ingredient_count() -> int:
        return ingredient_db.count()

    @app.get("/api/ingredients/{ingredient_id}")
    def get_ingredient(ingredient_id: str) -> Dict[str, Any]:
        try:
            return format_ingredient_json(ingredient_db.require_ingredient(ingredient_id))
        except IngredientNotFoundError as exc:
            raise _http_error(exc) from exc

    @app.get("/api/recipes")
    def list_recipes() -> List[Dict[str, Any]]:
        return [format_recipe_json(r) for r in recipe_db.get_all_recipes()]

    @app.get("/api/recipes/search")
    def search_recipes(q: str) -> List[Dict[str, Any]]:
        return [format_recipe_json(r) for r in recipe_db.search_by_name(q)]

    @app.get("/api/recipes/count")
    def recipe_count() -> int:
        return recipe_db.count()

    @app.get("/api/recipes/{recipe_id}")
    def get_recipe(recipe_id: str) -> Dict[str, Any]:
        try:
            return format_recipe_json(recipe_db.require_recipe(recipe_id))
        except RecipeNotFoundError as exc:
            raise _http_error(exc) from exc

    return app


def main():
    """Run the API server with uvicorn."""
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
