"""Tests for the FastAPI server."""
import json
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
from fastapi.testclient import TestClient

from nutrilabel.api.server import create_app
from nutrilabel.data_layer.ingredient_db import IngredientDB
from nutrilabel.data_layer.recipe_db import RecipeDB
from nutrilabel.nutrition.calculator import NutritionCalculator


def _write(data):
    with NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(data, f)
        return f.name


@pytest.fixture
def client():
    catalog_path = _write({
        "ingredients": [
            {
                "id": "1",
                "name": "TestIng",
                "portion_unit": "g",
                "energy_kcal": 200,
                "carbohydrates": 20,
                "proteins": 10,
                "total_fats": 5,
                "category": "Teste",
            },
            {"id": "2", "name": "Agua", "portion_unit": "ml"},
        ]
    })
    recipes_path = _write({
        "recipes": [
            {
                "id": "1",
                "name": "R1",
                "preparation_method": "RAW",
                "total_portion": 50,
                "ingredients": [{"ingredient_id": "1", "quantity": 50}],
            }
        ]
    })
    ingredient_db = IngredientDB(catalog_path)
    recipe_db = RecipeDB(recipes_path, ingredient_db)
    calculator = NutritionCalculator(clock=lambda: datetime(2024, 1, 2, 3, 4, 5))
    app = create_app(ingredient_db=ingredient_db, recipe_db=recipe_db, calculator=calculator)
    yield TestClient(app)
    Path(catalog_path).unlink()
    Path(recipes_path).unlink()


class TestNutritionEndpoints:
    """Tests for /api/nutrition."""

    def test_health(self, client):
        response = client.get("/api/nutrition/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_recipe_nutrition(self, client):
        response = client.get("/api/nutrition/recipe/1")
        assert response.status_code == 200
        body = response.json()
        assert body["per_100"]["energy_kcal"] == "200.00"
        assert body["daily_values_percent"]["energy"] == "10.0"
        assert body["anvisa_version"] == "RDC-429-2020"
        assert body["calculated_at"] == "2024-01-02T03:04:05"

    def test_unknown_recipe(self, client):
        response = client.get("/api/nutrition/recipe/99")
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "RECIPE_NOT_FOUND"

    def test_calculate_ad_hoc_recipe(self, client):
        response = client.post(
            "/api/nutrition/calculate",
            json={
                "name": "Frito",
                "preparation_method": "FRIED",
                "total_portion": "100",
                "ingredients": [{"ingredient_id": "1", "quantity": "100"}],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["recipe_id"] is None
        assert body["per_100"]["total_fats"] == "5.75"

    def test_calculate_empty_recipe_rejected(self, client):
        response = client.post(
            "/api/nutrition/calculate",
            json={"name": "Vazia", "total_portion": 100, "ingredients": []},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "INVALID_RECIPE_COMPOSITION"

    def test_calculate_unknown_ingredient(self, client):
        response = client.post(
            "/api/nutrition/calculate",
            json={
                "name": "X",
                "total_portion": 100,
                "ingredients": [{"ingredient_id": "404", "quantity": 1}],
            },
        )
        assert response.status_code == 404

    def test_calculate_huge_quantities(self, client):
        response = client.post(
            "/api/nutrition/calculate",
            json={
                "name": "Granel",
                "total_portion": "1e27",
                "ingredients": [{"ingredient_id": "1", "quantity": "1e27"}],
            },
        )
        assert response.status_code == 200
        assert response.json()["per_100"]["energy_kcal"] == "0.00"

    def test_calculate_non_positive_portion_is_422(self, client):
        response = client.post(
            "/api/nutrition/calculate",
            json={"name": "X", "total_portion": 0, "ingredients": []},
        )
        assert response.status_code == 422


class TestCatalogEndpoints:
    """Tests for /api/ingredients and /api/recipes."""

    def test_list_ingredients(self, client):
        body = client.get("/api/ingredients").json()
        assert [i["id"] for i in body] == ["1", "2"]
        assert body[1]["energy_kcal"] is None

    def test_get_ingredient(self, client):
        assert client.get("/api/ingredients/1").json()["name"] == "TestIng"
        assert client.get("/api/ingredients/99").status_code == 404

    def test_search_ingredients(self, client):
        body = client.get("/api/ingredients/search", params={"q": "agua"}).json()
        assert [i["id"] for i in body] == ["2"]

    def test_categories_and_count(self, client):
        assert client.get("/api/ingredients/categories").json() == ["Teste"]
        assert client.get("/api/ingredients/count").json() == 2

    def test_recipes(self, client):
        assert [r["id"] for r in client.get("/api/recipes").json()] == ["1"]
        assert client.get("/api/recipes/1").json()["name"] == "R1"
        assert client.get("/api/recipes/2").status_code == 404
        assert client.get("/api/recipes/count").json() == 1

    def test_search_recipes_uses_q(self, client):
        assert [r["id"] for r in client.get("/api/recipes/search", params={"q": "r1"}).json()] == ["1"]
        assert client.get("/api/recipes/search", params={"q": "zzz"}).json() == []
        assert client.get("/api/recipes/search", params={"name": "r"}).status_code == 422
