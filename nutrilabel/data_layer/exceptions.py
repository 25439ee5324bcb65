"""Structured error types for the nutrition label pipeline.

Every failure carries an ErrorCode, a human-readable message and a context
dictionary so the HTTP and CLI layers can report it without parsing text.

Lenient defaults are NOT errors:
- unknown preparation method -> identity correction factors
- absent nutrient value -> summed as zero
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for the nutrition label pipeline."""

    INVALID_RECIPE_COMPOSITION = "INVALID_RECIPE_COMPOSITION"
    INGREDIENT_NOT_FOUND = "INGREDIENT_NOT_FOUND"
    RECIPE_NOT_FOUND = "RECIPE_NOT_FOUND"
    VALIDATION_FAILURE = "VALIDATION_FAILURE"


class NutritionPipelineError(Exception):
    """Base exception for all nutrition pipeline errors.

    Attributes:
        code: ErrorCode identifying the error type
        message: Human-readable error description
        context: Dictionary of relevant error context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(f"[{code.value}] {message}")

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context
        }


class InvalidRecipeCompositionError(NutritionPipelineError):
    """Raised when a recipe has no components.

    Checked before any accumulation starts, so no partial table is ever
    produced.
    """

    def __init__(self, recipe_name: Optional[str] = None):
        context: Dict[str, Any] = {}
        if recipe_name is not None:
            context["recipe_name"] = recipe_name
        super().__init__(
            code=ErrorCode.INVALID_RECIPE_COMPOSITION,
            message="Recipe must have at least one ingredient",
            context=context
        )
        self.recipe_name = recipe_name


class IngredientNotFoundError(NutritionPipelineError):
    """Raised when an ingredient id is not present in the catalog."""

    def __init__(self, ingredient_id: str):
        super().__init__(
            code=ErrorCode.INGREDIENT_NOT_FOUND,
            message=f"Ingredient '{ingredient_id}' not found in catalog",
            context={"ingredient_id": ingredient_id}
        )
        self.ingredient_id = ingredient_id


class RecipeNotFoundError(NutritionPipelineError):
    """Raised when a recipe id is not present in the recipe store."""

    def __init__(self, recipe_id: str):
        super().__init__(
            code=ErrorCode.RECIPE_NOT_FOUND,
            message=f"Recipe '{recipe_id}' not found",
            context={"recipe_id": recipe_id}
        )
        self.recipe_id = recipe_id


class RecipeValidationError(NutritionPipelineError):
    """Raised when catalog or recipe input fails structural validation.

    Context includes:
        - field: Name of the offending field
        - value: The rejected value (stringified)
        - reason: Why validation failed
    """

    def __init__(self, field_name: str, value: Any, reason: str):
        super().__init__(
            code=ErrorCode.VALIDATION_FAILURE,
            message=f"Invalid {field_name}: {reason}",
            context={
                "field": field_name,
                "value": str(value),
                "reason": reason,
            }
        )
        self.field_name = field_name
        self.value = value
        self.reason = reason
