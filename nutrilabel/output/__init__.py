"""Output formatting for nutrition tables."""

from nutrilabel.output.formatters import (
    format_table_json,
    format_table_json_string,
    format_ingredient_json,
    format_recipe_json
)

__all__ = [
    "format_table_json",
    "format_table_json_string",
    "format_ingredient_json",
    "format_recipe_json"
]
