from .recipe_schema import Recipe, NutritionalInfo, MAX_RECIPES, recipe_response_schema
from .image_schema import SelectedImage
from .assistant_state import AssistantState, ViewMode, RecipeCard, SavedRecipeEntry
__all__ = ["Recipe", "NutritionalInfo", "MAX_RECIPES", "recipe_response_schema", "SelectedImage", "AssistantState", "ViewMode", "RecipeCard", "SavedRecipeEntry"]
