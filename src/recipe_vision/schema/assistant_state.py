from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from recipe_vision.schema.image_schema import SelectedImage
from recipe_vision.schema.recipe_schema import Recipe


class ViewMode(str, Enum):
    GENERATOR = "generator"
    SAVED = "saved"


class AssistantState(BaseModel):
    """Transient view state. Never persisted."""
    model_config = ConfigDict(validate_assignment=True)

    selected_image: Optional[SelectedImage] = None
    recipes: List[Recipe] = []
    is_loading: bool = False
    error: str = ""
    last_failure_cause: Optional[str] = None
    view_mode: ViewMode = ViewMode.GENERATOR
    expanded_index: Optional[int] = None

    @property
    def preview_url(self) -> str:
        return self.selected_image.preview_url if self.selected_image else ""


class RecipeCard(BaseModel):
    recipe: Recipe
    is_saved: bool


class SavedRecipeEntry(BaseModel):
    index: int
    recipe: Recipe
    expanded: bool
