from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List, Dict, Any

MAX_RECIPES = 3


class NutritionalInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: str
    protein: str
    carbohydrates: str
    fats: str


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipeName: str
    ingredients: List[str]
    instructions: List[str]
    servingSize: Optional[str] = None
    nutritionalInfo: Optional[NutritionalInfo] = None

    @field_validator("recipeName")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("recipeName must not be empty")
        return value

    def to_storage_dict(self) -> Dict[str, Any]:
        # Absent optional fields stay absent in the stored JSON
        return self.model_dump(exclude_none=True)


def _recipe_item_schema(detailed: bool) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "recipeName": {
            "type": "string",
            "description": "The name of the recipe.",
        },
        "ingredients": {
            "type": "array",
            "items": {"type": "string"},
            "description": "A list of ingredients with quantities.",
        },
        "instructions": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Step-by-step cooking instructions.",
        },
    }
    required = ["recipeName", "ingredients", "instructions"]

    if detailed:
        properties["servingSize"] = {
            "type": "string",
            "description": "How many people the recipe serves, e.g. '2 servings'.",
        }
        properties["nutritionalInfo"] = {
            "type": "object",
            "description": "Estimated nutrition per serving.",
            "properties": {
                "calories": {"type": "string"},
                "protein": {"type": "string"},
                "carbohydrates": {"type": "string"},
                "fats": {"type": "string"},
            },
            "required": ["calories", "protein", "carbohydrates", "fats"],
        }
        required += ["servingSize", "nutritionalInfo"]

    return {"type": "object", "properties": properties, "required": required}


def recipe_response_schema(detailed: bool = True) -> Dict[str, Any]:
    """JSON schema the model is asked to constrain its output to."""
    return {
        "type": "array",
        "items": _recipe_item_schema(detailed),
    }
