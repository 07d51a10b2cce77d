from typing import List

from recipe_vision.schema import Recipe

NUTRITION_LABELS = (
    ("calories", "Calories"),
    ("protein", "Protein"),
    ("carbohydrates", "Carbohydrates"),
    ("fats", "Fats"),
)


def save_button_label(is_saved: bool) -> str:
    return "Saved" if is_saved else "Save Recipe"


def nutrition_rows(recipe: Recipe) -> List[tuple]:
    if recipe.nutritionalInfo is None:
        return []
    info = recipe.nutritionalInfo
    return [(label, getattr(info, field)) for field, label in NUTRITION_LABELS]


def format_recipe_markdown(recipe: Recipe) -> str:
    """Render a recipe card body as markdown (heading excluded)."""
    lines = []
    if recipe.servingSize:
        lines.append(f"**Serving size:** {recipe.servingSize}")
        lines.append("")

    lines.append("#### Ingredients")
    lines.extend(f"- {item}" for item in recipe.ingredients)
    lines.append("")

    lines.append("#### Instructions")
    lines.extend(f"{i}. {step}" for i, step in enumerate(recipe.instructions, 1))

    rows = nutrition_rows(recipe)
    if rows:
        lines.append("")
        lines.append("#### Nutrition (estimated, per serving)")
        lines.extend(f"- **{label}:** {value}" for label, value in rows)

    return "\n".join(lines)
