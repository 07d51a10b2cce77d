from .image_agent import load_image, encode_to_base64
from .llm_agent import build_chat_model, build_recipe_message, recipe_instruction
from .recipe_agent import RecipeAgent, parse_recipes
__all__ = ["load_image", "encode_to_base64", "build_chat_model", "build_recipe_message", "recipe_instruction", "RecipeAgent", "parse_recipes"]
