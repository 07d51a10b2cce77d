import logging
from typing import Any, List, Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.runnables import RunnableLambda
from langgraph.graph import StateGraph, END
from pydantic import BaseModel, TypeAdapter, ValidationError

from recipe_vision.agents.image_agent import encode_to_base64
from recipe_vision.agents.llm_agent import build_recipe_message, recipe_instruction
from recipe_vision.errors import (
    GenerationFailureCause,
    ImageReadError,
    ImageRequiredError,
    RecipeGenerationError,
)
from recipe_vision.schema import MAX_RECIPES, Recipe, SelectedImage

logger = logging.getLogger(__name__)

_recipe_list = TypeAdapter(List[Recipe])


class GenerationState(BaseModel):
    image: SelectedImage
    image_b64: Optional[str] = None
    raw_text: Optional[str] = None
    recipes: List[Recipe] = []


def response_text(response: Any) -> str:
    """Flatten a chat model response into plain text."""
    content = response.content if isinstance(response, BaseMessage) else response
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        content = "".join(parts)
    return (content or "").strip() if isinstance(content, str) else ""


def parse_recipes(text: str, detailed: bool = False) -> List[Recipe]:
    """Parse raw model output and check it against the recipe schema.

    The model's structured-output contract is not trusted: a bare array of at
    most MAX_RECIPES recipe objects is required (``{"recipes": [...]}`` is
    accepted too), and in detailed mode every recipe must carry a serving size
    and nutritional info.
    """
    if not text:
        raise RecipeGenerationError(GenerationFailureCause.EMPTY_RESPONSE, "model returned no text")

    try:
        data = JsonOutputParser().parse(text)
    except OutputParserException as exc:
        raise RecipeGenerationError(GenerationFailureCause.PARSE, str(exc)) from exc

    if isinstance(data, dict) and isinstance(data.get("recipes"), list):
        data = data["recipes"]
    if not isinstance(data, list):
        raise RecipeGenerationError(GenerationFailureCause.SCHEMA, f"expected a JSON array, got {type(data).__name__}")
    if len(data) > MAX_RECIPES:
        raise RecipeGenerationError(GenerationFailureCause.SCHEMA, f"expected at most {MAX_RECIPES} recipes, got {len(data)}")

    try:
        recipes = _recipe_list.validate_python(data)
    except ValidationError as exc:
        raise RecipeGenerationError(GenerationFailureCause.SCHEMA, str(exc)) from exc

    if detailed:
        for recipe in recipes:
            if recipe.servingSize is None or recipe.nutritionalInfo is None:
                raise RecipeGenerationError(
                    GenerationFailureCause.SCHEMA,
                    f"recipe '{recipe.recipeName}' is missing servingSize or nutritionalInfo",
                )
    return recipes


class RecipeAgent:
    """Turns one ingredient photo into up to three recipes.

    Runs encode_image -> call_model -> parse_recipes as a LangGraph graph.
    Every failure along the way surfaces as RecipeGenerationError tagged with
    its cause. No retries, no timeouts.
    """

    def __init__(self, llm: BaseChatModel, detailed: bool = True, json_hint: bool = False):
        self.llm = llm
        self.detailed = detailed
        self.instruction = recipe_instruction(detailed=detailed, json_hint=json_hint)

        graph = StateGraph(state_schema=GenerationState)
        graph.add_node("encode_image", self._encode_image_node)
        graph.add_node("call_model", RunnableLambda(self._call_model_node, afunc=self._acall_model_node))
        graph.add_node("parse_recipes", self._parse_recipes_node)
        graph.add_edge("encode_image", "call_model")
        graph.add_edge("call_model", "parse_recipes")
        graph.add_edge("parse_recipes", END)
        graph.set_entry_point("encode_image")
        self.graph = graph.compile()

    def _encode_image_node(self, state: GenerationState) -> dict:
        try:
            image_b64 = encode_to_base64(state.image)
        except ImageReadError as exc:
            raise RecipeGenerationError(GenerationFailureCause.ENCODING, str(exc)) from exc
        if not image_b64:
            raise RecipeGenerationError(GenerationFailureCause.ENCODING, "image is empty")
        return {"image_b64": image_b64}

    def _message(self, state: GenerationState):
        return [build_recipe_message(state.image_b64, state.image.mime_type, self.instruction)]

    def _call_model_node(self, state: GenerationState) -> dict:
        try:
            response = self.llm.invoke(self._message(state))
        except Exception as exc:
            raise RecipeGenerationError(GenerationFailureCause.SERVICE, str(exc)) from exc
        return {"raw_text": response_text(response)}

    async def _acall_model_node(self, state: GenerationState) -> dict:
        try:
            response = await self.llm.ainvoke(self._message(state))
        except Exception as exc:
            raise RecipeGenerationError(GenerationFailureCause.SERVICE, str(exc)) from exc
        return {"raw_text": response_text(response)}

    def _parse_recipes_node(self, state: GenerationState) -> dict:
        return {"recipes": parse_recipes(state.raw_text or "", detailed=self.detailed)}

    def _result(self, result: dict) -> List[Recipe]:
        recipes = [
            r if isinstance(r, Recipe) else Recipe.model_validate(r)
            for r in result.get("recipes", [])
        ]
        logger.info("Generated %d recipe(s)", len(recipes))
        return recipes

    def generate(self, image: Optional[SelectedImage]) -> List[Recipe]:
        if image is None:
            raise ImageRequiredError()
        try:
            result = self.graph.invoke({"image": image})
        except RecipeGenerationError:
            raise
        except Exception as exc:
            raise RecipeGenerationError(GenerationFailureCause.SERVICE, str(exc)) from exc
        return self._result(result)

    async def agenerate(self, image: Optional[SelectedImage]) -> List[Recipe]:
        if image is None:
            raise ImageRequiredError()
        try:
            result = await self.graph.ainvoke({"image": image})
        except RecipeGenerationError:
            raise
        except Exception as exc:
            raise RecipeGenerationError(GenerationFailureCause.SERVICE, str(exc)) from exc
        return self._result(result)
