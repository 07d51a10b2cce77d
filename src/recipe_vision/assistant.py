"""Controller behind the single-screen recipe assistant.

The Streamlit script only renders ``RecipeAssistant.state`` and forwards
widget events here, so every state transition can be tested without a
browser.
"""

import logging
from typing import List, Optional

from recipe_vision.agents import RecipeAgent
from recipe_vision.agents.llm_agent import build_chat_model, provider_needs_json_hint
from recipe_vision.config import AssistantSettings, get_settings
from recipe_vision.errors import (
    GENERATION_FAILED_MESSAGE,
    NO_IMAGE_MESSAGE,
    RecipeGenerationError,
)
from recipe_vision.schema import (
    AssistantState,
    Recipe,
    RecipeCard,
    SavedRecipeEntry,
    SelectedImage,
    ViewMode,
)
from recipe_vision.storage import JsonFileStorage, SavedRecipeStore

logger = logging.getLogger(__name__)


class RecipeAssistant:
    def __init__(self, agent: RecipeAgent, store: SavedRecipeStore):
        self.agent = agent
        self.store = store
        self.state = AssistantState()
        # Bumped on every new request and every new image; a response whose
        # token no longer matches is stale and gets dropped.
        self._request_token = 0

    # -- image intake ---------------------------------------------------

    def select_image(self, image: Optional[SelectedImage]) -> None:
        if image is None:
            return
        self._request_token += 1
        self.state = AssistantState(
            selected_image=image,
            view_mode=ViewMode.GENERATOR,
        )
        logger.debug("Selected image %s", image.name)

    def reject_image(self, message: str) -> None:
        """Drop the current image and its results after an unreadable pick."""
        self._request_token += 1
        self.state = AssistantState(error=message, view_mode=ViewMode.GENERATOR)

    # -- generation -----------------------------------------------------

    def _begin(self) -> Optional[int]:
        if self.state.selected_image is None:
            self.state.error = NO_IMAGE_MESSAGE
            self.state.last_failure_cause = None
            return None
        if self.state.is_loading:
            logger.warning("Ignoring generation request while another is in progress")
            return None

        self._request_token += 1
        self.state.is_loading = True
        self.state.error = ""
        self.state.last_failure_cause = None
        self.state.recipes = []
        return self._request_token

    def _is_current(self, token: int) -> bool:
        if token != self._request_token:
            logger.info("Discarding stale generation result (token %d, current %d)", token, self._request_token)
            return False
        return True

    def _succeed(self, token: int, recipes: List[Recipe]) -> None:
        if self._is_current(token):
            self.state.recipes = recipes

    def _fail(self, token: int, exc: RecipeGenerationError) -> None:
        logger.warning("Recipe generation failed (%s): %s", exc.cause.value, exc.detail)
        if self._is_current(token):
            self.state.error = GENERATION_FAILED_MESSAGE
            self.state.last_failure_cause = exc.cause.value

    def _finish(self, token: int) -> None:
        if token == self._request_token:
            self.state.is_loading = False

    def generate(self) -> List[Recipe]:
        """Run one generation for the selected image.

        Failures end up in ``state.error``. A trigger with no image, or one
        that overlaps a running generation, returns without calling the model.
        """
        token = self._begin()
        if token is None:
            return []
        try:
            recipes = self.agent.generate(self.state.selected_image)
        except RecipeGenerationError as exc:
            self._fail(token, exc)
        else:
            self._succeed(token, recipes)
        finally:
            self._finish(token)
        return list(self.state.recipes)

    async def agenerate(self) -> List[Recipe]:
        token = self._begin()
        if token is None:
            return []
        image = self.state.selected_image
        try:
            recipes = await self.agent.agenerate(image)
        except RecipeGenerationError as exc:
            self._fail(token, exc)
        else:
            self._succeed(token, recipes)
        finally:
            self._finish(token)
        return list(self.state.recipes)

    @property
    def can_generate(self) -> bool:
        return self.state.selected_image is not None and not self.state.is_loading

    # -- saved recipes --------------------------------------------------

    def save_recipe(self, recipe: Recipe) -> bool:
        return self.store.save(recipe)

    def delete_saved_recipe(self, index: int) -> bool:
        if not self.store.delete(index):
            return False
        expanded = self.state.expanded_index
        if expanded == index:
            self.state.expanded_index = None
        elif expanded is not None and expanded > index:
            self.state.expanded_index = expanded - 1
        return True

    def toggle_expanded(self, index: int) -> None:
        if not 0 <= index < len(self.store):
            return
        self.state.expanded_index = None if self.state.expanded_index == index else index

    # -- views ----------------------------------------------------------

    def show_generator(self) -> None:
        self.state.view_mode = ViewMode.GENERATOR

    def show_saved(self) -> None:
        self.state.view_mode = ViewMode.SAVED
        self.state.expanded_index = None

    def recipe_cards(self) -> List[RecipeCard]:
        return [
            RecipeCard(recipe=recipe, is_saved=self.store.contains(recipe.recipeName))
            for recipe in self.state.recipes
        ]

    def saved_cards(self) -> List[SavedRecipeEntry]:
        return [
            SavedRecipeEntry(index=i, recipe=recipe, expanded=self.state.expanded_index == i)
            for i, recipe in enumerate(self.store.recipes)
        ]


def create_assistant(settings: Optional[AssistantSettings] = None) -> RecipeAssistant:
    """Wire up the assistant from environment settings and load saved recipes."""
    settings = settings or get_settings()
    llm = build_chat_model(settings)
    agent = RecipeAgent(
        llm,
        detailed=settings.detailed_recipes,
        json_hint=provider_needs_json_hint(settings),
    )
    store = SavedRecipeStore(JsonFileStorage(settings.storage_path))
    store.load()
    logger.info(
        "Recipe assistant ready (provider=%s, model=%s, %d saved recipe(s))",
        settings.provider, settings.model_name, len(store),
    )
    return RecipeAssistant(agent, store)
