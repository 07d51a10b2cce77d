import json
import logging
from typing import List, Tuple

from pydantic import TypeAdapter, ValidationError

from recipe_vision.config import SAVED_RECIPES_KEY
from recipe_vision.schema import Recipe
from recipe_vision.storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)

_recipe_list = TypeAdapter(List[Recipe])


class SavedRecipeStore:
    """The user's saved recipes, kept in durable storage under one key.

    Recipe names are unique within the store; saving a name that is already
    present is ignored (first write wins). Every mutation rewrites the whole
    list.
    """

    def __init__(self, storage: LocalStorage, key: str = SAVED_RECIPES_KEY):
        self.storage = storage
        self.key = key
        self._recipes: List[Recipe] = []

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return tuple(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self):
        return iter(self.recipes)

    def contains(self, recipe_name: str) -> bool:
        return any(r.recipeName == recipe_name for r in self._recipes)

    def load(self) -> Tuple[Recipe, ...]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            self._recipes = []
            return self.recipes

        try:
            self._recipes = _recipe_list.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Discarding corrupt saved recipes under '%s': %s", self.key, exc)
            self._recipes = []
            self.storage.remove_item(self.key)
        else:
            logger.debug("Loaded %d saved recipe(s)", len(self._recipes))
        return self.recipes

    def _persist(self) -> None:
        payload = json.dumps([r.to_storage_dict() for r in self._recipes], ensure_ascii=False)
        self.storage.set_item(self.key, payload)

    def save(self, recipe: Recipe) -> bool:
        if self.contains(recipe.recipeName):
            logger.debug("Recipe '%s' already saved, ignoring", recipe.recipeName)
            return False
        self._recipes.append(recipe)
        self._persist()
        logger.info("Saved recipe '%s'", recipe.recipeName)
        return True

    def delete(self, index: int) -> bool:
        if not 0 <= index < len(self._recipes):
            logger.debug("Ignoring delete of out-of-range index %s", index)
            return False
        removed = self._recipes.pop(index)
        self._persist()
        logger.info("Deleted saved recipe '%s'", removed.recipeName)
        return True
