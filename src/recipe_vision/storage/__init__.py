from .local_storage import LocalStorage, MemoryStorage, JsonFileStorage
from .saved_recipes import SavedRecipeStore
__all__ = ["LocalStorage", "MemoryStorage", "JsonFileStorage", "SavedRecipeStore"]
