import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from recipe_vision.agents import RecipeAgent
from recipe_vision.schema import NutritionalInfo, Recipe, SelectedImage
from recipe_vision.storage import MemoryStorage, SavedRecipeStore

SETTINGS_ENV_VARS = [
    "RECIPE_LLM_PROVIDER", "RECIPE_MODEL_NAME", "GOOGLE_API_KEY", "GROQ_API_KEY",
    "RECIPE_STORAGE_PATH", "RECIPE_DETAILED", "RECIPE_TEMPERATURE", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep real API keys and any local .env file out of the settings under test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def image() -> SelectedImage:
    return SelectedImage(name="fridge.png", mime_type="image/png", data=b"\x89PNG\r\n\x1a\nfake-image-bytes")


@pytest.fixture
def tomato_soup() -> Recipe:
    return Recipe(recipeName="Tomato Soup", ingredients=["tomato", "salt"], instructions=["boil", "blend"])


@pytest.fixture
def detailed_recipe_dicts() -> list:
    return [
        {
            "recipeName": "Shakshuka",
            "ingredients": ["4 eggs", "400g canned tomatoes", "1 onion"],
            "instructions": ["Soften the onion.", "Add tomatoes and simmer.", "Crack in the eggs and cover."],
            "servingSize": "2 servings",
            "nutritionalInfo": {"calories": "320 kcal", "protein": "18 g", "carbohydrates": "20 g", "fats": "19 g"},
        },
        {
            "recipeName": "Tomato Omelette",
            "ingredients": ["3 eggs", "1 tomato"],
            "instructions": ["Whisk the eggs.", "Cook with sliced tomato."],
            "servingSize": "1 serving",
            "nutritionalInfo": {"calories": "250 kcal", "protein": "19 g", "carbohydrates": "5 g", "fats": "17 g"},
        },
    ]


@pytest.fixture
def detailed_recipes(detailed_recipe_dicts) -> list:
    return [Recipe.model_validate(d) for d in detailed_recipe_dicts]


@pytest.fixture
def fake_llm(detailed_recipe_dicts) -> FakeListChatModel:
    return FakeListChatModel(responses=[json.dumps(detailed_recipe_dicts)])


@pytest.fixture
def agent(fake_llm) -> RecipeAgent:
    return RecipeAgent(fake_llm, detailed=True)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> SavedRecipeStore:
    store = SavedRecipeStore(storage)
    store.load()
    return store


@pytest.fixture
def nutrition() -> NutritionalInfo:
    return NutritionalInfo(calories="100 kcal", protein="1 g", carbohydrates="20 g", fats="0 g")
