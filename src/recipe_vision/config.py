import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from recipe_vision.errors import ConfigurationError

PROVIDER_GOOGLE = "google"
PROVIDER_GROQ = "groq"

DEFAULT_MODELS = {
    PROVIDER_GOOGLE: "gemini-2.5-flash",
    PROVIDER_GROQ: "meta-llama/llama-4-scout-17b-16e-instruct",
}

DEFAULT_STORAGE_PATH = Path.home() / ".recipe_vision" / "storage.json"
SAVED_RECIPES_KEY = "savedRecipes"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AssistantSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    provider: str = Field(PROVIDER_GOOGLE, validation_alias="RECIPE_LLM_PROVIDER")
    model_name: Optional[str] = Field(None, validation_alias="RECIPE_MODEL_NAME")
    google_api_key: Optional[str] = Field(None, validation_alias="GOOGLE_API_KEY")
    groq_api_key: Optional[str] = Field(None, validation_alias="GROQ_API_KEY")
    storage_path: Path = Field(DEFAULT_STORAGE_PATH, validation_alias="RECIPE_STORAGE_PATH")
    detailed_recipes: bool = Field(True, validation_alias="RECIPE_DETAILED")
    temperature: float = Field(0.4, validation_alias="RECIPE_TEMPERATURE")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("storage_path")
    @classmethod
    def expand_storage_path(cls, value: Path) -> Path:
        return value.expanduser()

    @model_validator(mode="after")
    def default_model_for_provider(self) -> "AssistantSettings":
        if not self.model_name:
            self.model_name = DEFAULT_MODELS.get(self.provider, DEFAULT_MODELS[PROVIDER_GOOGLE])
        return self

    @property
    def api_key(self) -> Optional[str]:
        if self.provider == PROVIDER_GROQ:
            return self.groq_api_key
        return self.google_api_key


def get_settings() -> AssistantSettings:
    try:
        return AssistantSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op once handlers exist, Streamlit re-runs the script on every interaction
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
