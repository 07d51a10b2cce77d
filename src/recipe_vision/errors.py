"""Exceptions raised by recipe_vision.

Generation failures are collapsed into one user-facing message, but the
internal cause is kept on the exception so callers and tests can tell a
network error from a malformed response.
"""

from enum import Enum

NO_IMAGE_MESSAGE = "Please upload an image first."
GENERATION_FAILED_MESSAGE = (
    "Failed to generate recipes. The model may be unable to identify "
    "ingredients or the image is unclear. Please try another image."
)


class RecipeVisionError(Exception):
    """Base class for all recipe_vision errors."""


class ConfigurationError(RecipeVisionError):
    """Missing or invalid settings."""


class ImageReadError(RecipeVisionError):
    """The selected image could not be read."""


class ImageRequiredError(RecipeVisionError):
    """Generation was requested with no image selected."""

    user_message = NO_IMAGE_MESSAGE

    def __init__(self, message: str = NO_IMAGE_MESSAGE):
        super().__init__(message)


class GenerationFailureCause(str, Enum):
    ENCODING = "encoding"
    SERVICE = "service"
    EMPTY_RESPONSE = "empty_response"
    PARSE = "parse"
    SCHEMA = "schema"


class RecipeGenerationError(RecipeVisionError):
    """Any failure between encoding the image and validating the parsed recipes."""

    user_message = GENERATION_FAILED_MESSAGE

    def __init__(self, cause: GenerationFailureCause, detail: str = ""):
        self.cause = cause
        self.detail = detail
        super().__init__(f"{cause.value}: {detail}" if detail else cause.value)
