from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from recipe_vision.config import AssistantSettings, PROVIDER_GOOGLE, PROVIDER_GROQ
from recipe_vision.errors import ConfigurationError
from recipe_vision.schema import recipe_response_schema

BASE_INSTRUCTION = (
    "Based on the ingredients in this image, suggest up to 3 simple recipes. "
    "For each recipe, provide the recipe name, a list of ingredients with quantities, "
    "and step-by-step instructions."
)

DETAILED_INSTRUCTION = (
    BASE_INSTRUCTION
    + " Also include the serving size and the estimated nutritional information "
    "per serving (calories, protein, carbohydrates and fats)."
)

JSON_ONLY_INSTRUCTION = (
    "Return ONLY a JSON array of recipe objects using the keys recipeName, "
    "ingredients, instructions{extra}. Do not include any extra explanation or markdown."
)


def recipe_instruction(detailed: bool = True, json_hint: bool = False) -> str:
    text = DETAILED_INSTRUCTION if detailed else BASE_INSTRUCTION
    if json_hint:
        extra = ", servingSize, nutritionalInfo" if detailed else ""
        text = f"{text}\n\n{JSON_ONLY_INSTRUCTION.format(extra=extra)}"
    return text


def build_recipe_message(image_b64: str, mime_type: str, instruction: str) -> HumanMessage:
    return HumanMessage(content=[
        {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_b64}"}},
        {"type": "text", "text": instruction},
    ])


def build_chat_model(settings: AssistantSettings) -> BaseChatModel:
    if not settings.api_key:
        raise ConfigurationError(f"No API key configured for provider '{settings.provider}'")

    if settings.provider == PROVIDER_GOOGLE:
        from langchain_google_genai import ChatGoogleGenerativeAI

        # Gemini constrains its output to the declared schema
        return ChatGoogleGenerativeAI(
            model=settings.model_name,
            google_api_key=settings.api_key,
            temperature=settings.temperature,
            response_mime_type="application/json",
            response_schema=recipe_response_schema(settings.detailed_recipes),
        )

    if settings.provider == PROVIDER_GROQ:
        from langchain_groq import ChatGroq

        return ChatGroq(
            api_key=settings.api_key,
            model=settings.model_name,
            temperature=settings.temperature,
        )

    raise ConfigurationError(f"Unknown LLM provider '{settings.provider}'")


def provider_needs_json_hint(settings: AssistantSettings) -> bool:
    # Only Gemini gets a response schema; other providers are told in the prompt
    return settings.provider != PROVIDER_GOOGLE
