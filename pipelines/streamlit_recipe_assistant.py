import logging

import streamlit as st

from recipe_vision.agents import load_image
from recipe_vision.assistant import RecipeAssistant, create_assistant
from recipe_vision.config import configure_logging, get_settings
from recipe_vision.errors import ConfigurationError, ImageReadError
from recipe_vision.presentation import format_recipe_markdown, save_button_label
from recipe_vision.schema import ViewMode

logger = logging.getLogger("recipe_vision.streamlit")

IMAGE_TYPES = ["png", "jpg", "jpeg", "webp", "gif", "heic"]

# One assistant per browser session; saved recipes are loaded once here
if "assistant" not in st.session_state:
    try:
        settings = get_settings()
        configure_logging(settings.log_level)
        st.session_state.assistant = create_assistant(settings)
    except ConfigurationError as exc:
        st.error(f"⚠️ {exc}. Fix it in your environment or a .env file.")
        st.stop()

assistant: RecipeAssistant = st.session_state.assistant


def on_image_change():
    uploaded = st.session_state.get("uploaded_image")
    if uploaded is None:
        return
    try:
        assistant.select_image(load_image(uploaded))
    except ImageReadError as exc:
        logger.warning("Could not read uploaded image: %s", exc)
        assistant.reject_image("Could not read that image. Please choose another file.")


def render_generator():
    st.file_uploader(
        "📸 Choose an Image",
        type=IMAGE_TYPES,
        key="uploaded_image",
        on_change=on_image_change,
    )

    image = assistant.state.selected_image
    if image is not None:
        st.image(image.data, caption="Ingredients preview", use_container_width=True)

    if st.button("Find Recipes", disabled=not assistant.can_generate, type="primary"):
        with st.spinner("⏳ Generating... Looking at your ingredients!"):
            assistant.generate()

    state = assistant.state
    if state.error:
        st.error(state.error)

    for i, card in enumerate(assistant.recipe_cards()):
        with st.container(border=True):
            st.subheader(f"🍲 {card.recipe.recipeName}")
            st.markdown(format_recipe_markdown(card.recipe))
            st.button(
                save_button_label(card.is_saved),
                key=f"save_{i}",
                disabled=card.is_saved,
                on_click=assistant.save_recipe,
                args=(card.recipe,),
            )


def render_saved():
    entries = assistant.saved_cards()
    if not entries:
        st.info("You have no saved recipes yet. Generate some and save your favorites!")
        return

    for entry in entries:
        with st.container(border=True):
            name_col, delete_col = st.columns([5, 1])
            arrow = "▾" if entry.expanded else "▸"
            name_col.button(
                f"{arrow} {entry.recipe.recipeName}",
                key=f"expand_{entry.index}",
                on_click=assistant.toggle_expanded,
                args=(entry.index,),
            )
            delete_col.button(
                "🗑️",
                key=f"delete_{entry.index}",
                help="Delete this recipe",
                on_click=assistant.delete_saved_recipe,
                args=(entry.index,),
            )
            if entry.expanded:
                st.markdown(format_recipe_markdown(entry.recipe))


# Streamlit UI
st.title("👩‍🍳 Visual Recipe Assistant")
st.write("Upload a photo of your ingredients and get instant recipe ideas!")

generator_col, saved_col = st.columns(2)
generator_col.button(
    "🔍 Recipe Generator",
    on_click=assistant.show_generator,
    disabled=assistant.state.view_mode == ViewMode.GENERATOR,
    use_container_width=True,
)
saved_col.button(
    f"⭐ Saved Recipes ({len(assistant.store)})",
    on_click=assistant.show_saved,
    disabled=assistant.state.view_mode == ViewMode.SAVED,
    use_container_width=True,
)

if assistant.state.view_mode == ViewMode.SAVED:
    render_saved()
else:
    render_generator()
