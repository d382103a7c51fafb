import os, sys, logging, time
import streamlit as st

# ensure project root
sys.path.append(os.path.abspath(os.path.join(__file__, "..", "..", "..")))

from story_weaver.core.models import ARC_TYPES, THEMES
from story_weaver.core.settings import settings, configure_logging
from story_weaver.services.ollama_client import ollama_client
from story_weaver.services.story_backend import OllamaStoryBackend
from story_weaver.services.story_controller import StoryController

configure_logging()
logger = logging.getLogger(__name__)
st.set_page_config(page_title="Story Weaver", page_icon="📖", layout="centered")

DARK_CSS = """
<style>
    .stApp { color: #e0e0e0; background-color: #14141f; }
    .stButton>button { color: #f5f5f5; background-color: #2a2a4e; border: 1px solid #6c6ca8; }
    .stMarkdown, .stCaption, label { color: #e0e0e0 !important; }
</style>
"""
LIGHT_CSS = """
<style>
    .stApp { color: #1a1a1a; background-color: #fafafa; }
</style>
"""

def apply_display_mode(dark: bool):
    st.markdown(DARK_CSS if dark else LIGHT_CSS, unsafe_allow_html=True)

def _typewriter(text: str):
    for ch in text:
        yield ch
        time.sleep(settings.typewriter_delay)

def display_transcript(snippets, revealed: int) -> int:
    """
    Render the transcript; the newest unseen snippet is typed out once.
    Returns how many snippets have now been revealed.
    """
    box = st.container(height=400, border=True)
    with box:
        for i, snippet in enumerate(snippets):
            if i >= revealed and i == len(snippets) - 1 and settings.typewriter_delay > 0:
                st.write_stream(_typewriter(snippet))
            elif snippet.startswith("You chose:"):
                st.markdown(f"*{snippet}*")
            else:
                st.markdown(snippet)
    return len(snippets)

def display_progress(state):
    label = "Complete" if state.complete else state.phase.title()
    st.progress(state.progress_percent / 100, text=f"{label} · {state.progress_percent}%")

def get_controller() -> StoryController:
    if "controller" not in st.session_state:
        st.session_state.controller = StoryController(OllamaStoryBackend(ollama_client))
        st.session_state.revealed = 0
    return st.session_state.controller

def on_choice(choice: str):
    get_controller().choose_option(choice)

def on_new_story():
    get_controller().reset_story()
    st.session_state.revealed = 0

def main():
    ctrl = get_controller()

    st.sidebar.title("Story Weaver Settings")
    st.sidebar.write(f"- **Ollama Host:** `{settings.ollama_host}`")
    st.sidebar.write(f"- **Model:** `{settings.ollama_model}`")
    dark = st.sidebar.toggle("🌙 Dark mode", key="dark_mode")
    apply_display_mode(dark)
    if st.sidebar.button("Check model server"):
        if ollama_client.is_available():
            st.sidebar.success("Ollama is reachable.")
        else:
            st.sidebar.error("Ollama is not reachable.")

    st.title("📖 Story Weaver")
    st.caption("Create your own adventure with AI.")

    col_theme, col_arc = st.columns(2)
    theme = col_theme.selectbox(
        "Select Theme", THEMES, index=THEMES.index(ctrl.state.theme),
        format_func=str.capitalize, disabled=ctrl.loading,
    )
    arc_index = ARC_TYPES.index(ctrl.state.arc_type) if ctrl.state.arc_type in ARC_TYPES else 0
    arc_type = col_arc.selectbox(
        "Story Arc", ARC_TYPES, index=arc_index,
        format_func=lambda a: a.replace("-", " ").title(), disabled=ctrl.loading,
    )
    if theme != ctrl.state.theme or arc_type != ctrl.state.arc_type:
        ctrl.change_story(theme, arc_type)
        st.session_state.revealed = 0

    if not ctrl.initialized and not ctrl.error:
        with st.spinner("Generating story..."):
            ctrl.start_story()

    state = ctrl.state
    if ctrl.error:
        st.error(ctrl.error)
        if not ctrl.initialized and st.button("🔁 Try again"):
            ctrl.error = None
            st.rerun()

    display_progress(state)
    st.session_state.revealed = display_transcript(state.snippets, st.session_state.revealed)

    if state.choices:
        cols = st.columns(len(state.choices))
        for i, (col, choice) in enumerate(zip(cols, state.choices)):
            col.button(
                choice, key=f"choice_{state.choices_made}_{i}",
                on_click=on_choice, args=(choice,), disabled=ctrl.loading,
                use_container_width=True,
            )
    elif state.complete:
        st.info("The story has reached its conclusion.")

    st.button("✨ New story", on_click=on_new_story, disabled=ctrl.loading)

if __name__ == "__main__":
    main()
