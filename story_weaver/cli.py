import logging
import textwrap
from typing import Optional

from story_weaver.core.models import ARC_TYPES, THEMES
from story_weaver.core.settings import configure_logging
from story_weaver.services.story_backend import OllamaStoryBackend
from story_weaver.services.story_controller import StoryController

logger = logging.getLogger(__name__)

def print_ascii_art():
    """Print ASCII art for the title."""
    art = r"""
 ___  _                   __        __
/ __|| |_  ___  _ _  _  _ \ \      / /___  __ _ __ __ ___  _ _
\__ \|  _|/ _ \| '_|| || | \ \ /\ / // -_)/ _` |\ V // -_)| '_|
|___/ \__|\___/|_|   \_, |  \_/  \_/ \___|\__,_| \_/ \___||_|
                     |__/
    """
    print(art)

def print_snippet(text: str):
    for para in text.split("\n"):
        print(textwrap.fill(para, width=88) if para.strip() else "")
    print()

def pick_from(label: str, options, current):
    """Numbered picker; empty or invalid input keeps the current value."""
    print(f"{label} (current: {current})")
    for i, opt in enumerate(options, start=1):
        print(f"{i}. {opt}")
    raw = input("Enter a number: ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(options):
        return options[int(raw) - 1]
    print("Keeping current selection.")
    return current

def play_story(ctrl: StoryController):
    """Run one story from seed to THE END (or until the player quits)."""
    state = ctrl.start_story()
    if ctrl.error:
        print(f"Error: {ctrl.error}")
        return
    shown = 0
    while True:
        state = ctrl.state
        for snippet in state.snippets[shown:]:
            print_snippet(snippet)
        shown = len(state.snippets)
        if ctrl.error:
            print(f"Error: {ctrl.error}\n")
        if state.complete:
            print("The story has reached its conclusion.\n")
            return
        print(f"--- {state.phase.title()} · {state.progress_percent}% ---")
        for i, choice in enumerate(state.choices, start=1):
            print(f"{i}. {choice}")
        print("q. Quit story")
        raw = input("What will you do? ").strip()
        if raw.lower() == "q":
            ctrl.reset_story()
            return
        if raw.isdigit() and 1 <= int(raw) <= len(state.choices):
            ctrl.choose_option(state.choices[int(raw) - 1])
        else:
            print("Invalid choice. Try again!")

def main(ctrl: Optional[StoryController] = None):
    """Main menu for console play."""
    configure_logging()
    if ctrl is None:
        ctrl = StoryController(OllamaStoryBackend())
    while True:
        print_ascii_art()
        print("Welcome to Story Weaver!")
        print(f"Theme: {ctrl.state.theme}   Arc: {ctrl.state.arc_type}")
        print("1. Start New Story")
        print("2. Choose Theme")
        print("3. Choose Story Arc")
        print("4. Quit")
        choice = input("Enter your choice: ").strip()

        if choice == "1":
            ctrl.reset_story()
            play_story(ctrl)
        elif choice == "2":
            ctrl.select_theme(pick_from("Theme", THEMES, ctrl.state.theme))
        elif choice == "3":
            ctrl.select_arc_type(pick_from("Story arc", ARC_TYPES, ctrl.state.arc_type))
        elif choice == "4":
            break
        else:
            print("Invalid choice. Try again!")

if __name__ == "__main__":
    main()
