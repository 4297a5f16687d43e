from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from .meta_keys import EDITABLE_TAGS
from .prompt_io import PromptIO
from .proposal import TagEdit

EDITOR_PROMPT = "edit> "


class PromptOption(str, Enum):
    NO = "n"
    YES = "y"
    EDIT = "e"
    YES_TO_ALL = "a"

    @property
    def label(self) -> str:
        return _OPTION_LABELS[self]


_OPTION_LABELS = {
    PromptOption.NO: "No",
    PromptOption.YES: "Yes",
    PromptOption.EDIT: "Edit",
    PromptOption.YES_TO_ALL: "yes to All",
}


def format_choice_line(prompt: str, options: Sequence[PromptOption], default: PromptOption) -> str:
    keys = "/".join(opt.value.upper() if opt is default else opt.value for opt in options)
    labels = ", ".join(opt.label for opt in options)
    return f"{prompt} {keys} ({labels})"


def select(
    prompt_io: PromptIO,
    prompt: str,
    options: Sequence[PromptOption],
    default: PromptOption,
) -> PromptOption:
    """Ask until one of ``options`` is chosen by its first letter; Enter picks ``default``."""
    if not options:
        raise ValueError("select() needs at least one option")
    if default not in options:
        raise ValueError(f"Default {default!r} is not one of the options")
    line = format_choice_line(prompt, options, default)
    while True:
        prompt_io.print(line)
        choice = prompt_io.input("> ").strip().lower()
        if not choice:
            return default
        for option in options:
            if choice[0] == option.value:
                return option
        prompt_io.print("Invalid option. Please try again")


def parse_edit_command(command: str) -> Optional[TagEdit]:
    name, _, value = command.strip().partition(" ")
    name = name.upper()
    if name not in EDITABLE_TAGS:
        return None
    value = value.strip()
    return name, value or None


def edit_tags(prompt_io: PromptIO) -> List[TagEdit]:
    """Collect ``(TAG, value)`` edits until ``quit``; a ``None`` value means clear."""
    prompt_io.print(f"{EDITOR_PROMPT}===== Tag Editor =====")
    print_editor_help(prompt_io)
    edits: List[TagEdit] = []
    while True:
        command = prompt_io.input(f"{EDITOR_PROMPT}?: ").strip()
        lowered = command.lower()
        if lowered in {"quit", "q"}:
            break
        if lowered in {"help", "h"}:
            print_editor_help(prompt_io)
            continue
        edit = parse_edit_command(command)
        if edit is None:
            prompt_io.print(f"{EDITOR_PROMPT}Unknown command, try 'help'")
            continue
        edits.append(edit)
    return edits


def print_editor_help(prompt_io: PromptIO) -> None:
    lines = [
        "Commands:",
        "    quit, q         Go back to the proposed changes",
        "    help, h         Show this help menu",
        "    TAG             Clear TAG value",
        "    TAG VALUE       Set TAG to VALUE (ARTIST may have multiple with ';'),"
        " e.g.: `ARTIST The Band;Singer`, `ARTIST Rapper`",
        "Supported tags (lowercase also allowed):",
        "    " + ", ".join(EDITABLE_TAGS),
    ]
    for line in lines:
        prompt_io.print(f"{EDITOR_PROMPT}{line}")
