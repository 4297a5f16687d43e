from __future__ import annotations

import re

OPENING_BRACKETS = ("(", "[", "{", "<", "【")
CLOSING_BRACKETS = (")", "]", "}", ">", "】")

EMPTY_BRACKET_PAIR = re.compile(r"\(\s*\)|\[\s*\]|\{\s*\}|<\s*>")


def remove_substring(text: str, needle: str) -> str:
    """Remove every occurrence of ``needle`` from ``text`` and trim the result."""
    if needle:
        text = text.replace(needle, "")
    return text.strip()


def remove_brackets(text: str) -> str:
    """Strip at most one bracket from each outer edge.

    >>> remove_brackets("[hard remix]")
    'hard remix'
    """
    text = text.strip()
    if text.startswith(OPENING_BRACKETS):
        text = text[1:]
    if text.endswith(CLOSING_BRACKETS):
        text = text[:-1]
    return text.strip()


def remove_empty_bracket_pairs(text: str) -> str:
    # Removing "<>" from "(<>)" exposes "()", so rescan until stable.
    while True:
        cleaned = EMPTY_BRACKET_PAIR.sub("", text, count=1)
        if cleaned == text:
            return cleaned
        text = cleaned


def collapse_whitespace(text: str) -> str:
    while "  " in text:
        text = text.replace("  ", " ")
    return text
