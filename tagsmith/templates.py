from __future__ import annotations

import re
from typing import Mapping, Optional, Union

from .text_cleanup import collapse_whitespace, remove_empty_bracket_pairs

DEFAULT_TITLE_TEMPLATE = "{title} ({feat}) [{remix}]"
DEFAULT_FILENAME_TEMPLATE = "{artist} - {title}"

TEMPLATE_TOKENS = (
    "artist",
    "feat",
    "title",
    "remix",
    "year",
    "track",
    "album",
    "album_artist",
    "genre",
)

PATH_SEPARATORS = re.compile(r"[\\/]+")
ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')

TemplateValue = Optional[Union[str, int]]


def render_template(template: str, fields: Mapping[str, TemplateValue]) -> str:
    """Substitute ``{token}`` placeholders and tidy up what empty fields leave behind.

    Unknown tokens are left alone. Unset fields render as the empty string,
    which can leave ``()``/``[]`` artifacts and double spaces; both are
    cleaned after substitution, in that order.
    """
    rendered = template
    for token in TEMPLATE_TOKENS:
        placeholder = "{" + token + "}"
        if placeholder in rendered:
            rendered = rendered.replace(placeholder, _stringify(fields.get(token)))
    rendered = remove_empty_bracket_pairs(rendered)
    rendered = collapse_whitespace(rendered)
    return rendered.strip()


def sanitize_filename(name: str) -> str:
    cleaned = PATH_SEPARATORS.sub("-", name)
    cleaned = ILLEGAL_FILENAME_CHARS.sub("", cleaned)
    return collapse_whitespace(cleaned).strip()


def _stringify(value: TemplateValue) -> str:
    if value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    return value
