"""Heuristic extraction of tags from free-form upload titles.

Parsing runs in two stages. The first title format that matches the whole
string splits off the artists (and a genre or track number where the layout
carries one). The catch-all pattern then walks the remaining title and
removes decorations such as featuring clauses, years, remix labels and
video/audio noise, keeping the useful ones as tags.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .artists import separate_artists
from .proposal import TagProposal
from .text_cleanup import collapse_whitespace, remove_brackets, remove_substring

logger = logging.getLogger(__name__)

GENRE_FORMAT = re.compile(
    r"^\s*「(?P<genre>[^」]*)」\s*\[(?P<artists>[^\]]*)\]\s*(?P<title>.+?)\s*$"
)
QUOTED_FORMAT = re.compile(
    r"^\s*(?P<artists>[^'‘’]+?)\s+['‘](?P<title>[^'‘’]+)['’](?P<extra>.*)$"
)
SEPARATOR_FORMAT = re.compile(
    r"^\s*(?:(?P<track>\d+\.)\s*)?(?P<artists>.+?)\s*[-_~｜]\s*(?P<title>.+?)\s*$"
)

_OPEN = r"[\[({<【]"
_CLOSE = r"[\])}>】]"
_INNER = r"[^\[\](){}<>【】]*"

CATCH_ALL = re.compile(
    r"""
    (?P<feat>
        OPEN \s* (?:and\b|featuring\b|feat\b\.?|ft\b\.?|w/) INNER CLOSE
        | (?:\b(?:featuring|feat|ft)\b\.?|\bw/) [^\[\](){}<>【】]+
    )
    | (?P<year> \(\d{4}\) | \b\d{4}\b )
    | (?P<remix>
        OPEN INNER
        (?:cut|edit|extend(?:ed)?(?:\smix)?|(?:re)?mix|remaster|bootleg|instrumental)
        INNER CLOSE
    )
    | (?P<album> OPEN INNER (?-i:F[^A-Za-z]C) INNER CLOSE )
    | (?P<strip>
        OPEN INNER
        (?:full\sversion|(?:official\s)?(?:(?:music\s)?video|audio)|\bm/?v\b|\bhq\b|\bhd\b)
        INNER CLOSE
    )
    """.replace("OPEN", _OPEN)
    .replace("INNER", _INNER)
    .replace("CLOSE", _CLOSE),
    re.IGNORECASE | re.VERBOSE,
)

LEADING_CONNECTOR = re.compile(r"^(?:and\b|featuring\b|feat\b\.?|ft\b\.?|w[/⧸])\s*", re.IGNORECASE)
ALBUM_MARKER = re.compile(r"F[^A-Za-z]C")
NOISE_REMIX = "original mix"


@dataclass(frozen=True, slots=True)
class FormatMatch:
    title: str
    artists: Optional[str] = None
    genre: Optional[str] = None
    track: Optional[str] = None


@dataclass(slots=True)
class Decorations:
    title: str
    artists: List[str] = field(default_factory=list)
    year: Optional[str] = None
    remix: Optional[str] = None
    album: Optional[str] = None


def match_genre_format(text: str) -> Optional[FormatMatch]:
    """``「genre」[artists] title``"""
    match = GENRE_FORMAT.match(text)
    if not match:
        return None
    return FormatMatch(
        title=match.group("title"),
        artists=match.group("artists"),
        genre=match.group("genre").strip() or None,
    )


def match_quoted_format(text: str) -> Optional[FormatMatch]:
    """``artists 'title' extra``, straight or curly quotes."""
    match = QUOTED_FORMAT.match(text)
    if not match:
        return None
    title = match.group("title").strip()
    extra = match.group("extra").strip()
    if extra:
        title = f"{title} {extra}"
    return FormatMatch(title=title, artists=match.group("artists"))


def match_separator_format(text: str) -> Optional[FormatMatch]:
    """``NN. artists - title`` with ``-``, ``_``, ``~`` or ``｜`` as separator."""
    match = SEPARATOR_FORMAT.match(text)
    if not match:
        return None
    return FormatMatch(
        title=match.group("title"),
        artists=match.group("artists"),
        track=match.group("track"),
    )


TITLE_FORMATS: Tuple[Callable[[str], Optional[FormatMatch]], ...] = (
    match_genre_format,
    match_quoted_format,
    match_separator_format,
)


def match_title_format(text: str) -> Optional[FormatMatch]:
    for matcher in TITLE_FORMATS:
        found = matcher(text)
        if found is not None:
            logger.debug("%s matched %r: %s", matcher.__name__, text, found)
            return found
    return None


def extract_decorations(text: str) -> Decorations:
    """Strip every catch-all match from ``text``.

    Matches are found on ``text`` as given, but each one is removed from the
    running result, so a span already removed by an earlier match is simply
    absent by the time a later one is removed.
    """
    result = Decorations(title=text.strip())
    for match in CATCH_ALL.finditer(text):
        kind = match.lastgroup
        if kind is None:
            continue
        value = match.group(kind)
        result.title = remove_substring(result.title, value)
        if kind == "feat":
            names = LEADING_CONNECTOR.sub("", remove_brackets(value))
            result.artists.extend(separate_artists(names))
        elif kind == "year":
            result.year = remove_brackets(value)
        elif kind == "remix":
            remix = remove_brackets(value)
            if remix.lower() != NOISE_REMIX:
                result.remix = remix
        elif kind == "album":
            album = collapse_whitespace(ALBUM_MARKER.sub("", remove_brackets(value))).strip()
            result.album = album or None
        logger.debug("Catch-all %s: %r", kind, value)
    result.title = collapse_whitespace(result.title).strip()
    return result


def parse_title(text: Optional[str], proposal: Optional[TagProposal] = None) -> Optional[TagProposal]:
    """Build a tag proposal from a title such as ``"Artist ft. Band - Song (2024)"``.

    Returns ``None`` for an empty title. When ``proposal`` is given (for
    example pre-seeded with the file's existing artist) it is filled in and
    returned instead of a fresh one.
    """
    if not text or not text.strip():
        return None
    if proposal is None:
        proposal = TagProposal()
    logger.debug("Parsing: %s", text)

    working = text.strip()
    found = match_title_format(working)
    if found is not None:
        if found.genre:
            proposal.genre = found.genre
        if found.track is not None and not proposal.set_track(found.track.rstrip(".")):
            logger.debug("Discarding track prefix %r", found.track)
        if found.artists:
            proposal.feature(separate_artists(found.artists))
        working = found.title.strip()

    decorations = extract_decorations(working)
    proposal.feature(decorations.artists)
    if decorations.year is not None and not proposal.set_year(decorations.year):
        logger.warning("year is not a number: %s, discarding", decorations.year)
    if decorations.remix:
        proposal.remix = decorations.remix
    if decorations.album:
        proposal.album = decorations.album
    proposal.title = decorations.title or None
    logger.debug("Got tags: %s", proposal)
    return proposal
