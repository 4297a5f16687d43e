from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .meta_keys import ALBUM, ALBUM_ARTIST, ARTIST, GENRE, TITLE, TRACK, YEAR


@dataclass(frozen=True, slots=True)
class ExistingTags:
    """Read-only view of the tags already stored in an audio file."""

    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    track: Optional[int] = None

    def tag_values(self) -> Dict[str, Optional[str]]:
        return {
            ARTIST: self.artist,
            TITLE: self.title,
            ALBUM: self.album,
            ALBUM_ARTIST: self.album_artist,
            GENRE: self.genre,
            TRACK: None if self.track is None else str(self.track),
            YEAR: None if self.year is None else str(self.year),
        }


class ProcessingError(Exception):
    """Raised when a file cannot be processed but the batch should keep running."""


class PersistError(ProcessingError):
    """Writing tags or renaming an accepted file failed."""


def parse_int(value: object) -> Optional[int]:
    """Leading integer of a tag value such as ``"03/12"`` or ``"2024-05-01"``."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    cleaned = str(value).strip()
    for sep in ("/", "-"):
        if sep in cleaned:
            cleaned = cleaned.split(sep, 1)[0].strip()
    if cleaned.isdigit():
        return int(cleaned)
    return None


def parse_edit_int(value: object) -> Optional[int]:
    """Integer typed in the editor; unlike :func:`parse_int` the whole value must be a number."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None
