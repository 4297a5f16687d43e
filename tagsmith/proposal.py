from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .artists import ArtistList, join_featured
from .meta_keys import ALBUM, ALBUM_ARTIST, ARTIST, GENRE, TITLE, TRACK, YEAR
from .models import parse_edit_int
from .templates import (
    DEFAULT_FILENAME_TEMPLATE,
    DEFAULT_TITLE_TEMPLATE,
    TemplateValue,
    render_template,
    sanitize_filename,
)

logger = logging.getLogger(__name__)

TRACK_MAX = 0xFFFF
ARTIST_EDIT_SEPARATOR = ";"

TagEdit = Tuple[str, Optional[str]]


@dataclass(slots=True)
class TagProposal:
    """Extracted and edited tag values for one file, plus the derived title and filename.

    ``artist``, ``final_title`` and ``filename`` are recomputed by :meth:`update`
    and must not be edited directly; call ``update()`` after every change.
    """

    title: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[str] = None
    genre: Optional[str] = None
    remix: Optional[str] = None
    track: Optional[int] = None
    year: Optional[int] = None
    all_artists: ArtistList = field(default_factory=ArtistList)
    artist: Optional[str] = None
    final_title: Optional[str] = None
    filename: str = ""

    def feature(self, names: Iterable[str]) -> None:
        self.all_artists.extend(names)

    def update(
        self,
        title_template: str = DEFAULT_TITLE_TEMPLATE,
        filename_template: str = DEFAULT_FILENAME_TEMPLATE,
    ) -> None:
        self.artist = self.all_artists.primary
        fields = self.template_fields()
        self.final_title = render_template(title_template, fields) or None
        fields["title"] = self.final_title
        self.filename = sanitize_filename(render_template(filename_template, fields))

    def template_fields(self) -> Dict[str, TemplateValue]:
        return {
            "artist": self.all_artists.primary,
            "feat": join_featured(self.all_artists.featured),
            "title": self.title,
            "remix": self.remix,
            "year": self.year,
            "track": self.track,
            "album": self.album,
            "album_artist": self.album_artist,
            "genre": self.genre,
        }

    def set_year(self, value: str) -> bool:
        year = parse_edit_int(value)
        if year is None:
            return False
        self.year = year
        return True

    def set_track(self, value: str) -> bool:
        track = parse_edit_int(value)
        if track is None or not 0 <= track <= TRACK_MAX:
            return False
        self.track = track
        return True

    def apply_edits(self, edits: Iterable[TagEdit]) -> List[str]:
        """Apply sub-editor edits in order.

        A ``None`` value clears the tag. ``ARTIST`` replaces the whole artist
        list with the ``;``-separated names given. Invalid ``TRACK``/``YEAR``
        values keep the previous value; a message for each is returned.
        """
        messages: List[str] = []
        for name, value in edits:
            name = name.upper()
            if name == ARTIST:
                self.all_artists.clear()
                if value is not None:
                    self.feature(part.strip() for part in value.split(ARTIST_EDIT_SEPARATOR))
            elif name == ALBUM:
                self.album = value
            elif name == ALBUM_ARTIST:
                self.album_artist = value
            elif name == GENRE:
                self.genre = value
            elif name == TITLE:
                self.title = value
            elif name in (TRACK, YEAR):
                if value is None:
                    setattr(self, name.lower(), None)
                    continue
                setter = self.set_track if name == TRACK else self.set_year
                if not setter(value):
                    message = f"{name} is not a number: {value}, ignoring"
                    logger.warning(message)
                    messages.append(message)
            else:
                logger.debug("Ignoring edit for unsupported tag %s", name)
        return messages

    def tag_values(self) -> Dict[str, Optional[str]]:
        """Proposed values keyed by tag name, as shown in the diff and written to disk."""
        return {
            ARTIST: self.artist,
            TITLE: self.final_title,
            ALBUM: self.album,
            ALBUM_ARTIST: self.album_artist,
            GENRE: self.genre,
            TRACK: None if self.track is None else str(self.track),
            YEAR: None if self.year is None else str(self.year),
        }
