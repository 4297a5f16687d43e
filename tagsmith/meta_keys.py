from __future__ import annotations

# Tag names as typed in the sub-editor and shown in the proposal diff.

ARTIST = "ARTIST"
ALBUM = "ALBUM"
ALBUM_ARTIST = "ALBUM_ARTIST"
GENRE = "GENRE"
TITLE = "TITLE"
TRACK = "TRACK"
YEAR = "YEAR"
FILENAME = "FILENAME"

EDITABLE_TAGS = (ARTIST, ALBUM, ALBUM_ARTIST, GENRE, TITLE, TRACK, YEAR)

# Diff order, most significant first.
DIFF_ORDER = (ARTIST, TITLE, ALBUM, ALBUM_ARTIST, GENRE, TRACK, YEAR)
