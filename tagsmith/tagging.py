from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from mutagen import MutagenError
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError, TALB, TCON, TDRC, TIT2, TPE1, TPE2, TRCK
from mutagen.mp4 import MP4

from .models import ExistingTags, PersistError, parse_int
from .proposal import TagProposal

logger = logging.getLogger(__name__)


class TagStore(Protocol):
    def read(self, path: Path) -> Optional[ExistingTags]: ...

    def write(self, path: Path, proposal: TagProposal) -> None: ...


class TagWriter:
    """Handles reading/writing tags across the most common tagging formats."""

    SUPPORTED_EXTS = {".mp3", ".flac", ".m4a"}

    def read(self, path: Path) -> Optional[ExistingTags]:
        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_EXTS:
            logger.debug("Skipping unsupported extension %s", path)
            return None
        try:
            if ext == ".mp3":
                return self._read_mp3(path)
            if ext == ".flac":
                return self._read_flac(path)
            return self._read_mp4(path)
        except (MutagenError, OSError) as exc:
            logger.warning("Failed to read tags for %s: %s", path, exc)
            return None

    def write(self, path: Path, proposal: TagProposal) -> None:
        handlers = {
            ".mp3": self._apply_mp3,
            ".flac": self._apply_flac,
            ".m4a": self._apply_mp4,
        }
        handler = handlers.get(path.suffix.lower())
        if not handler:
            raise PersistError(f"Unsupported extension for tag writing: {path.name}")
        try:
            handler(path, proposal)
        except (MutagenError, OSError) as exc:
            raise PersistError(f"Failed to write tags to {path}: {exc}") from exc

    @staticmethod
    def desired_map(proposal: TagProposal) -> Dict[str, str]:
        # Unset fields are left as they are in the file.
        mapping = {
            "title": proposal.final_title,
            "artist": proposal.artist,
            "album": proposal.album,
            "album_artist": proposal.album_artist,
            "genre": proposal.genre,
            "tracknumber": None if proposal.track is None else str(proposal.track),
            "date": None if proposal.year is None else str(proposal.year),
        }
        return {k: v for k, v in mapping.items() if v}

    def _read_mp3(self, path: Path) -> ExistingTags:
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            return ExistingTags()
        return ExistingTags(
            title=self._id3_text(tags, "TIT2"),
            artist=self._id3_text(tags, "TPE1"),
            album=self._id3_text(tags, "TALB"),
            album_artist=self._id3_text(tags, "TPE2"),
            genre=self._id3_text(tags, "TCON"),
            track=parse_int(self._id3_text(tags, "TRCK")),
            year=parse_int(self._id3_text(tags, "TDRC") or self._id3_text(tags, "TYER")),
        )

    def _read_flac(self, path: Path) -> ExistingTags:
        audio = FLAC(path)
        return ExistingTags(
            title=audio.get("TITLE", [None])[0],
            artist=audio.get("ARTIST", [None])[0],
            album=audio.get("ALBUM", [None])[0],
            album_artist=audio.get("ALBUMARTIST", [None])[0],
            genre=audio.get("GENRE", [None])[0],
            track=parse_int(audio.get("TRACKNUMBER", [None])[0]),
            year=parse_int(audio.get("DATE", [None])[0] or audio.get("YEAR", [None])[0]),
        )

    def _read_mp4(self, path: Path) -> ExistingTags:
        audio = MP4(path)
        track_number = None
        track_info = audio.get("trkn")
        if track_info and isinstance(track_info, list):
            first = track_info[0]
            if isinstance(first, (tuple, list)) and first:
                track_number = first[0]
        return ExistingTags(
            title=self._mp4_text(audio, "\xa9nam"),
            artist=self._mp4_text(audio, "\xa9ART"),
            album=self._mp4_text(audio, "\xa9alb"),
            album_artist=self._mp4_text(audio, "aART"),
            genre=self._mp4_text(audio, "\xa9gen"),
            track=parse_int(track_number),
            year=parse_int(self._mp4_text(audio, "\xa9day")),
        )

    def _id3_text(self, tags: ID3, frame_id: str) -> Optional[str]:
        frame = tags.getall(frame_id)
        if not frame:
            return None
        return str(frame[0].text[0]) if frame[0].text else None

    def _mp4_text(self, audio: MP4, key: str) -> Optional[str]:
        value = audio.get(key)
        if not value:
            return None
        first = value[0]
        if isinstance(first, bytes):
            return first.decode("utf-8", errors="replace")
        return str(first)

    def _apply_mp3(self, path: Path, proposal: TagProposal) -> None:
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            tags = ID3()
        desired = self.desired_map(proposal)
        frames = {
            "title": TIT2,
            "artist": TPE1,
            "album": TALB,
            "album_artist": TPE2,
            "genre": TCON,
            "tracknumber": TRCK,
            "date": TDRC,
        }
        for key, frame_cls in frames.items():
            value = desired.get(key)
            if value:
                tags.setall(frame_cls.__name__, [frame_cls(encoding=3, text=value)])
        tags.save(path)

    def _apply_flac(self, path: Path, proposal: TagProposal) -> None:
        audio = FLAC(path)
        keys = {
            "title": "TITLE",
            "artist": "ARTIST",
            "album": "ALBUM",
            "album_artist": "ALBUMARTIST",
            "genre": "GENRE",
            "tracknumber": "TRACKNUMBER",
            "date": "DATE",
        }
        for key, value in self.desired_map(proposal).items():
            audio[keys[key]] = value
        audio.save()

    def _apply_mp4(self, path: Path, proposal: TagProposal) -> None:
        audio = MP4(path)
        keys = {
            "title": "\xa9nam",
            "artist": "\xa9ART",
            "album": "\xa9alb",
            "album_artist": "aART",
            "genre": "\xa9gen",
            "date": "\xa9day",
        }
        desired = self.desired_map(proposal)
        for key, atom in keys.items():
            value = desired.get(key)
            if value:
                audio[atom] = [value]
        if proposal.track is not None:
            audio["trkn"] = [(proposal.track, 0)]
        audio.save()
