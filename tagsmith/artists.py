from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Sequence, Set

ARTIST_SEPARATOR = re.compile(
    r"""
    \s+x\s+
    | \s+and\s+
    | \b(?:featuring|feat\.|feat\b|ft\.|ft\b)
    | \bw[/⧸]
    | [&,，]
    """,
    re.IGNORECASE | re.VERBOSE,
)


def separate_artists(text: str) -> List[str]:
    """Split a free-form artist string such as ``"A ft. B & C"`` into names.

    Fragments are trimmed and empty ones dropped, so a leading connector
    (``"feat. B"``) yields ``["B"]``.
    """
    parts = (part.strip() for part in ARTIST_SEPARATOR.split(text))
    return [part for part in parts if part]


def join_featured(names: Sequence[str]) -> str:
    """``["B", "C", "D"]`` -> ``"B, C & D"``."""
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} & {names[-1]}"


class ArtistList:
    """Insertion-ordered set of artist names."""

    __slots__ = ("_names", "_seen")

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: List[str] = []
        self._seen: Set[str] = set()
        self.extend(names)

    def add(self, name: str) -> bool:
        name = name.strip() if name else ""
        if not name or name in self._seen:
            return False
        self._seen.add(name)
        self._names.append(name)
        return True

    def extend(self, names: Iterable[str]) -> None:
        for name in names:
            self.add(name)

    def clear(self) -> None:
        self._names.clear()
        self._seen.clear()

    @property
    def primary(self) -> Optional[str]:
        return self._names[0] if self._names else None

    @property
    def featured(self) -> List[str]:
        return self._names[1:]

    def as_list(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArtistList):
            return self._names == other._names
        if isinstance(other, (list, tuple)):
            return self._names == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ArtistList({self._names!r})"
