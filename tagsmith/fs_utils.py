"""Filename helpers for renaming tagged files inside their directory."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Optional

ELLIPSIS = "…"
MAX_BASENAME_BYTES = 255


def utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def path_exists(path: Path) -> Optional[bool]:
    """Like ``Path.exists`` but also answers for names too long to ``stat``.

    Returns ``None`` when the parent directory cannot be listed.
    """
    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        if exc.errno != errno.ENAMETOOLONG:
            raise
        try:
            return path.name in os.listdir(path.parent)
        except FileNotFoundError:
            return None
    return True


def fit_filename(path: Path, max_bytes: int = MAX_BASENAME_BYTES) -> Path:
    """Shorten the stem of ``path`` so the basename fits in ``max_bytes`` of UTF-8.

    The cut never splits a character and is marked with an ellipsis; the
    extension is always kept.
    """
    limit = max_bytes or MAX_BASENAME_BYTES
    if utf8_len(path.name) <= limit:
        return path
    budget = max(0, limit - utf8_len(path.suffix) - utf8_len(ELLIPSIS))
    stem = path.stem
    while stem and utf8_len(stem) > budget:
        stem = stem[:-1]
    stem = stem.rstrip() or "file"
    return path.with_name(f"{stem}{ELLIPSIS}{path.suffix}")


def rename_no_clobber(src: Path, dst: Path) -> None:
    """Rename ``src`` to ``dst`` unless a different file already sits at ``dst``."""
    if path_exists(dst) and not dst.samefile(src):
        raise FileExistsError(errno.EEXIST, "Target already exists", str(dst))
    try:
        src.rename(dst)
        return
    except OSError as exc:
        if exc.errno != errno.ENAMETOOLONG:
            raise
    # Fall back to directory-relative names when the full path is too long.
    src_dir_fd = os.open(src.parent, os.O_RDONLY)
    try:
        dst_dir_fd = os.open(dst.parent, os.O_RDONLY)
        try:
            os.rename(src.name, dst.name, src_dir_fd=src_dir_fd, dst_dir_fd=dst_dir_fd)
        finally:
            os.close(dst_dir_fd)
    finally:
        os.close(src_dir_fd)
