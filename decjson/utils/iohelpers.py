# decjson/utils/iohelpers.py — small, safe file helpers for JSON output
from __future__ import annotations

import os
import sys
import tempfile

from ..constants import TEXT_ENCODING_DEFAULT

__all__ = [
    "read_text",
    "write_text_atomic",
    "ensure_parent_dir",
]


def ensure_parent_dir(path: str) -> str:
    """Create the directory that will hold path; return it (symlinks resolved)."""
    parent = os.path.dirname(os.path.realpath(path)) or "."
    os.makedirs(parent, exist_ok=True)
    return parent


def _fsync_dir(path: str) -> None:
    """Best-effort fsync on the directory that contains a recently renamed file."""
    try:
        dfd = os.open(path, os.O_DIRECTORY)
    except (OSError, AttributeError):
        return
    try:
        os.fsync(dfd)
    except OSError:
        pass
    finally:
        os.close(dfd)


def read_text(path: str, encoding: str = TEXT_ENCODING_DEFAULT) -> str:
    """Read a whole text file; '-' reads stdin."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding=encoding) as f:
        return f.read()


def write_text_atomic(path: str, text: str, encoding: str = TEXT_ENCODING_DEFAULT, mode: int = 0o644) -> None:
    """Replace path with text in one rename; readers never see a partial file."""
    d = ensure_parent_dir(path)
    fd, tmp = tempfile.mkstemp(prefix=".tmp.", dir=d)
    try:
        with os.fdopen(fd, "wb", closefd=True) as f:
            f.write(text.encode(encoding))
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, path)  # atomic on POSIX
        _fsync_dir(d)
    finally:
        # tmp only survives here when replace() was never reached
        if os.path.exists(tmp):
            os.remove(tmp)
