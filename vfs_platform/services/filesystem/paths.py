"""Path helpers shared by the memory and local backends.

All filesystem paths use ``/`` as separator regardless of the host OS. A path
handed to a filesystem is interpreted relative to that filesystem's base; a
leading ``/`` denotes the base itself.
"""

from __future__ import annotations

import posixpath

SEPARATOR = "/"


def join(*elem: str) -> str:
    """Join path elements, ignoring empty ones, and normalise the result.

    Unlike ``posixpath.join`` an absolute element does not discard the
    elements before it: ``join("a", "/b")`` is ``"a/b"``.
    """
    parts = [e for e in elem if e]
    if not parts:
        return ""
    joined = SEPARATOR.join(parts)
    cleaned = posixpath.normpath(joined)
    # normpath keeps a leading "//" as-is
    if cleaned.startswith("//"):
        cleaned = SEPARATOR + cleaned.lstrip(SEPARATOR)
    return cleaned


def check_traversal(path: str) -> None:
    """Reject paths that try to climb out of the filesystem base."""
    if ".." in path.split(SEPARATOR):
        raise ValueError(f"Path traversal not allowed: {path}")


def split(path: str) -> list[str]:
    """Split a path into its non-empty segments (``.`` segments dropped)."""
    return [s for s in path.split(SEPARATOR) if s and s != "."]


def absolute(base: str, path: str) -> str:
    """Return the absolute, normalised form of *path* under *base*."""
    check_traversal(path)
    full = join(SEPARATOR, base, path)
    return full or SEPARATOR


def relative(base: str, full: str) -> str:
    """Return *full* relative to *base* (both absolute)."""
    rel = posixpath.relpath(full, base or SEPARATOR)
    return "" if rel == "." else rel


def basename(path: str) -> str:
    name = posixpath.basename(path.rstrip(SEPARATOR))
    return name or SEPARATOR
