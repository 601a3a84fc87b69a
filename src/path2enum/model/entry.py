"""Entry — one scanned directory or qualifying file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Entry:
    """Intermediate scan result, before identifier synthesis and dedup."""

    logical_path: str
    is_dir: bool


def normalize_prefix(prefix: str) -> str:
    """Return *prefix* with backslashes turned into ``/`` and no edge slashes."""
    return prefix.replace("\\", "/").strip("/")


def join_logical(prefix: str, rel_path: str) -> str:
    """Join a normalized prefix and a root-relative POSIX path."""
    if not prefix:
        return rel_path
    if not rel_path:
        return prefix
    return f"{prefix}/{rel_path}"
