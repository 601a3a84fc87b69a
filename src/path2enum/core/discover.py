"""Tree scanning — enumerate directories and qualifying files under a root.

Unreadable directories (missing, permission denied, not a directory) are
skipped silently: a partially inaccessible tree still compiles, minus the
subtrees that could not be opened.  Names that are not valid UTF-8 are
kept, with the bad bytes replaced by U+FFFD in the logical path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from path2enum.model.entry import Entry, join_logical, normalize_prefix
from path2enum.utils.determinism import normalize_path

_logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("svg",)


def has_allowed_extension(file_name: str, allowed_extensions: Iterable[str]) -> bool:
    """Plain, case-sensitive suffix match: ``a.tar.gz`` matches ``gz``."""
    return any(file_name.endswith(f".{ext}") for ext in allowed_extensions)


def iter_entries(
    root: Path,
    allowed_extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    logical_prefix: str = "",
    *,
    seen: set[str] | None = None,
    follow_symlinks: bool = False,
) -> Iterator[Entry]:
    """Yield an ``Entry`` per directory and per qualifying file under *root*.

    Parameters
    ----------
    root:
        Directory to scan.  If it cannot be opened nothing is yielded.
    allowed_extensions:
        Extensions without the leading dot.
    logical_prefix:
        Prepended (with ``/``) to every logical path.
    seen:
        Logical paths already emitted.  Each call gets a fresh set unless
        one is passed in; pass a shared set to merge several scans.
    follow_symlinks:
        Symlinks are skipped unless this is set.  When following, a link
        that resolves to one of its own ancestors is not descended into.

    Order within a directory is whatever the filesystem returns; callers
    that need determinism sort afterwards.
    """
    exts = tuple(allowed_extensions)
    prefix = normalize_prefix(logical_prefix)
    if seen is None:
        seen = set()
    root_path = Path(root)
    ancestors = frozenset({_real(root_path)}) if follow_symlinks else frozenset()
    yield from _walk(root_path, root_path, exts, prefix, seen, follow_symlinks, ancestors)


def _lossy(text: str) -> str:
    """Replace undecodable filename bytes with U+FFFD.

    ``os.fsdecode`` smuggles such bytes through as lone surrogates, which
    no UTF-8 writer accepts.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _real(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path


def _walk(
    directory: Path,
    root: Path,
    exts: tuple[str, ...],
    prefix: str,
    seen: set[str],
    follow_symlinks: bool,
    ancestors: frozenset[Path],
) -> Iterator[Entry]:
    try:
        children = list(directory.iterdir())
    except OSError as exc:
        _logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for child in children:
        try:
            if child.is_symlink() and not follow_symlinks:
                continue
            is_dir = child.is_dir()
            is_file = not is_dir and child.is_file()
        except OSError:
            continue

        logical = join_logical(prefix, _lossy(normalize_path(child, root)))

        if is_dir:
            if logical not in seen:
                seen.add(logical)
                yield Entry(logical_path=logical, is_dir=True)

            child_ancestors = ancestors
            if follow_symlinks:
                real = _real(child)
                if real in ancestors:
                    _logger.debug("Not following %s: cycles back to %s", child, real)
                    continue
                child_ancestors = ancestors | {real}
            yield from _walk(
                child, root, exts, prefix, seen, follow_symlinks, child_ancestors
            )
        elif is_file and has_allowed_extension(child.name, exts):
            if logical not in seen:
                seen.add(logical)
                yield Entry(logical_path=logical, is_dir=False)


def scan(
    root: Path,
    allowed_extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    logical_prefix: str = "",
    *,
    follow_symlinks: bool = False,
) -> list[Entry]:
    """Materialize :func:`iter_entries` into a list."""
    entries = list(
        iter_entries(
            root,
            allowed_extensions,
            logical_prefix,
            follow_symlinks=follow_symlinks,
        )
    )
    _logger.debug("Scanned %s: %d entries", root, len(entries))
    return entries
