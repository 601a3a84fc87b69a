"""Path model builder — dedup, name, collision-check and order entries."""

from __future__ import annotations

import logging
from typing import Iterable

from path2enum.core.synthesize import DEFAULT_POLICY, SynthesisPolicy, synthesize
from path2enum.errors import IdentifierCollisionError
from path2enum.model.compiled_set import CompiledEntry, CompiledSet
from path2enum.model.entry import Entry

_logger = logging.getLogger(__name__)


def dedupe_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Collapse entries sharing a logical path; the first one seen wins."""
    unique: dict[str, Entry] = {}
    for entry in entries:
        unique.setdefault(entry.logical_path, entry)
    return list(unique.values())


def find_collisions(
    named: Iterable[tuple[str, Entry]],
) -> list[tuple[str, str, str]]:
    """Return every ``(identifier, first_path, second_path)`` clash.

    Input is visited in logical-path order so the report does not depend
    on scan order.  With three paths on one identifier, each later path is
    reported against the first.
    """
    owners: dict[str, str] = {}
    collisions: list[tuple[str, str, str]] = []
    for identifier, entry in sorted(named, key=lambda item: item[1].logical_path):
        first = owners.setdefault(identifier, entry.logical_path)
        if first != entry.logical_path:
            collisions.append((identifier, first, entry.logical_path))
    return sorted(collisions)


def build_compiled_set(
    entries: Iterable[Entry],
    policy: SynthesisPolicy = DEFAULT_POLICY,
) -> CompiledSet:
    """Build the ordered, collision-free ``CompiledSet``.

    Raises
    ------
    IdentifierCollisionError
        If two distinct logical paths synthesize to the same identifier.
    """
    unique = dedupe_entries(entries)
    named = [(synthesize(e.logical_path, policy), e) for e in unique]

    collisions = find_collisions(named)
    if collisions:
        raise IdentifierCollisionError(collisions)

    compiled = tuple(
        CompiledEntry(identifier=ident, logical_path=e.logical_path, is_dir=e.is_dir)
        for ident, e in sorted(named, key=lambda item: item[0])
    )
    _logger.debug("Built %d compiled entries", len(compiled))
    return CompiledSet(entries=compiled)
