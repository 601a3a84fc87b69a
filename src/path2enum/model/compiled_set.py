"""CompiledSet — the immutable, schema-aligned compilation artifact."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from path2enum import __version__

SCHEMA_VERSION = "compiled_set_v1"


@dataclass(frozen=True, slots=True)
class CompiledEntry:
    """One (identifier, logical path, directory flag) triple."""

    identifier: str
    logical_path: str
    is_dir: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "logical_path": self.logical_path,
            "is_dir": self.is_dir,
        }


@dataclass(frozen=True)
class CompiledSet:
    """Ordered, collision-free table produced by one compilation.

    Entries are sorted by identifier (codepoint order).  Built by
    ``core.builder.build_compiled_set``; never constructed by hand in
    production code.
    """

    entries: tuple[CompiledEntry, ...] = ()
    _by_identifier: dict[str, CompiledEntry] = field(
        init=False, repr=False, compare=False
    )
    _by_path: dict[str, CompiledEntry] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_identifier", {e.identifier: e for e in self.entries}
        )
        object.__setattr__(
            self, "_by_path", {e.logical_path: e for e in self.entries}
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CompiledEntry]:
        return iter(self.entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_identifier

    def lookup(self, identifier: str) -> str:
        """Return the canonical path for *identifier* (``KeyError`` if absent)."""
        return self._by_identifier[identifier].logical_path

    def identifier_for(self, logical_path: str) -> str:
        """Reverse of :meth:`lookup`."""
        return self._by_path[logical_path].identifier

    def identifiers(self) -> list[str]:
        return [e.identifier for e in self.entries]

    def directories(self) -> list[CompiledEntry]:
        return [e for e in self.entries if e.is_dir]

    def files(self) -> list[CompiledEntry]:
        return [e for e in self.entries if not e.is_dir]

    def to_dict(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self.entries]


@dataclass(slots=True)
class CompileResult:
    """Artifact envelope matching ``compiled_set.schema.json``.

    Constructed by ``core.runner`` once the set is built.
    """

    compiled: CompiledSet
    name: str = "Paths"
    config: dict = field(default_factory=dict)
    created_at: str = ""
    tool_version: str = __version__
    schema_version: str = SCHEMA_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Produce the full artifact JSON matching the schema."""
        directories = len(self.compiled.directories())
        return {
            "schema_version": self.schema_version,
            "tool_version": self.tool_version,
            "name": self.name,
            "created_at": self.created_at,
            "config": dict(self.config),
            "counts": {
                "total": len(self.compiled),
                "directories": directories,
                "files": len(self.compiled) - directories,
            },
            "entries": self.compiled.to_dict(),
        }
