"""Build the closed path type in memory, without generating source."""

from __future__ import annotations

from enum import Enum

from path2enum.emit.checks import check_class_name, check_members
from path2enum.model.compiled_set import CompiledSet


def _to_str(self: Enum) -> str:
    return self.value


def build_enum(compiled: CompiledSet, class_name: str = "Paths") -> type[Enum]:
    """Return a ``str``-valued Enum equivalent to the rendered module.

    Members are reachable as ``Cls[identifier]`` even when the identifier
    is not a Python keyword-safe attribute; ``Cls(path)`` is the reverse
    lookup.
    """
    check_class_name(class_name)
    check_members(compiled, attribute_access=False)

    directories = frozenset(e.identifier for e in compiled.directories())
    members = [(e.identifier, e.logical_path) for e in compiled]
    enum_cls = Enum(class_name, members, type=str, module=__name__)

    enum_cls.to_str = _to_str
    enum_cls.canonical_path = property(_to_str)
    enum_cls.is_dir = property(lambda self: self.name in directories)
    return enum_cls
