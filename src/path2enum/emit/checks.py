"""Checks shared by the source and load-time emitters."""

from __future__ import annotations

import keyword
import unicodedata

from path2enum.errors import EmitError
from path2enum.model.compiled_set import CompiledSet


def _is_enum_reserved(name: str) -> bool:
    """``_sunder_`` and ``__dunder__`` names are not allowed as members."""
    return len(name) > 2 and name[0] == "_" and name[-1] == "_"


def check_class_name(class_name: str) -> None:
    if not class_name.isidentifier() or keyword.iskeyword(class_name):
        raise EmitError(class_name, "class name is not a valid Python identifier")


def check_members(compiled: CompiledSet, *, attribute_access: bool = True) -> None:
    """Raise ``EmitError`` for the first identifier Python cannot hold.

    With *attribute_access* the names must also parse as Python
    identifiers (they become ``Cls.Name`` in source) and be NFKC-stable,
    since the parser normalizes identifiers.  In both modes two names
    equal after NFKC are refused.
    """
    normalized: dict[str, str] = {}
    for entry in compiled:
        name = entry.identifier
        if attribute_access:
            if not name.isidentifier():
                raise EmitError(
                    name, "not a valid Python identifier on this interpreter"
                )
            if keyword.iskeyword(name):
                raise EmitError(name, "is a Python keyword")
        if _is_enum_reserved(name):
            raise EmitError(name, "names of this shape are reserved by enum")
        nfkc = unicodedata.normalize("NFKC", name)
        if attribute_access and nfkc != name:
            raise EmitError(
                name, f"the parser would rename it to {nfkc!r} (NFKC normalization)"
            )
        other = normalized.setdefault(nfkc, name)
        if other != name:
            raise EmitError(name, f"equals {other!r} after NFKC normalization")
