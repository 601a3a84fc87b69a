"""Render a ``CompiledSet`` as Python source declaring a ``str`` Enum.

The generated module has no timestamp, so regenerating an unchanged tree
gives byte-identical output that diffs cleanly in review.
"""

from __future__ import annotations

from path2enum import __version__
from path2enum.emit.checks import check_class_name, check_members
from path2enum.model.compiled_set import CompiledSet

_INDENT = "    "


def render_enum_module(
    compiled: CompiledSet,
    class_name: str = "Paths",
    *,
    source: str | None = None,
) -> str:
    """Return module text declaring ``class <class_name>(str, Enum)``.

    Each member's value is its canonical path, so ``Cls("a/b.svg")`` is the
    reverse lookup and ``Cls.AノBSvg.to_str()`` the forward one.

    Raises ``EmitError`` when a name cannot be written as a Python
    attribute.
    """
    check_class_name(class_name)
    check_members(compiled, attribute_access=True)

    origin = ""
    if source:
        # Escaped for the generated docstring.
        origin = " from " + source.replace("\\", "\\\\").replace('"', '\\"')
    lines: list[str] = [
        f'"""Paths{origin}, one member per directory and matching file.',
        "",
        f"Generated by path2enum {__version__}; do not edit by hand.",
        '"""',
        "",
        "from __future__ import annotations",
        "",
        "from enum import Enum",
        "",
    ]

    directories = [e.identifier for e in compiled.directories()]
    if directories:
        lines.append("_DIRECTORIES: frozenset[str] = frozenset(")
        lines.append(f"{_INDENT}{{")
        lines.extend(f"{_INDENT * 2}{name!r}," for name in directories)
        lines.append(f"{_INDENT}}}")
        lines.append(")")
    else:
        lines.append("_DIRECTORIES: frozenset[str] = frozenset()")

    lines += [
        "",
        "",
        f"class {class_name}(str, Enum):",
        f'{_INDENT}"""Closed set of logical paths; each value is the canonical path."""',
        "",
    ]
    lines.extend(
        f"{_INDENT}{entry.identifier} = {entry.logical_path!r}" for entry in compiled
    )
    if len(compiled):
        lines.append("")

    lines += [
        f"{_INDENT}def to_str(self) -> str:",
        f"{_INDENT * 2}return self.value",
        "",
        f"{_INDENT}@property",
        f"{_INDENT}def canonical_path(self) -> str:",
        f"{_INDENT * 2}return self.value",
        "",
        f"{_INDENT}@property",
        f"{_INDENT}def is_dir(self) -> bool:",
        f"{_INDENT * 2}return self.name in _DIRECTORIES",
    ]
    return "\n".join(lines) + "\n"
