"""Renderers that turn a ``CompiledSet`` into a closed Python type."""

from path2enum.emit.python_enum import render_enum_module
from path2enum.emit.runtime import build_enum

__all__ = ["build_enum", "render_enum_module"]
