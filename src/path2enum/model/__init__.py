"""Enums shared across the synthesizer, config and CLI layers."""

from __future__ import annotations

from enum import Enum


class DotPolicy(str, Enum):
    """How ``.`` inside a path segment is rendered in the identifier."""

    SEPARATOR = "separator"  # word boundary: arrow-left.svg -> ArrowLeftSvg
    MARKER = "marker"        # reserved marker:  arrow-left.svg -> ArrowLeft・svg


class CasingMode(str, Enum):
    """How the first character of each word is raised."""

    UNICODE = "unicode"  # full Unicode ``str.upper``
    ASCII = "ascii"      # legacy: only ASCII letters are raised


class OutputFormat(str, Enum):
    JSON = "json"
    PYTHON = "python"
